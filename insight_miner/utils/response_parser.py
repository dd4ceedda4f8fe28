"""Parse completion text into a chart plan"""
import json
import logging

from ..exceptions import ResponseParseError
from ..models import ChartIntent, ChartPlan
from .chart_rules import clean_title

logger = logging.getLogger(__name__)


def parse_chart_plan(response_text: str) -> ChartPlan:
    """
    Parse the model's raw answer into a ChartPlan.

    The text must be strict JSON holding an object with a list of charts.
    Individual chart fields are not validated here; missing or odd values
    become empty text and take the default resolution paths later on.

    Args:
        response_text: Raw completion text

    Returns:
        Parsed chart plan

    Raises:
        ResponseParseError: if no usable plan can be read from the text
    """
    try:
        data = json.loads(response_text)
    except (TypeError, json.JSONDecodeError) as e:
        raise ResponseParseError(f"Result was not valid JSON: {e}", raw_text=response_text or "") from e

    if not isinstance(data, dict):
        raise ResponseParseError(
            f"Expected a JSON object, got {type(data).__name__}", raw_text=response_text
        )

    charts = data.get("charts")
    if not isinstance(charts, list):
        raise ResponseParseError("Response has no 'charts' list", raw_text=response_text)

    intents = []
    for position, chart in enumerate(charts):
        if not isinstance(chart, dict):
            raise ResponseParseError(
                f"Chart #{position} is {type(chart).__name__}, expected an object",
                raw_text=response_text,
            )
        intents.append(ChartIntent(**{field: chart.get(field) for field in ChartIntent.model_fields}))

    title = data.get("dashboard_title")
    title = clean_title(title) if isinstance(title, str) else ""

    logger.debug(f"Parsed plan '{title}' with {len(intents)} chart(s)")
    return ChartPlan(dashboard_title=title, charts=intents)
