"""Rule-based mapping from model chart descriptions to platform chart kinds"""
import logging
from typing import List, Tuple

from ..models import ChartKind, ChartOption, ChartTypeMatch

logger = logging.getLogger(__name__)

# Checked in order, so "stacked bar" must come before "bar"
CHART_TYPE_RULES: List[Tuple[Tuple[str, ...], ChartTypeMatch]] = [
    (
        ("stacked bar",),
        ChartTypeMatch(
            kind=ChartKind.BAR,
            measure_slot="measure",
            dimension_slot="y-axis",
            options=[ChartOption(name="mode", value="stacked")],
        ),
    ),
    (("bar",), ChartTypeMatch(kind=ChartKind.BAR, measure_slot="measure", dimension_slot="y-axis")),
    (("line",), ChartTypeMatch(kind=ChartKind.LINE, measure_slot="measure", dimension_slot="x-axis")),
    (
        ("pie", "donut"),
        ChartTypeMatch(kind=ChartKind.DONUT, measure_slot="measure", dimension_slot="category"),
    ),
    (("area",), ChartTypeMatch(kind=ChartKind.AREA, measure_slot="measure", dimension_slot="x-axis")),
    # No scatter kind is wired up yet; scatter requests render as bars
    (("scatter",), ChartTypeMatch(kind=ChartKind.BAR, measure_slot="measure", dimension_slot="y-axis")),
    (
        ("column",),
        ChartTypeMatch(kind=ChartKind.COLUMN, measure_slot="measure", dimension_slot="category"),
    ),
]

DEFAULT_CHART_TYPE = ChartTypeMatch(kind=ChartKind.BAR, measure_slot="measure", dimension_slot="y-axis")

# Datetime levels: 1=year, 2=quarter, 3=month, 4=week, 5=day, 6=hour, 7=minute, 8=second
TIME_LEVEL_KEYWORDS: List[Tuple[str, int]] = [
    ("year", 1),
    ("quarter", 2),
    ("month", 3),
    ("week", 4),
    ("hour", 6),
    ("minute", 7),
    ("second", 8),
]

DEFAULT_TIME_LEVEL = 5


def resolve_chart_type(chart_type: str) -> ChartTypeMatch:
    """
    Map a free-text chart type to a supported chart kind.

    Matching is a case-sensitive substring test against the rules in order.
    Unknown descriptions never fail: they fall back to a bar chart.

    Args:
        chart_type: Chart type text suggested by the model

    Returns:
        Chart kind with its slot names and fixed options
    """
    for keywords, match in CHART_TYPE_RULES:
        if any(keyword in chart_type for keyword in keywords):
            if "scatter" in keywords:
                logger.debug(f"Chart type '{chart_type}' rendered as {match.kind.value}")
            return match.model_copy(deep=True)

    logger.warning(f"Encountered unknown chart type '{chart_type}', substituting {DEFAULT_CHART_TYPE.kind.value}")
    return DEFAULT_CHART_TYPE.model_copy(deep=True)


def find_time_level(title: str) -> int:
    """
    Pick a datetime level from keywords in a chart title.

    Args:
        title: Chart title text

    Returns:
        Level number, day level when no keyword is present
    """
    lowered = title.lower()
    for keyword, level in TIME_LEVEL_KEYWORDS:
        if keyword in lowered:
            return level
    return DEFAULT_TIME_LEVEL


def clean_title(title: str) -> str:
    """Remove double quotes the model tends to leave in titles"""
    return title.replace('"', "")
