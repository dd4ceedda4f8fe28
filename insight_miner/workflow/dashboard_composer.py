"""Compose and persist a dashboard for one dataset"""
import json
import logging
from typing import Any, Dict, Optional

from ..config import settings
from ..exceptions import ResponseParseError
from ..models import ChartPlan, CompositionResult, Dashboard, Dataset
from ..prompts.dashboard_planner import create_dashboard_prompt
from ..services.completion_client import CompletionClient, get_completion_client
from ..services.platform_client import CumulioClient, get_cumulio_client
from ..utils.chart_rules import clean_title
from ..utils.response_parser import parse_chart_plan
from .chart_composer import compose_chart

logger = logging.getLogger(__name__)

DESCRIPTION_TEMPLATE = (
    "This is a dashboard based on the set '{dataset_name}' that was autogenerated "
    "by Cumul.io Insight Mining (v1)."
)


def force_show_titles(dashboard: Dict[str, Any]) -> Dict[str, Any]:
    """Switch on the title of every view in a rendered dashboard"""
    for view in dashboard.get("contents", {}).get("views", []):
        view.setdefault("options", {})["showTitle"] = True
    return dashboard


class DashboardComposer:
    """Plans a dashboard with the completion model and saves it to the platform"""

    def __init__(
        self,
        platform_client: Optional[CumulioClient] = None,
        completion_client: Optional[CompletionClient] = None
    ):
        self.platform_client = platform_client or get_cumulio_client()
        self.completion_client = completion_client or get_completion_client()
        self.language = settings.DASHBOARD_LANGUAGE

    def build_dashboard(self, dataset: Dataset, plan: ChartPlan) -> Dashboard:
        """
        Assemble the dashboard for a parsed plan.

        Args:
            dataset: Source dataset
            plan: Parsed chart plan

        Returns:
            Dashboard with one resolved chart per plan entry, in plan order
        """
        title = clean_title(plan.dashboard_title) or dataset.name
        charts = [compose_chart(dataset, intent, index) for index, intent in enumerate(plan.charts)]

        return Dashboard(
            dataset_id=dataset.id,
            name=f"{settings.DASHBOARD_NAME_PREFIX}{title}",
            description=DESCRIPTION_TEMPLATE.format(dataset_name=dataset.name),
            theme=settings.DASHBOARD_THEME,
            charts=charts,
        )

    async def compose(self, dataset: Dataset) -> CompositionResult:
        """
        Compose and persist a dashboard for a dataset.

        Never raises: every failure is logged with the dataset id and reported
        in the result, and nothing is persisted unless the whole dashboard
        could be assembled.

        Args:
            dataset: Newly detected dataset

        Returns:
            Outcome of the composition
        """
        logger.info(f"[{dataset.id}] Composing new dashboard for set '{dataset.name}'")

        try:
            prompt = create_dashboard_prompt(dataset)
            logger.debug(f"[{dataset.id}] Prompt\n{prompt}")

            response_text = await self.completion_client.complete(prompt)
            logger.info(f"[{dataset.id}] Completion response: {response_text!r}")
        except Exception as e:
            logger.exception(f"[{dataset.id}] Completion request failed")
            return CompositionResult(dataset_id=dataset.id, success=False, error=str(e))

        try:
            plan = parse_chart_plan(response_text)
        except ResponseParseError as e:
            logger.error(f"[{dataset.id}] No plan produced: {e}")
            return CompositionResult(dataset_id=dataset.id, success=False, error=str(e))

        logger.info(f"[{dataset.id}] Parsed plan\n{json.dumps(plan.model_dump(), indent=2)}")

        try:
            dashboard = self.build_dashboard(dataset, plan)
            payload = force_show_titles(dashboard.to_securable(self.language))
            dashboard_id = await self.platform_client.create_dashboard(payload)
        except Exception as e:
            logger.exception(f"[{dataset.id}] Encountered issue while composing dashboard")
            return CompositionResult(dataset_id=dataset.id, success=False, error=str(e))

        logger.info(f"[{dataset.id}] Dashboard {dashboard_id} created with {len(dashboard.charts)} chart(s)")
        return CompositionResult(
            dataset_id=dataset.id,
            success=True,
            dashboard_id=dashboard_id,
            chart_count=len(dashboard.charts),
        )
