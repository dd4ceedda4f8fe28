"""Prompt for planning a dashboard from a dataset schema"""
from ..models import Dataset

MAX_CHARTS = 6

# The JSON shape below is what utils.response_parser expects back
DASHBOARD_PLANNER_PROMPT = """### Given PostgreSQL schema:
#
# {dataset_name} ({column_names})
#
# Make a list of the {max_charts} most relevant charts to visualize, as JSON:
#
# {{
#   "dashboard_title": "Dashboard title",
#   "charts": [
#     {{
#       "title": "Chart title",
#       "type": "chart_type",
#       "metric": "metric",
#       "metric_aggregation": "aggregation",
#       "dimension": "dimension"
#     }}
#   ]
# }}

"""


def create_dashboard_prompt(dataset: Dataset) -> str:
    """
    Render the dashboard planning prompt for a dataset.

    Args:
        dataset: Dataset whose schema is described

    Returns:
        Complete prompt string
    """
    return DASHBOARD_PLANNER_PROMPT.format(
        dataset_name=dataset.name,
        column_names=", ".join(column.name for column in dataset.columns),
        max_charts=MAX_CHARTS,
    )
