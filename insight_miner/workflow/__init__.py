"""Dashboard composition workflow"""
from .chart_composer import compose_chart
from .dashboard_composer import DashboardComposer
from .poller import DatasetPoller, SeenSet

__all__ = [
    "compose_chart",
    "DashboardComposer",
    "DatasetPoller",
    "SeenSet",
]
