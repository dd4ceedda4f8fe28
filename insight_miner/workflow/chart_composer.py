"""Turn one chart intent into a fully specified chart"""
import logging

from ..exceptions import CompositionError
from ..models import (
    ChartIntent,
    Dataset,
    DimensionEncoding,
    GridPosition,
    MeasureEncoding,
    ResolvedChart,
)
from ..utils.chart_rules import clean_title, find_time_level, resolve_chart_type
from ..utils.column_matcher import find_best_column

logger = logging.getLogger(__name__)

# Two charts per row, each cell 24 x 20 layout units
GRID_COLUMNS = 2
CELL_WIDTH = 24
CELL_HEIGHT = 20

COUNT_AGGREGATION = "count"
INTEGER_FORMAT = ".0f"
DECIMAL_FORMAT = ".2f"


def grid_position(index: int) -> GridPosition:
    """Place the index-th chart in the two-column grid"""
    return GridPosition(
        row=(index // GRID_COLUMNS) * CELL_HEIGHT,
        col=(index % GRID_COLUMNS) * CELL_WIDTH,
        size_x=CELL_WIDTH,
        size_y=CELL_HEIGHT,
    )


def compose_chart(dataset: Dataset, intent: ChartIntent, index: int) -> ResolvedChart:
    """
    Resolve a chart intent against a dataset.

    Args:
        dataset: Dataset the chart is built on
        intent: Chart proposal from the model
        index: Zero-based position of the chart within the plan

    Returns:
        Resolved chart

    Raises:
        CompositionError: if the dataset has no column to bind an encoding to
    """
    chart_type = resolve_chart_type(intent.type)

    metric = find_best_column(dataset.columns, intent.metric)
    dimension = find_best_column(dataset.columns, intent.dimension)
    if metric is None or dimension is None:
        raise CompositionError(f"Dataset '{dataset.name}' has no columns to chart")

    # Counting rows only makes sense with a count aggregation
    aggregation = COUNT_AGGREGATION if metric.is_row_count else intent.metric_aggregation
    number_format = INTEGER_FORMAT if aggregation == COUNT_AGGREGATION else DECIMAL_FORMAT

    level = find_time_level(intent.title) if dimension.is_datetime else None

    chart = ResolvedChart(
        kind=chart_type.kind,
        title=clean_title(intent.title),
        measure_slot=chart_type.measure_slot,
        dimension_slot=chart_type.dimension_slot,
        measure=MeasureEncoding(column=metric, aggregation=aggregation, format=number_format),
        dimension=DimensionEncoding(column=dimension, level=level),
        position=grid_position(index),
        options=chart_type.options,
    )

    logger.debug(
        f"[{dataset.id}] Chart #{index}: {chart.kind.value} of {aggregation}({metric.name}) "
        f"by {dimension.name}"
    )
    return chart
