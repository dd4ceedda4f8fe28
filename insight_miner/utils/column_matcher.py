"""Resolve free-text column references against a dataset's columns"""
import logging
from typing import List, Optional

from rapidfuzz.distance import Levenshtein

from ..models import Column, ROW_COUNT_COLUMN_ID, row_count_column

logger = logging.getLogger(__name__)

# Reference text that selects the row-count pseudo-column
ROW_COUNT_KEYWORD = "count"


def find_best_column(columns: List[Column], reference: str) -> Optional[Column]:
    """
    Find the column whose name is closest to a model-suggested reference.

    The exact keyword "count" always resolves to the row-count pseudo-column.
    Otherwise the column with the smallest case-sensitive Levenshtein distance
    between its display name and the reference wins, ties going to the column
    that comes first. No threshold is applied: any dataset with at least one
    column yields a match.

    Args:
        columns: Dataset columns in dataset order
        reference: Free-text column reference from the model

    Returns:
        Best matching column, or None when there is nothing to match against
    """
    if reference == ROW_COUNT_KEYWORD:
        return row_count_column()

    # A real column carrying the sentinel id would be mistaken for the row count
    candidates = []
    for column in columns:
        if column.id == ROW_COUNT_COLUMN_ID:
            logger.warning(
                f"Ignoring column '{column.name}': its id collides with the row-count sentinel"
            )
            continue
        candidates.append(column)

    if not candidates:
        return None

    # min() keeps the first of equally distant columns
    return min(candidates, key=lambda column: Levenshtein.distance(reference, column.name))
