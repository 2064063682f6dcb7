"""
Header Detector

Decides whether the first row of a sample holds column labels by comparing
its per-column kinds against the rows that follow it.
"""

import logging
from typing import Any, List, Sequence

from ..errors import HeaderDetectionError
from .asserter import Kind, classify_value

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_SIZE = 5


def kind_profile(row: Sequence[Any]) -> List[Kind]:
    """Kinds of each field of a row, in column order"""
    return [classify_value(field_value).kind for field_value in row]


def is_header_row(sample_rows: Sequence[Sequence[Any]], window_size: int = DEFAULT_WINDOW_SIZE) -> bool:
    """
    Check whether the first sample row is a label row

    The first row is a header as soon as any column of a later row (within
    the window) has a different kind than the same column of the first row.
    Columns beyond the width of the first row are not compared.

    Args:
        sample_rows: Leading rows of the file, first row included
        window_size: Number of rows (first row included) to inspect

    Returns:
        True when the first row looks like a header

    Raises:
        HeaderDetectionError: if no sample rows are given
        ValueError: if window_size is less than 1
    """
    if not sample_rows:
        raise HeaderDetectionError("header detection needs at least one sample row")
    if window_size < 1:
        raise ValueError(f"window_size must be at least 1, got {window_size}")

    window = min(window_size, len(sample_rows))
    reference = kind_profile(sample_rows[0])

    for row_index in range(1, window):
        row = sample_rows[row_index]
        for column, field_value in enumerate(row[:len(reference)]):
            kind = classify_value(field_value).kind
            if kind != reference[column]:
                logger.debug(
                    f"Row {row_index} column {column} is {kind.value}, "
                    f"first row has {reference[column].value}"
                )
                return True

    return False
