"""
Header-driven column lookups.

Columns are located by the text of their header cell in the first row of the
used range. Every index returned or accepted here is 0-based and absolute on
the worksheet (column A is 0), regardless of where the used range starts.
"""

import logging
from typing import Any, List, Sequence

from openpyxl.worksheet.worksheet import Worksheet

from worksheet_helpers.errors import HeaderNotFoundError
from worksheet_helpers.ranges import ColumnRange, display_text

logger = logging.getLogger(__name__)


def get_column_labels(ws: Worksheet) -> List[Any]:
    """Return the first row of the used range as a flat list, left to right."""
    return [
        ws.cell(row=ws.min_row, column=col).value
        for col in range(ws.min_column, ws.max_column + 1)
    ]


def _header_matches(
    value: Any, label: str, match_case: bool, complete_match: bool
) -> bool:
    text = display_text(value)
    if not match_case:
        text, label = text.casefold(), label.casefold()
    if complete_match:
        return text == label
    return label in text


def find_column_index(
    ws: Worksheet,
    label: str,
    *,
    match_case: bool = False,
    complete_match: bool = True,
) -> int:
    """
    Find the 0-based index of the column whose header matches a label.

    The header row is searched left to right and the first match wins.

    Args:
        ws: Worksheet to search
        label: Header text to look for
        match_case: Compare case-sensitively
        complete_match: Require the whole header text to match; when False a
            header containing the label matches

    Returns:
        0-based absolute column index

    Raises:
        HeaderNotFoundError: If no header cell matches the label
    """
    label_text = display_text(label)
    for col in range(ws.min_column, ws.max_column + 1):
        value = ws.cell(row=ws.min_row, column=col).value
        if _header_matches(value, label_text, match_case, complete_match):
            return col - 1
    raise HeaderNotFoundError(label, ws.title, get_column_labels(ws))


def find_column_indices(
    ws: Worksheet, labels: Sequence[str], **options: bool
) -> List[int]:
    """
    Find the column index of every label, in the same order as the labels.

    Raises:
        HeaderNotFoundError: For the first label that is not present
    """
    return [find_column_index(ws, label, **options) for label in labels]


def get_column(ws: Worksheet, label: str, **options: bool) -> ColumnRange:
    """Return the whole column headed by a label."""
    return ColumnRange(ws, find_column_index(ws, label, **options))


def get_columns(
    ws: Worksheet, labels: Sequence[str], **options: bool
) -> List[ColumnRange]:
    """Return the whole columns headed by the labels, in input order."""
    return [
        ColumnRange(ws, index) for index in find_column_indices(ws, labels, **options)
    ]


def delete_columns(
    ws: Worksheet, labels: Sequence[str], **options: bool
) -> List[int]:
    """
    Delete the columns headed by the given labels.

    All labels are resolved before anything is deleted, so a missing label
    leaves the worksheet untouched. Columns are then removed right to left:
    deleting a column only shifts columns to its right, none of which are
    still waiting to be deleted. The autofilter and hidden-column flags move
    with the columns, and row visibility is re-evaluated afterwards since
    criteria on a deleted column no longer apply.

    Returns:
        The deleted column indices, in the order they were deleted
    """
    # filtering imports this module
    from worksheet_helpers.filtering import refresh_visibility

    indices = sorted(set(find_column_indices(ws, labels, **options)), reverse=True)
    for index in indices:
        ColumnRange(ws, index).delete()
    refresh_visibility(ws)
    logger.debug(f"Deleted {len(indices)} column(s) from '{ws.title}': {indices}")
    return indices
