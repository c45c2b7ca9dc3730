"""
Autofilter helpers.

openpyxl stores autofilter criteria in the worksheet but never hides rows by
itself; Excel re-evaluates the criteria when it opens the file. These helpers
write the criteria *and* apply them, hiding every data row of the autofilter
range that fails any column's criteria, so the visible view seen by the other
helpers matches what Excel would show.
"""

import logging
from typing import Any, Iterable, List

from openpyxl.utils.cell import range_boundaries
from openpyxl.worksheet.filters import FilterColumn, Filters
from openpyxl.worksheet.worksheet import Worksheet

from worksheet_helpers.columns import find_column_index
from worksheet_helpers.ranges import display_text, is_row_hidden, visible_rows

logger = logging.getLogger(__name__)


def _ensure_filter_range(ws: Worksheet) -> tuple[int, int, int, int]:
    """Return the autofilter bounds, creating the autofilter over the used range."""
    if not ws.auto_filter.ref:
        ws.auto_filter.ref = ws.dimensions
        logger.debug(f"Created autofilter on '{ws.title}' over {ws.dimensions}")
    return range_boundaries(ws.auto_filter.ref)


def _column_id(ws: Worksheet, column_index: int) -> int:
    """Convert an absolute column index to an id relative to the autofilter range."""
    min_col, _, max_col, _ = _ensure_filter_range(ws)
    col_id = column_index + 1 - min_col
    if not 0 <= col_id <= max_col - min_col:
        raise IndexError(
            f"Column index {column_index} is outside the autofilter range "
            f"{ws.auto_filter.ref} of sheet '{ws.title}'"
        )
    return col_id


def _row_passes(ws: Worksheet, row: int, min_col: int, criteria: List[tuple]) -> bool:
    for col_id, allowed in criteria:
        value = ws.cell(row=row, column=min_col + col_id).value
        if display_text(value).casefold() not in allowed:
            return False
    return True


def refresh_visibility(ws: Worksheet) -> int:
    """
    Re-evaluate the autofilter criteria and hide or show each data row.

    Only "values" criteria are evaluated; columns filtered some other way
    (custom, top 10, colour, or the date groups Excel writes for date
    columns) do not hide rows.

    Returns:
        The number of hidden data rows
    """
    if not ws.auto_filter.ref:
        return 0
    min_col, min_row, _, max_row = range_boundaries(ws.auto_filter.ref)

    criteria = []
    for column in ws.auto_filter.filterColumn:
        if column.filters is None or column.filters.dateGroupItem:
            logger.debug(f"Skipping non-value criteria on column id {column.colId}")
            continue
        allowed = {text.casefold() for text in column.filters.filter}
        if column.filters.blank:
            allowed.add("")
        criteria.append((column.colId, allowed))

    hidden = 0
    for row in range(min_row + 1, max_row + 1):
        hide = not _row_passes(ws, row, min_col, criteria)
        if hide:
            ws.row_dimensions[row].hidden = True
            hidden += 1
        elif is_row_hidden(ws, row):
            ws.row_dimensions[row].hidden = False
    logger.debug(f"Autofilter on '{ws.title}' hides {hidden} row(s)")
    return hidden


def apply_values_filter(
    ws: Worksheet, column_index: int, values: Iterable[Any]
) -> None:
    """
    Filter a column of the autofilter range down to a set of values.

    Any earlier criteria on the same column are replaced; criteria on other
    columns keep applying. An empty string in ``values`` selects blank cells.

    Args:
        ws: Worksheet to filter
        column_index: 0-based absolute column index
        values: Cell values to keep visible, compared by their text, ignoring case
    """
    col_id = _column_id(ws, column_index)
    texts = [display_text(value) for value in values]
    column = FilterColumn(
        colId=col_id,
        filters=Filters(blank="" in texts, filter=[t for t in texts if t != ""]),
    )
    ws.auto_filter.filterColumn = [
        existing for existing in ws.auto_filter.filterColumn if existing.colId != col_id
    ] + [column]
    logger.debug(f"Filtering '{ws.title}' column {column_index} on {texts}")
    refresh_visibility(ws)


def clear_column_filter(ws: Worksheet, column_index: int) -> None:
    """Remove the criteria of one column; the rest of the autofilter stays active."""
    col_id = _column_id(ws, column_index)
    ws.auto_filter.filterColumn = [
        existing for existing in ws.auto_filter.filterColumn if existing.colId != col_id
    ]
    logger.debug(f"Cleared filter on '{ws.title}' column {column_index}")
    refresh_visibility(ws)


def filter_and_count(
    ws: Worksheet, label: str, values: Iterable[Any], clear_filter: bool = False
) -> int:
    """
    Filter the column headed by ``label`` and count the visible data rows.

    Args:
        ws: Worksheet to filter
        label: Header text of the column to filter on
        values: Cell values to keep visible
        clear_filter: Clear this column's criteria after counting

    Returns:
        Visible rows of the used range, excluding the header row

    Raises:
        HeaderNotFoundError: If ``label`` is not a header
    """
    column_index = find_column_index(ws, label)
    apply_values_filter(ws, column_index, values)
    count = len(visible_rows(ws)) - 1
    if clear_filter:
        clear_column_filter(ws, column_index)
    return count


def set_visible_cells(ws: Worksheet, column_index: int, value: Any) -> int:
    """
    Write a value into a column for every visible row below the header.

    Hidden rows and the header row keep their contents.

    Returns:
        The number of cells written
    """
    rows = visible_rows(ws)[1:]
    for row in rows:
        ws.cell(row=row, column=column_index + 1).value = value
    logger.debug(
        f"Set {len(rows)} visible cell(s) in '{ws.title}' column {column_index}"
    )
    return len(rows)
