"""
Range handles and visibility queries over openpyxl worksheets.

openpyxl exposes cells and dimensions but no range objects for "a whole column"
or "the visible part of the used range". The helpers here provide those views.
They never cache anything, so every call reflects the worksheet as it is now.
"""

import datetime
import logging
from typing import Any, List, NamedTuple, Optional

from openpyxl.cell.cell import Cell
from openpyxl.utils import column_index_from_string, get_column_letter
from openpyxl.utils.cell import range_boundaries
from openpyxl.worksheet.worksheet import Worksheet

from worksheet_helpers.cell_range_utils import (
    column_address,
    column_letter,
    range_address,
)

logger = logging.getLogger(__name__)


class ColumnRange(NamedTuple):
    """A whole worksheet column, addressed by its 0-based index."""

    worksheet: Worksheet
    index: int

    @property
    def letter(self) -> str:
        return column_letter(self.index)

    @property
    def address(self) -> str:
        return column_address(self.worksheet.title, self.index)

    def cell(self, row: int) -> Cell:
        """Get the cell of this column at a 1-based row number."""
        return self.worksheet.cell(row=row, column=self.index + 1)

    @property
    def cells(self) -> tuple[Cell, ...]:
        """Cells from row 1 through the last row the worksheet holds."""
        return tuple(
            self.cell(row) for row in range(1, self.worksheet.max_row + 1)
        )

    @property
    def values(self) -> List[Any]:
        return [cell.value for cell in self.cells]

    def delete(self) -> None:
        """
        Delete this column, shifting the columns to its right one place left.

        openpyxl only moves the cells, so the autofilter range, its criteria
        and the column dimensions are shifted here the way Excel shifts them.
        Row visibility is not re-evaluated.
        """
        logger.debug(f"Deleting column {self.address}")
        column = self.index + 1
        self.worksheet.delete_cols(column)
        _shift_auto_filter(self.worksheet, column)
        _shift_column_dimensions(self.worksheet, column)


def _shift_auto_filter(ws: Worksheet, column: int) -> None:
    """Update the autofilter after the 1-based ``column`` was deleted."""
    if not ws.auto_filter.ref:
        return
    min_col, min_row, max_col, max_row = range_boundaries(ws.auto_filter.ref)
    if column > max_col:
        return
    if column < min_col:
        min_col -= 1
    else:
        col_id = column - min_col
        kept = []
        for criteria in ws.auto_filter.filterColumn:
            if criteria.colId == col_id:
                continue
            if criteria.colId > col_id:
                criteria.colId -= 1
            kept.append(criteria)
        ws.auto_filter.filterColumn = kept
    max_col -= 1

    if max_col < min_col:
        ws.auto_filter.ref = None
        ws.auto_filter.filterColumn = []
        return
    ws.auto_filter.ref = (
        f"{get_column_letter(min_col)}{min_row}:{get_column_letter(max_col)}{max_row}"
    )


def _column_span(dim) -> tuple[int, int]:
    low = dim.min or column_index_from_string(dim.index)
    return low, dim.max or low


def _shift_column_dimensions(ws: Worksheet, column: int) -> None:
    """Move column dimensions (width, hidden flag) left past a deleted column."""
    dims = list(ws.column_dimensions.values())
    ws.column_dimensions.clear()
    for dim in dims:
        low, high = _column_span(dim)
        if low > column:
            low, high = low - 1, high - 1
        elif column <= high:
            high -= 1
        if high < low:
            continue
        dim.index = get_column_letter(low)
        dim.min, dim.max = low, high
        ws.column_dimensions[dim.index] = dim


def used_range_address(ws: Worksheet) -> str:
    """Address of the used range, e.g. "'Sheet1'!A1:C50"."""
    return range_address(
        ws.title, ws.min_column, ws.min_row, ws.max_column, ws.max_row
    )


def last_row_address(ws: Worksheet) -> str:
    """Address of the last row of the used range, e.g. "'Sheet1'!A50:C50"."""
    return range_address(
        ws.title, ws.min_column, ws.max_row, ws.max_column, ws.max_row
    )


def is_row_hidden(ws: Worksheet, row: int) -> bool:
    # .get() so that a lookup does not create a dimension entry
    dim = ws.row_dimensions.get(row)
    return bool(dim is not None and dim.hidden)


def hidden_columns(ws: Worksheet) -> set[int]:
    """
    Collect the 1-based numbers of all hidden columns.

    Column dimensions loaded from a file may cover a span (min..max) under a
    single key, so each entry is expanded.
    """
    hidden = set()
    for dim in ws.column_dimensions.values():
        if not dim.hidden:
            continue
        low, high = _column_span(dim)
        hidden.update(range(low, high + 1))
    return hidden


def visible_rows(
    ws: Worksheet, min_row: Optional[int] = None, max_row: Optional[int] = None
) -> List[int]:
    """
    List the row numbers that are not hidden.

    Args:
        ws: Worksheet to inspect
        min_row: First row (1-based, inclusive), defaults to the used range's first row
        max_row: Last row (1-based, inclusive), defaults to the used range's last row

    Returns:
        Visible row numbers in ascending order
    """
    first = ws.min_row if min_row is None else min_row
    last = ws.max_row if max_row is None else max_row
    return [row for row in range(first, last + 1) if not is_row_hidden(ws, row)]


def visible_columns(ws: Worksheet) -> List[int]:
    """List the 1-based column numbers of the used range that are not hidden."""
    hidden = hidden_columns(ws)
    return [
        col
        for col in range(ws.min_column, ws.max_column + 1)
        if col not in hidden
    ]


def display_text(value: Any) -> str:
    """
    Render a cell value the way it is compared against filter and header text.

    Examples:
        >>> display_text(None)
        ''
        >>> display_text(3.0)
        '3'
        >>> display_text(True)
        'TRUE'
        >>> display_text(datetime.datetime(2024, 1, 5))
        '2024-01-05'
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, datetime.datetime) and value.time() == datetime.time():
        return value.date().isoformat()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
