"""
worksheet-helpers - header-driven helpers for openpyxl worksheets.

This package locates columns by their header text, filters rows with the
worksheet autofilter, copies visible rows between sheets, deletes columns and
auto-fills formulas down a column.
"""

from worksheet_helpers.columns import (
    delete_columns,
    find_column_index,
    find_column_indices,
    get_column,
    get_column_labels,
    get_columns,
)
from worksheet_helpers.copying import copy_visible_rows, visible_rows_frame
from worksheet_helpers.errors import (
    HeaderNotFoundError,
    SheetNotFoundError,
    WorksheetHelperError,
)
from worksheet_helpers.fill import auto_fill_column, get_last_row_value
from worksheet_helpers.filtering import (
    apply_values_filter,
    clear_column_filter,
    filter_and_count,
    set_visible_cells,
)
from worksheet_helpers.ranges import ColumnRange
from worksheet_helpers.workbook import get_sheet, read_workbook, save_workbook

__version__ = "0.1.0"

__all__ = [
    "ColumnRange",
    "find_column_index",
    "find_column_indices",
    "get_column",
    "get_columns",
    "get_column_labels",
    "delete_columns",
    "filter_and_count",
    "apply_values_filter",
    "clear_column_filter",
    "set_visible_cells",
    "copy_visible_rows",
    "visible_rows_frame",
    "get_last_row_value",
    "auto_fill_column",
    "read_workbook",
    "get_sheet",
    "save_workbook",
    "WorksheetHelperError",
    "HeaderNotFoundError",
    "SheetNotFoundError",
]
