"""
Copy the visible part of a worksheet elsewhere.

Only values travel: formatting, filter state and hidden rows stay behind on the
source sheet. openpyxl does not evaluate formulas, so a formula cell has no
value to copy unless the workbook was loaded with ``data_only=True``; such
cells are written as empty cells and reported with a warning.
"""

import logging

import pandas as pd
from openpyxl.cell.cell import TYPE_FORMULA
from openpyxl.worksheet.formula import ArrayFormula
from openpyxl.worksheet.worksheet import Worksheet

from worksheet_helpers.ranges import visible_columns, visible_rows

logger = logging.getLogger(__name__)


def _is_formula(cell) -> bool:
    return cell.data_type == TYPE_FORMULA or isinstance(cell.value, ArrayFormula)


def copy_visible_rows(source: Worksheet, target: Worksheet) -> tuple[int, int]:
    """
    Copy the values of the visible cells of ``source`` into ``target`` at A1.

    Visible rows (and columns) are packed together in the target, the way a
    paste of a filtered selection behaves. Target cells outside the pasted
    block are not touched.

    Args:
        source: Sheet to copy from, typically with an active filter
        target: Sheet to paste into

    Returns:
        Tuple of (rows copied, columns copied)
    """
    rows = visible_rows(source)
    columns = visible_columns(source)
    skipped_formulas = 0

    for target_row, source_row in enumerate(rows, start=1):
        for target_col, source_col in enumerate(columns, start=1):
            cell = source.cell(row=source_row, column=source_col)
            value = cell.value
            if _is_formula(cell):
                skipped_formulas += 1
                value = None
            target.cell(row=target_row, column=target_col).value = value

    if skipped_formulas:
        logger.warning(
            f"{skipped_formulas} formula cell(s) on '{source.title}' have no cached "
            f"value and were copied as empty; load the workbook with data_only=True "
            f"to copy computed results"
        )
    logger.debug(
        f"Copied {len(rows)} row(s) x {len(columns)} column(s) "
        f"from '{source.title}' to '{target.title}'"
    )
    return len(rows), len(columns)


def visible_rows_frame(ws: Worksheet) -> pd.DataFrame:
    """
    Build a DataFrame from the visible rows of the used range.

    The first visible row supplies the column names; every other visible row
    becomes a record. Hidden columns are left out.
    """
    rows = visible_rows(ws)
    columns = visible_columns(ws)
    if not rows:
        return pd.DataFrame()

    header = [ws.cell(row=rows[0], column=col).value for col in columns]
    records = [
        [ws.cell(row=row, column=col).value for col in columns] for row in rows[1:]
    ]
    return pd.DataFrame(records, columns=header)
