"""Last-row lookup and downward auto-fill."""

import datetime
import logging
import re
from copy import copy

from openpyxl.cell.cell import Cell
from openpyxl.formula.translate import Translator
from openpyxl.worksheet.formula import ArrayFormula
from openpyxl.worksheet.worksheet import Worksheet

from worksheet_helpers.cell_range_utils import parse_row_number
from worksheet_helpers.ranges import ColumnRange, last_row_address

logger = logging.getLogger(__name__)

# Row holding the pattern to propagate; row 1 is the header
SEED_ROW = 2

# "Item 9" -> ("Item ", "9")
_TRAILING_NUMBER = re.compile(r"^(.*?)(\d+)$", re.DOTALL)


def get_last_row_value(ws: Worksheet) -> str | None:
    """
    Get the number of the last used row, as text.

    Returns:
        The row number (e.g. "50"), or None if the last-row address could
        not be parsed
    """
    return parse_row_number(last_row_address(ws))


def _next_text(text: str, step: int) -> str:
    match = _TRAILING_NUMBER.match(text)
    if match is None:
        return text
    prefix, digits = match.groups()
    return prefix + str(int(digits) + step).zfill(len(digits))


def _fill_value(seed: Cell, target: Cell, step: int):
    """Value the fill handle puts ``step`` rows below ``seed``."""
    value = seed.value
    if isinstance(value, ArrayFormula):
        text = Translator(value.text, origin=seed.coordinate).translate_formula(
            target.coordinate
        )
        return ArrayFormula(ref=target.coordinate, text=text)
    if isinstance(value, str) and value.startswith("="):
        return Translator(value, origin=seed.coordinate).translate_formula(
            target.coordinate
        )
    if isinstance(value, (datetime.datetime, datetime.date)):
        return value + datetime.timedelta(days=step)
    if isinstance(value, str):
        return _next_text(value, step)
    return value


def auto_fill_column(ws: Worksheet, column: ColumnRange, last_row: str | int) -> int:
    """
    Fill a column downward from its second row.

    Follows Excel's default fill from a single cell:

    - formulas are shifted, so "=B2*C2" becomes "=B3*C3" on the next row
      while absolute references stay put; array formulas get their own ref
    - dates advance one day per row
    - text ending in a number counts up ("Item 1", "Item 2", ...), keeping
      leading zeros
    - other values (numbers, booleans, plain text, empty) are repeated

    The seed cell's style is copied along.

    Args:
        ws: Worksheet holding the column
        column: Column to fill
        last_row: Last row to fill (1-based), as text or int

    Returns:
        The number of cells written

    Raises:
        ValueError: If last_row is not a number
    """
    end = int(last_row)
    seed = ws.cell(row=SEED_ROW, column=column.index + 1)

    written = 0
    for row in range(SEED_ROW + 1, end + 1):
        target = ws.cell(row=row, column=column.index + 1)
        target.value = _fill_value(seed, target, row - SEED_ROW)
        if seed.has_style:
            target._style = copy(seed._style)
        written += 1

    logger.debug(
        f"Auto-filled {written} cell(s) in '{ws.title}' column {column.letter} "
        f"from {seed.coordinate}"
    )
    return written
