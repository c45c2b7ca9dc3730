"""
Utilities for building and parsing sheet-qualified Excel addresses.

This module converts between zero-based column indices and column letters and
formats addresses such as "'Sheet1'!A2:D2" or "'Q1 Data'!B:B". It also extracts
row numbers back out of address text.
"""

import logging
import re

from openpyxl.utils import column_index_from_string, get_column_letter, quote_sheetname

logger = logging.getLogger(__name__)

# "...!A50:C50", "...!$AB$7" -> row number of the first cell
_FIRST_CELL_ROW = re.compile(r"!\$?[A-Za-z]{1,3}\$?(\d+)(?::|$)")


def column_letter(index: int) -> str:
    """
    Convert a 0-based column index to Excel column letters.

    Examples:
        >>> column_letter(0)
        'A'
        >>> column_letter(27)
        'AB'
    """
    if index < 0:
        raise ValueError(f"Column index must be >= 0, got {index}")
    return get_column_letter(index + 1)


def column_index(letters: str) -> int:
    """
    Convert Excel column letters to a 0-based column index.

    Examples:
        >>> column_index("A")
        0
        >>> column_index("ab")
        27
    """
    return column_index_from_string(letters.upper()) - 1


def range_address(
    title: str, min_col: int, min_row: int, max_col: int, max_row: int
) -> str:
    """
    Build a sheet-qualified A1 address from 1-based bounds.

    A range covering a single cell collapses to that cell's address.

    Examples:
        >>> range_address("Sheet1", 1, 50, 3, 50)
        "'Sheet1'!A50:C50"
        >>> range_address("Q1 Data", 2, 5, 2, 5)
        "'Q1 Data'!B5"
    """
    start = f"{get_column_letter(min_col)}{min_row}"
    end = f"{get_column_letter(max_col)}{max_row}"
    if start == end:
        return f"{quote_sheetname(title)}!{start}"
    return f"{quote_sheetname(title)}!{start}:{end}"


def column_address(title: str, index: int) -> str:
    """
    Build the whole-column address for a 0-based column index.

    Examples:
        >>> column_address("Sheet1", 1)
        "'Sheet1'!B:B"
    """
    letter = column_letter(index)
    return f"{quote_sheetname(title)}!{letter}:{letter}"


def parse_row_number(address) -> str | None:
    """
    Extract the row number of the first cell in a sheet-qualified address.

    Examples:
        >>> parse_row_number("Sheet1!A50:C50")
        '50'
        >>> parse_row_number("'Q1 Data'!$AB$7")
        '7'
        >>> parse_row_number("A1:C1") is None
        True

    Args:
        address: Address text such as "Sheet1!A50:C50"

    Returns:
        The row number as text, or None if the address has an unexpected shape
    """
    if not isinstance(address, str):
        return None
    match = _FIRST_CELL_ROW.search(address)
    if match is None:
        logger.debug(f"No row number in address '{address}'")
        return None
    return match.group(1)
