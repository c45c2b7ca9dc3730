"""Loading and saving workbooks for the helpers."""

import logging
from pathlib import Path
from typing import Optional

import openpyxl
from openpyxl.workbook.workbook import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from worksheet_helpers.errors import SheetNotFoundError

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".xlsx", ".xlsm")


def read_workbook(file_path, data_only: bool = False) -> Workbook:
    """
    Open a workbook with openpyxl.

    Args:
        file_path: Path to the workbook
        data_only: Read cached formula results instead of formulas

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not a format openpyxl can edit
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    if path.suffix.lower() not in SUPPORTED_SUFFIXES:
        raise ValueError(
            f"Unsupported workbook format '{path.suffix}': expected one of "
            f"{', '.join(SUPPORTED_SUFFIXES)}"
        )
    logger.debug(f"Loading {path} (data_only={data_only})")
    return openpyxl.load_workbook(
        path, data_only=data_only, keep_vba=path.suffix.lower() == ".xlsm"
    )


def get_sheet(wb: Workbook, name: Optional[str] = None) -> Worksheet:
    """Get a worksheet by name, or the active worksheet when no name is given."""
    if name is None:
        return wb.active
    if name not in wb.sheetnames:
        raise SheetNotFoundError(name, wb.sheetnames)
    return wb[name]


def save_workbook(wb: Workbook, file_path) -> Path:
    path = Path(file_path)
    wb.save(path)
    logger.info(f"Saved workbook to {path}")
    return path
