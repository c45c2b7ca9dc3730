"""Exceptions raised by the worksheet helpers."""


class WorksheetHelperError(Exception):
    """Base class for errors raised by this package."""


class HeaderNotFoundError(WorksheetHelperError, ValueError):
    """A header label is not present in the header row of a worksheet."""

    def __init__(self, label, sheet_title: str, headers=None):
        self.label = label
        self.sheet_title = sheet_title
        self.headers = list(headers or [])
        super().__init__(
            f"Header '{label}' not found in sheet '{sheet_title}' "
            f"(available: {self.headers})"
        )


class SheetNotFoundError(WorksheetHelperError, KeyError):
    """A worksheet name is not present in the workbook."""

    def __init__(self, name: str, sheetnames=None):
        self.name = name
        self.sheetnames = list(sheetnames or [])
        super().__init__(f"Sheet '{name}' not found (available: {self.sheetnames})")

    def __str__(self) -> str:
        return self.args[0]
