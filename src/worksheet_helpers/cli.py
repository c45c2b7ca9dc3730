"""
Run the worksheet helpers against a workbook file.

Usage:
    worksheet-helpers report.xlsx labels
    worksheet-helpers report.xlsx count --column Status --value Active --clear
    worksheet-helpers report.xlsx --output out.xlsx copy-visible --target Active \\
        --column Status --value Active
"""

import argparse
import logging
import sys
from typing import Optional

from openpyxl.workbook.workbook import Workbook
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from worksheet_helpers.columns import (
    delete_columns,
    find_column_index,
    get_column,
    get_column_labels,
)
from worksheet_helpers.copying import copy_visible_rows
from worksheet_helpers.errors import WorksheetHelperError
from worksheet_helpers.filtering import (
    apply_values_filter,
    clear_column_filter,
    filter_and_count,
    set_visible_cells,
)
from worksheet_helpers.fill import auto_fill_column, get_last_row_value
from worksheet_helpers.workbook import get_sheet, read_workbook, save_workbook

console = Console()
error_console = Console(stderr=True)

logger = logging.getLogger(__name__)


def configure_logging(level: str = "WARNING") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=error_console, rich_tracebacks=True)],
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="worksheet-helpers",
        description="Filter, copy, delete and fill worksheet columns by header label",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show the header labels of the active sheet
  worksheet-helpers data.xlsx labels

  # Count rows whose Status is Active or Pending, then remove the filter
  worksheet-helpers data.xlsx count --column Status \\
      --value Active --value Pending --clear

  # Drop two columns and save to a new file
  worksheet-helpers data.xlsx --output trimmed.xlsx delete-columns Notes Internal
        """,
    )
    parser.add_argument("input_file", help="Path to the workbook (.xlsx, .xlsm)")
    parser.add_argument("--sheet", help="Worksheet name (default: active sheet)")
    parser.add_argument(
        "--output", help="Where to save changes (default: overwrite input_file)"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("labels", help="List the header labels")

    count = commands.add_parser("count", help="Filter a column and count visible rows")
    _add_filter_arguments(count, required=True)
    count.add_argument(
        "--clear", action="store_true", help="Clear the column filter after counting"
    )

    copy_cmd = commands.add_parser(
        "copy-visible", help="Copy visible rows to another sheet"
    )
    copy_cmd.add_argument("--target", required=True, help="Target sheet name")
    _add_filter_arguments(copy_cmd, required=False)

    delete = commands.add_parser("delete-columns", help="Delete columns by label")
    delete.add_argument("labels", nargs="+", help="Header labels to delete")

    set_cmd = commands.add_parser(
        "set-visible", help="Filter a column, then set a value in its visible cells"
    )
    _add_filter_arguments(set_cmd, required=True)
    set_cmd.add_argument(
        "--set", dest="new_value", required=True, help="Value to write"
    )
    set_cmd.add_argument(
        "--clear", action="store_true", help="Clear the column filter afterwards"
    )

    commands.add_parser("last-row", help="Print the last used row number")

    fill = commands.add_parser("fill", help="Auto-fill a column from its second row")
    fill.add_argument("--column", required=True, help="Header label of the column")
    fill.add_argument(
        "--last-row", help="Last row to fill (default: last used row of the sheet)"
    )
    return parser


def _add_filter_arguments(parser: argparse.ArgumentParser, required: bool) -> None:
    parser.add_argument("--column", required=required, help="Header label to filter on")
    parser.add_argument(
        "--value",
        dest="values",
        action="append",
        default=[],
        help="Value to keep visible (repeatable)",
    )


def _print_labels(ws) -> None:
    table = Table(title=f"Headers of '{ws.title}'")
    table.add_column("Index", justify="right")
    table.add_column("Label")
    for offset, label in enumerate(get_column_labels(ws)):
        table.add_row(str(ws.min_column - 1 + offset), str(label))
    console.print(table)


def run(args: argparse.Namespace) -> Optional[Workbook]:
    """
    Execute one command.

    Returns:
        The workbook if the command modified it, otherwise None
    """
    wb = read_workbook(args.input_file)
    ws = get_sheet(wb, args.sheet)
    logger.info(f"Running '{args.command}' on sheet '{ws.title}'")

    if args.command == "labels":
        _print_labels(ws)
        return None

    if args.command == "last-row":
        console.print(get_last_row_value(ws))
        return None

    if args.command == "count":
        count = filter_and_count(ws, args.column, args.values, clear_filter=args.clear)
        console.print(count)
        return wb

    if args.command == "copy-visible":
        if args.column:
            apply_values_filter(ws, find_column_index(ws, args.column), args.values)
        if args.target in wb.sheetnames:
            target = wb[args.target]
        else:
            target = wb.create_sheet(args.target)
        rows, columns = copy_visible_rows(ws, target)
        console.print(f"Copied {rows} row(s) x {columns} column(s) to '{target.title}'")
        return wb

    if args.command == "delete-columns":
        deleted = delete_columns(ws, args.labels)
        console.print(f"Deleted {len(deleted)} column(s)")
        return wb

    if args.command == "set-visible":
        column_index = find_column_index(ws, args.column)
        apply_values_filter(ws, column_index, args.values)
        written = set_visible_cells(ws, column_index, args.new_value)
        if args.clear:
            clear_column_filter(ws, column_index)
        console.print(f"Wrote {written} cell(s)")
        return wb

    if args.command == "fill":
        last_row = args.last_row or get_last_row_value(ws)
        if last_row is None:
            raise ValueError(f"Could not determine the last row of '{ws.title}'")
        written = auto_fill_column(ws, get_column(ws, args.column), last_row)
        console.print(f"Filled {written} cell(s)")
        return wb

    raise ValueError(f"Unknown command: {args.command}")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        wb = run(args)
    except (WorksheetHelperError, FileNotFoundError, ValueError, IndexError) as exc:
        error_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        return 1

    if wb is not None:
        save_workbook(wb, args.output or args.input_file)
    return 0


if __name__ == "__main__":
    sys.exit(main())
