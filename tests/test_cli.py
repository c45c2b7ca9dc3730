"""
Tests for the worksheet-helpers command line tool.

Each test writes the PEOPLE workbook to a temp file, runs a command and checks
either the printed output or the saved workbook.
"""

import openpyxl

from worksheet_helpers.cli import main
from worksheet_helpers.ranges import visible_rows


def _load(path, sheet="People"):
    return openpyxl.load_workbook(path)[sheet]


def test_labels(workbook_file, capsys):
    assert main([str(workbook_file), "labels"]) == 0
    out = capsys.readouterr().out
    for label in ("Name", "Status", "Date"):
        assert label in out


def test_last_row(workbook_file, capsys):
    assert main([str(workbook_file), "last-row"]) == 0
    assert capsys.readouterr().out.strip() == "6"


def test_count_saves_filter(workbook_file, tmp_path, capsys):
    output = tmp_path / "filtered.xlsx"
    argv = [str(workbook_file), "--output", str(output), "count"]
    argv += ["--column", "Status", "--value", "Active"]

    assert main(argv) == 0
    assert capsys.readouterr().out.strip() == "3"
    assert visible_rows(_load(output)) == [1, 2, 4, 6]
    # input file is left as it was
    assert visible_rows(_load(workbook_file)) == [1, 2, 3, 4, 5, 6]


def test_count_with_clear(workbook_file, capsys):
    argv = [str(workbook_file), "count", "--column", "Status"]
    argv += ["--value", "Active", "--value", "Pending", "--clear"]

    assert main(argv) == 0
    assert capsys.readouterr().out.strip() == "4"
    assert visible_rows(_load(workbook_file)) == [1, 2, 3, 4, 5, 6]


def test_copy_visible(workbook_file):
    argv = [str(workbook_file), "copy-visible", "--target", "Pending"]
    argv += ["--column", "Status", "--value", "Pending"]

    assert main(argv) == 0
    target = _load(workbook_file, "Pending")
    assert [list(row) for row in target.iter_rows(values_only=True)] == [
        ["Name", "Status", "Date"],
        ["Dan", "Pending", "2024-01-04"],
    ]


def test_delete_columns(workbook_file):
    assert main([str(workbook_file), "delete-columns", "Status", "Name"]) == 0
    ws = _load(workbook_file)
    assert [c.value for c in ws[1]] == ["Date"]


def test_set_visible(workbook_file):
    argv = [str(workbook_file), "set-visible", "--column", "Status"]
    argv += ["--value", "Pending", "--set", "Active", "--clear"]

    assert main(argv) == 0
    ws = _load(workbook_file)
    assert ws["B5"].value == "Active"
    assert ws["B3"].value == "Inactive"
    assert visible_rows(ws) == [1, 2, 3, 4, 5, 6]


def test_fill(workbook_file):
    wb = openpyxl.load_workbook(workbook_file)
    ws = wb["People"]
    ws["D1"] = "Year"
    ws["D2"] = "=LEFT(C2,4)"
    wb.save(workbook_file)

    assert main([str(workbook_file), "fill", "--column", "Year"]) == 0
    ws = _load(workbook_file)
    assert ws["D6"].value == "=LEFT(C6,4)"


def test_unknown_header(workbook_file, capsys):
    argv = [str(workbook_file), "count", "--column", "Owner", "--value", "x"]
    assert main(argv) == 1
    assert "not found" in capsys.readouterr().err


def test_unknown_sheet(workbook_file, capsys):
    assert main([str(workbook_file), "--sheet", "Orders", "labels"]) == 1
    assert "Orders" in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.xlsx"), "labels"]) == 1
    assert "File not found" in capsys.readouterr().err
