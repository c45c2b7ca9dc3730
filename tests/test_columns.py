"""
Tests for header-driven column lookups.

Run with: pytest tests/test_columns.py -v
"""

import openpyxl
import pytest

from worksheet_helpers.columns import (
    delete_columns,
    find_column_index,
    find_column_indices,
    get_column,
    get_column_labels,
    get_columns,
)
from worksheet_helpers.errors import HeaderNotFoundError
from worksheet_helpers.filtering import apply_values_filter, filter_and_count
from worksheet_helpers.ranges import (
    ColumnRange,
    hidden_columns,
    visible_columns,
    visible_rows,
)


def _letters_sheet():
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Letters"
    ws.append(["A", "B", "C", "D", "E"])
    ws.append(["a1", "b1", "c1", "d1", "e1"])
    ws.append(["a2", "b2", "c2", "d2", "e2"])
    return ws


class TestFindColumnIndex:
    """Test find_column_index / find_column_indices."""

    def test_every_header(self, people):
        """Each header resolves to its 0-based position."""
        for position, label in enumerate(["Name", "Status", "Date"]):
            assert find_column_index(people, label) == position

    def test_indices_keep_input_order(self, people):
        assert find_column_indices(people, ["Date", "Name", "Status"]) == [2, 0, 1]

    def test_case_insensitive_by_default(self, people):
        assert find_column_index(people, "status") == 1

    def test_match_case(self, people):
        with pytest.raises(HeaderNotFoundError):
            find_column_index(people, "status", match_case=True)

    def test_partial_match(self, people):
        """complete_match=False finds a header containing the label."""
        assert find_column_index(people, "Stat", complete_match=False) == 1
        with pytest.raises(HeaderNotFoundError):
            find_column_index(people, "Stat")

    def test_first_match_wins(self):
        ws = openpyxl.Workbook().active
        ws.append(["Id", "Total", "Total"])
        assert find_column_index(ws, "Total") == 1

    def test_missing_label(self, people):
        """Missing labels raise a ValueError that names the label."""
        with pytest.raises(HeaderNotFoundError) as exc_info:
            find_column_index(people, "Owner")
        error = exc_info.value
        assert isinstance(error, ValueError)
        assert error.label == "Owner"
        assert error.headers == ["Name", "Status", "Date"]
        assert "Owner" in str(error)

    def test_missing_label_in_list(self, people):
        with pytest.raises(HeaderNotFoundError):
            find_column_indices(people, ["Name", "Owner"])

    def test_used_range_not_at_a1(self):
        """Header row is the first used row; indices stay absolute."""
        ws = openpyxl.Workbook().active
        ws["C3"] = "Region"
        ws["D3"] = "Sales"
        ws["C4"] = "North"
        ws["D4"] = 10
        assert find_column_index(ws, "Region") == 2
        assert find_column_index(ws, "Sales") == 3
        assert get_column_labels(ws) == ["Region", "Sales"]

    def test_numeric_header(self):
        ws = openpyxl.Workbook().active
        ws.append(["Name", 2024, 2025.0])
        assert find_column_index(ws, "2024") == 1
        assert find_column_index(ws, "2025") == 2


class TestGetColumns:
    """Test get_column / get_columns."""

    def test_single(self, people):
        column = get_column(people, "Status")
        assert isinstance(column, ColumnRange)
        assert column.index == 1
        assert column.letter == "B"
        assert column.address == "'People'!B:B"
        assert column.values == [
            "Status",
            "Active",
            "Inactive",
            "Active",
            "Pending",
            "Active",
        ]

    def test_many(self, people):
        columns = get_columns(people, ["Date", "Name"])
        assert [column.letter for column in columns] == ["C", "A"]
        assert columns[1].cell(2).value == "Alice"

    def test_column_spans_from_row_one(self):
        """The column starts at row 1 even when the used range starts lower."""
        ws = openpyxl.Workbook().active
        ws["B3"] = "Score"
        ws["B4"] = 7
        column = get_column(ws, "Score")
        assert len(column.cells) == 4
        assert column.values == [None, None, "Score", 7]


def test_get_column_labels(people):
    assert get_column_labels(people) == ["Name", "Status", "Date"]


class TestDeleteColumns:
    """Test delete_columns, including index shifting between deletions."""

    def test_delete_two_columns(self):
        ws = _letters_sheet()
        deleted = delete_columns(ws, ["B", "D"])
        assert deleted == [3, 1]
        assert get_column_labels(ws) == ["A", "C", "E"]
        assert [c.value for c in ws[2]] == ["a1", "c1", "e1"]
        assert [c.value for c in ws[3]] == ["a2", "c2", "e2"]

    def test_label_order_does_not_matter(self):
        ws = _letters_sheet()
        delete_columns(ws, ["D", "B"])
        assert get_column_labels(ws) == ["A", "C", "E"]

    def test_adjacent_columns(self):
        ws = _letters_sheet()
        delete_columns(ws, ["B", "C", "D"])
        assert get_column_labels(ws) == ["A", "E"]
        assert [c.value for c in ws[2]] == ["a1", "e1"]

    def test_duplicate_labels_delete_once(self):
        ws = _letters_sheet()
        assert delete_columns(ws, ["B", "B"]) == [1]
        assert get_column_labels(ws) == ["A", "C", "D", "E"]

    def test_missing_label_leaves_sheet_untouched(self):
        ws = _letters_sheet()
        with pytest.raises(HeaderNotFoundError):
            delete_columns(ws, ["B", "Z"])
        assert get_column_labels(ws) == ["A", "B", "C", "D", "E"]

    def test_filter_follows_deleted_column(self, people):
        """Criteria on columns right of the deletion keep filtering their column."""
        apply_values_filter(people, 2, ["2024-01-01", "2024-01-03"])
        delete_columns(people, ["Name"])

        assert people.auto_filter.ref == "A1:B6"
        assert [column.colId for column in people.auto_filter.filterColumn] == [1]
        assert visible_rows(people) == [1, 2, 4]
        count = filter_and_count(people, "Status", ["Active", "Inactive", "Pending"])
        assert count == 2

    def test_criteria_on_deleted_column_dropped(self, people):
        apply_values_filter(people, 0, ["Alice"])
        delete_columns(people, ["Name"])

        assert list(people.auto_filter.filterColumn) == []
        assert visible_rows(people) == [1, 2, 3, 4, 5, 6]

    def test_hidden_column_follows_deletion(self, people):
        people["D1"] = "Extra"
        people.column_dimensions["C"].hidden = True
        delete_columns(people, ["Name"])

        assert get_column_labels(people) == ["Status", "Date", "Extra"]
        assert hidden_columns(people) == {2}
        assert visible_columns(people) == [1, 3]

    def test_hidden_group_shrinks(self, people):
        """A hidden span loses the deleted column and keeps the rest."""
        people["D1"] = "Extra"
        people.column_dimensions.group("B", "D", hidden=True)
        delete_columns(people, ["Date"])

        assert hidden_columns(people) == {2, 3}
        assert visible_columns(people) == [1]
