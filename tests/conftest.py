"""
Pytest configuration file for test discovery and shared fixtures.

This file adds the src directory to Python path so that imports work correctly.
"""

import sys
from pathlib import Path

import openpyxl
import pytest

# Add src directory to Python path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

PEOPLE = [
    ("Name", "Status", "Date"),
    ("Alice", "Active", "2024-01-01"),
    ("Bob", "Inactive", "2024-01-02"),
    ("Carol", "Active", "2024-01-03"),
    ("Dan", "Pending", "2024-01-04"),
    ("Eve", "Active", "2024-01-05"),
]


@pytest.fixture
def workbook():
    """Workbook whose active sheet 'People' holds the PEOPLE table at A1."""
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "People"
    for row in PEOPLE:
        ws.append(row)
    return wb


@pytest.fixture
def people(workbook):
    return workbook["People"]


@pytest.fixture
def workbook_file(workbook, tmp_path):
    path = tmp_path / "people.xlsx"
    workbook.save(path)
    return path
