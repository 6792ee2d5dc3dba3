"""
Shared fixtures.

`FakeSheetStore` stands in for the Google Sheets adapter: it serves
grids from memory and applies row writes the way the Sheets API does
(None leaves a cell unchanged).
"""

import copy
import os

import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("LOG_LEVEL", "WARNING")

from sheet_api.config import ApiSettings  # noqa: E402
from sheet_api.services.cache import Cache  # noqa: E402
from sheet_api.services.workbook import Workbook  # noqa: E402

GRIDS = {
    "apiusers": [
        ["apiUser", "apiKey"],
        ["alice", "secret"],
        ["bob", "hunter2"],
    ],
    "users": [
        ["name", "email", "enabled"],
        ["Ann", "ann@example.com", True],
        ["Ben", "ben@example.com", False],
    ],
    "roles": [
        ["role"],
        ["admin"],
    ],
    "tasks": [
        ["title", "status", "enabled", "_hash"],
        ["Write docs", "a", True, ""],
        ["Fix bug", "b", True, ""],
        ["Old task", "a", False, ""],
        ["Plan", "a", True, ""],
    ],
    "notes": [
        ["text", "tags"],
        ["hello", '["x", "y"]'],
    ],
}


class FakeSheetStore:
    def __init__(self, grids):
        self.grids = copy.deepcopy(grids)
        self.reads: list[str] = []
        self.writes: list[tuple] = []

    def list_sheets(self):
        return [{"name": name} for name in self.grids]

    def read_grid(self, sheet_name):
        self.reads.append(sheet_name)
        return copy.deepcopy(self.grids.get(sheet_name, []))

    def write_row(self, sheet_name, row_index, column_count, values):
        self.writes.append((sheet_name, row_index, column_count, list(values)))
        grid = self.grids.setdefault(sheet_name, [])
        while len(grid) < row_index:
            grid.append([])
        row = grid[row_index - 1]
        while len(row) < column_count:
            row.append("")
        for i, value in enumerate(values[:column_count]):
            if value is not None:
                row[i] = value


@pytest.fixture
def store():
    return FakeSheetStore(GRIDS)


@pytest.fixture
def cache():
    return Cache()


@pytest.fixture
def settings():
    return ApiSettings(
        protected_sheets=frozenset({"users", "roles", "apiusers"}),
        api_sheets=("tasks",),
    )


@pytest.fixture
def workbook(store, cache, settings):
    return Workbook(store, cache, protected_sheets=settings.protected_sheets)


@pytest.fixture
def client(workbook, settings):
    """
    TestClient for the app, wired to the fake store.
    """
    from sheet_api.dependencies import get_settings, get_workbook
    from sheet_api.main import app

    app.dependency_overrides[get_workbook] = lambda: workbook
    app.dependency_overrides[get_settings] = lambda: settings
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def live_client(store, settings):
    """
    TestClient that keeps the app's own workbook and cache wiring, with
    only the store adapter and settings replaced.
    """
    from sheet_api.dependencies import get_settings, get_sheet_store
    from sheet_api.main import app

    app.dependency_overrides[get_sheet_store] = lambda: store
    app.dependency_overrides[get_settings] = lambda: settings
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
