"""
Workbook service.

Cached access to the sheets of the backing spreadsheet: records,
header lists, positional row writes and the catch-all data dump.
"""

import logging
from typing import Any, Iterable

from sheet_api.services.cache import Cache
from sheet_api.services.rows import (
    ID_FIELD,
    grid_to_records,
    headers_from_grid,
    record_to_row,
)
from sheet_api.services.signing import content_signature, to_json

logger = logging.getLogger(__name__)

HEADING_PREFIX = "heading"


class Workbook:
    def __init__(self, store, cache: Cache, protected_sheets: Iterable[str] = ()):
        self.store = store
        self.cache = cache
        self.protected_sheets = frozenset(protected_sheets)

    def get_sheet_values(self, name: str) -> list[dict[str, Any]]:
        cached = self.cache.get(name)
        if cached:
            return cached

        grid = self.store.read_grid(name)
        return self.cache.set(name, grid_to_records(grid))

    def get_sheet_headers(self, name: str) -> list[str]:
        """Header list of a sheet: `_id` followed by its header cells."""
        cached = self.cache.get(HEADING_PREFIX + name)
        values = self.get_sheet_values(name)
        if cached:
            return cached

        if values:
            headers = list(values[0].keys())
        else:
            headers = headers_from_grid(self.store.read_grid(name))
        return self.cache.set(HEADING_PREFIX + name, headers)

    def save_row(self, sheet: str, record: dict[str, Any]) -> bool:
        """
        Write a record back to the row its `_id` points at.

        Returns False without writing when the record has no `_id`.
        """
        line_id = record.get(ID_FIELD)
        if not line_id:
            return False

        headers = self.get_sheet_headers(sheet)
        values = record_to_row(record, headers)

        # +1 skips the header row; the `_id` entry has no column.
        self.store.write_row(sheet, int(line_id) + 1, len(headers) - 1, values)
        logger.debug("Saved row %s of sheet '%s'", line_id, sheet)
        return True

    def create_row(self, sheet: str, record: dict[str, Any]) -> dict[str, Any]:
        """Append a record after the last data row and return it with its `_id`."""
        records = self.get_sheet_values(sheet)
        created = dict(record)
        created[ID_FIELD] = len(records) + 1
        self.save_row(sheet, created)
        # The next create in this request must land on the row below.
        records.append(created)
        return created

    def list_sheet_names(self) -> list[str]:
        return [sheet["name"] for sheet in self.store.list_sheets()]

    def remove_protected(self, names: Iterable[str]) -> list[str]:
        return [name for name in names if name not in self.protected_sheets]

    def get_all_data(self, names: Iterable[str] = None) -> dict[str, Any]:
        """
        Records of every unprotected sheet, keyed by sheet name.

        A `hash` key holds the signature of the rest of the payload, so
        clients can tell when anything changed.
        """
        if names is None:
            names = self.remove_protected(self.list_sheet_names())

        data: dict[str, Any] = {}
        for name in names:
            data[name] = self.get_sheet_values(name)

        data["hash"] = content_signature(to_json(data))
        return data
