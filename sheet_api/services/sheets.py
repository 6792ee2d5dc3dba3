"""
Google Sheets service.

Reads and writes the backing spreadsheet using a service account.
Only three operations are needed: list tabs, read a whole tab, and
overwrite a single row range.
"""

import logging
from typing import Any

from googleapiclient.discovery import build

from sheet_api.config import get_google_credentials
from sheet_api.services.rows import column_letter

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


def _get_sheets_service():
    credentials = get_google_credentials(SCOPES)
    return build("sheets", "v4", credentials=credentials, cache_discovery=False)


def quote_sheet_name(name: str) -> str:
    """Quote a tab name for A1 notation ("It's" -> "'It''s'")."""
    return "'" + name.replace("'", "''") + "'"


def row_range(sheet_name: str, row_index: int, column_count: int) -> str:
    """A1 range covering `column_count` cells of one row, starting at column A."""
    last = column_letter(max(column_count, 1))
    return f"{quote_sheet_name(sheet_name)}!A{row_index}:{last}{row_index}"


class GoogleSheetStore:
    """Sheet store backed by one spreadsheet in the Sheets API v4."""

    def __init__(self, spreadsheet_id: str, service=None):
        self.spreadsheet_id = spreadsheet_id
        self._service = service

    @property
    def service(self):
        if self._service is None:
            self._service = _get_sheets_service()
        return self._service

    def list_sheets(self) -> list[dict[str, str]]:
        result = (
            self.service.spreadsheets()
            .get(spreadsheetId=self.spreadsheet_id, fields="sheets.properties.title")
            .execute()
        )
        return [
            {"name": sheet["properties"]["title"]}
            for sheet in result.get("sheets", [])
        ]

    def read_grid(self, sheet_name: str) -> list[list[Any]]:
        """
        Read every populated cell of a tab.

        Values come back unformatted so numbers and booleans keep their
        types; dates are rendered as their displayed text.
        """
        result = (
            self.service.spreadsheets()
            .values()
            .get(
                spreadsheetId=self.spreadsheet_id,
                range=quote_sheet_name(sheet_name),
                valueRenderOption="UNFORMATTED_VALUE",
                dateTimeRenderOption="FORMATTED_STRING",
            )
            .execute()
        )
        return result.get("values", [])

    def write_row(
        self, sheet_name: str, row_index: int, column_count: int, values: list[Any]
    ) -> None:
        """
        Overwrite one row range. `row_index` is the 1-based sheet row.

        None values are sent as JSON null, which the API leaves unchanged.
        """
        range_name = row_range(sheet_name, row_index, column_count)
        logger.debug("Writing %d value(s) to %s", len(values), range_name)

        self.service.spreadsheets().values().update(
            spreadsheetId=self.spreadsheet_id,
            range=range_name,
            valueInputOption="RAW",
            body={"values": [values]},
        ).execute()
