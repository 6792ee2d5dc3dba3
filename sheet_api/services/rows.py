"""
Row mapping between sheet grids and records.

A grid is the list of rows the Sheets API returns; row 0 holds the
headers. Records are dicts keyed by header, tagged with a positional
`_id` (1 = first data row).
"""

import json
from typing import Any

from sheet_api.services.signing import content_signature, to_json

ID_FIELD = "_id"
HASH_FIELD = "_hash"


def _reject_constant(name: str):
    raise ValueError(f"Unsupported JSON constant: {name}")


def parse_value(raw: Any) -> Any:
    """Parse a cell as JSON, or hand it back untouched if it isn't JSON."""
    if not isinstance(raw, str):
        return raw
    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except ValueError:
        return raw


def grid_to_records(grid: list[list[Any]]) -> list[dict[str, Any]]:
    """
    Convert a grid into records.

    Every data row becomes a dict with `_id` first, then one key per
    header cell. Rows shorter than the header are padded with "".
    """
    if not grid:
        return []

    headers = grid[0]
    records: list[dict[str, Any]] = []

    for line_id, row_values in enumerate(grid[1:], start=1):
        record: dict[str, Any] = {ID_FIELD: line_id}
        for i, header in enumerate(headers):
            raw = row_values[i] if i < len(row_values) else ""
            record[header] = parse_value(raw)
        records.append(record)

    return records


def headers_from_grid(grid: list[list[Any]]) -> list[str]:
    """Header list for a sheet that has no data rows to take keys from."""
    header_row = grid[0] if grid else []
    return [ID_FIELD] + [h for h in header_row if h != ID_FIELD]


def _cell(value: Any) -> Any:
    if isinstance(value, (dict, list)):
        return to_json(value)
    return value


def record_to_row(record: dict[str, Any], headers: list[str]) -> list[Any]:
    """
    Lay a record out in header order for a positional write.

    `_id` has no column. Fields the record lacks are written as None.
    `_hash`, when the sheet has one, is the signature of the row as
    written with its own slot blank.
    """
    row: list[Any] = []
    hash_index = None

    for header in headers:
        if header == ID_FIELD:
            continue
        if header == HASH_FIELD:
            hash_index = len(row)
            row.append("")
        else:
            row.append(_cell(record.get(header)))

    if hash_index is not None:
        row[hash_index] = content_signature(to_json(row))

    return row


def column_letter(index: int) -> str:
    """Convert a 1-based column number to its A1 letters (1 -> A, 27 -> AA)."""
    letters = ""
    while index > 0:
        index, remainder = divmod(index - 1, 26)
        letters = chr(ord("A") + remainder) + letters
    return letters


def extend(base: dict[str, Any], *overlays: dict[str, Any]) -> dict[str, Any]:
    """Overlay dicts left to right onto a copy of `base`; later keys win."""
    merged = dict(base)
    for overlay in overlays:
        merged.update(overlay)
    return merged
