"""
Per-sheet API endpoints.

`make_endpoint` builds the verb handlers for one sheet. Handlers take
the inbound request and return plain JSON-able data; formatting and
authorization happen in `sheet_api.services.auth`.

Query parameters named after a sheet header act as field values: they
filter GET, fill in PUT, and overwrite fields on POST.
"""

import math
from collections.abc import Mapping
from enum import Enum
from typing import Any, Callable, Optional

from sheet_api.config import ApiSettings
from sheet_api.schemas import ApiParams, GatewayRequest
from sheet_api.services.rows import ID_FIELD, extend, parse_value
from sheet_api.services.workbook import Workbook

DEFAULT_LIMIT = 10
MAX_LIMIT = 250


class Verb(str, Enum):
    GET = "GET"
    PUT = "PUT"
    POST = "POST"
    DELETE = "DELETE"


Handler = Callable[[GatewayRequest], Any]


def resolve_verb(name: str) -> Optional[Verb]:
    try:
        return Verb(name)
    except ValueError:
        return None


def _as_number(text: Optional[str]) -> Optional[float]:
    if text is None:
        return None
    try:
        number = float(text)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def coerce_id(value: Any) -> int:
    """Positional `_id` from a record or query value; 0 when there is none."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        number = value
    else:
        number = _as_number(value)
    if number is None or number <= 0:
        return 0
    return int(number)


def values_match(value: Any, raw: Optional[str]) -> bool:
    """Whether a record value equals a query value, as text or parsed JSON."""
    if raw is None:
        return False
    return value == raw or value == parse_value(raw)


def get_api_params(
    request: GatewayRequest, headers: list[str], corrected_paging: bool = False
) -> ApiParams:
    """
    Read paging and field values from the request.

    `page` is one-based on the wire. Without `corrected_paging` the
    zero-based index is min(page - 1, 0), so it never moves past the
    first page; with it, max(page - 1, 0).
    """
    page = 0
    page_number = _as_number(request.first("page"))
    if page_number is not None:
        clamp = max if corrected_paging else min
        page = clamp(math.trunc(page_number - 1), 0)

    limit = DEFAULT_LIMIT
    limit_values = request.values("limit")
    if len(limit_values) == 1:
        limit_number = _as_number(limit_values[0])
        if limit_number is not None and math.trunc(limit_number) <= MAX_LIMIT:
            limit = math.trunc(limit_number)

    filters = {
        header: request.first(header) if request.has(header) else None
        for header in headers
    }

    return ApiParams(page=page, limit=limit, filters=filters)


def filter_data(
    request: GatewayRequest, records: list[dict[str, Any]], filters: Any
) -> list[dict[str, Any]]:
    """
    Keep the records that agree with the request on every filter key.

    Only keys actually sent in the request constrain the result; the
    filter values themselves are not compared. Anything other than a
    mapping of filters yields no records.
    """
    if not isinstance(filters, Mapping):
        return []

    active = [key for key in filters if request.has(key)]
    matched = []
    for record in records:
        if all(
            key in record and values_match(record[key], request.first(key))
            for key in active
        ):
            matched.append(record)
    return matched


def make_endpoint(
    workbook: Workbook, sheet_name: str, settings: ApiSettings
) -> dict[Verb, Handler]:
    """Build the verb handlers for `sheet_name`, bound to its current headers."""
    headers = workbook.get_sheet_headers(sheet_name)

    def params(request: GatewayRequest) -> ApiParams:
        return get_api_params(request, headers, settings.corrected_paging)

    def read(request: GatewayRequest) -> list[dict[str, Any]]:
        api_params = params(request)
        records = filter_data(
            request,
            workbook.get_sheet_values(sheet_name),
            extend({"enabled": True}, api_params.filters),
        )
        start = max(api_params.page * api_params.limit, 0)
        return records[start:start + api_params.limit]

    def create(request: GatewayRequest) -> dict[str, Any]:
        api_params = params(request)
        return workbook.create_row(
            sheet_name, extend({"enabled": True}, api_params.filters)
        )

    def disable(request: GatewayRequest) -> dict[str, Any]:
        api_params = params(request)
        record = {"enabled": False, ID_FIELD: coerce_id(api_params.filters.get(ID_FIELD))}
        workbook.save_row(sheet_name, record)
        return record

    def update(request: GatewayRequest) -> dict[str, Any]:
        # The existing record is looked up in the POST lookup sheet
        # ("users" by default), not in the sheet being written.
        api_params = params(request)
        lookup_id = api_params.filters.get(ID_FIELD) or 0
        matches = filter_data(
            request,
            workbook.get_sheet_values(settings.post_lookup_sheet),
            {ID_FIELD: lookup_id, "enabled": True},
        )
        merged = extend(matches[0] if matches else {}, api_params.filters)
        merged[ID_FIELD] = coerce_id(merged.get(ID_FIELD))
        workbook.save_row(sheet_name, merged)
        return merged

    return {
        Verb.GET: read,
        Verb.PUT: create,
        Verb.DELETE: disable,
        Verb.POST: update,
    }
