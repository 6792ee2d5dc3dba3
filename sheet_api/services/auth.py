"""
API user check in front of the sheet endpoints.

Callers identify themselves with `userid` and `userkey` query
parameters, matched against the `apiUser` / `apiKey` columns of the
API user sheet.
"""

import logging
from typing import Any, Optional

from fastapi import Response

from sheet_api.config import ApiSettings
from sheet_api.schemas import GatewayRequest
from sheet_api.services.endpoint import make_endpoint, resolve_verb, values_match
from sheet_api.services.formatter import serve_json
from sheet_api.services.workbook import Workbook

logger = logging.getLogger(__name__)

AUTH_ERROR = {"error": "user parameters for API access are incorrect"}


def get_api_user_data(
    workbook: Workbook, request: GatewayRequest, settings: ApiSettings
) -> list[dict[str, Any]]:
    userid = request.first("userid")
    userkey = request.first("userkey")
    return [
        user
        for user in workbook.get_sheet_values(settings.api_users_sheet)
        if values_match(user.get("apiUser"), userid)
        and values_match(user.get("apiKey"), userkey)
    ]


def authorize(workbook: Workbook, request: GatewayRequest, settings: ApiSettings) -> bool:
    users = get_api_user_data(workbook, request, settings)
    return bool(users and users[0])


def do_api_route(
    workbook: Workbook, request: GatewayRequest, sheet_name: str, settings: ApiSettings
) -> Optional[Response]:
    """
    Run the requested verb of `sheet_name` for an authorized API user.

    Returns None when the user is valid but the verb is unknown.
    """
    if not authorize(workbook, request, settings):
        logger.info("Rejected API request for sheet '%s'", sheet_name)
        return serve_json(AUTH_ERROR)

    verb = resolve_verb(request.method)
    if verb is None:
        logger.warning(
            "User %s requested invalid resource: sheet=%s method=%s",
            request.first("userid"),
            sheet_name,
            request.method,
        )
        return None

    handler = make_endpoint(workbook, sheet_name, settings)[verb]
    return serve_json(handler(request))
