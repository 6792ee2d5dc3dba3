"""
Gateway endpoints.

`/` runs the action router (catch-all data and polling); `/api/{sheet}`
runs the authorized verb handlers of one sheet. GET and POST are
handled the same way, from the query string.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from googleapiclient.errors import HttpError

from sheet_api.config import ApiSettings
from sheet_api.dependencies import get_router, get_settings, get_workbook
from sheet_api.schemas import GatewayRequest
from sheet_api.services import auth
from sheet_api.services.router import Router
from sheet_api.services.workbook import Workbook

logger = logging.getLogger(__name__)

router = APIRouter(tags=["gateway"])


def _gateway_request(request: Request) -> GatewayRequest:
    return GatewayRequest.from_items(request.query_params.multi_items())


def _or_no_content(response):
    # Unknown actions and verbs have nothing to send back.
    if response is None:
        return Response(status_code=204)
    return response


@router.api_route("/", methods=["GET", "POST"])
def dispatch(
    gateway_request: GatewayRequest = Depends(_gateway_request),
    action_router: Router = Depends(get_router),
):
    """
    Dispatch on the `action` parameter.
    """
    try:
        response = action_router.dispatch(gateway_request)
    except HttpError as e:
        logger.error("Spreadsheet request failed for action %r: %s", gateway_request.action, e)
        raise HTTPException(status_code=500, detail=f"Failed to read sheet: {e}")

    return _or_no_content(response)


@router.api_route("/api/{sheet_name}", methods=["GET", "POST"])
def api_sheet(
    sheet_name: str,
    gateway_request: GatewayRequest = Depends(_gateway_request),
    workbook: Workbook = Depends(get_workbook),
    settings: ApiSettings = Depends(get_settings),
):
    """
    Run the `method` verb (GET, PUT, POST, DELETE) on one sheet for an API user.
    """
    try:
        response = auth.do_api_route(workbook, gateway_request, sheet_name, settings)
    except HttpError as e:
        logger.error("Spreadsheet request failed for sheet '%s': %s", sheet_name, e)
        raise HTTPException(status_code=500, detail=f"Failed to access sheet '{sheet_name}': {e}")

    return _or_no_content(response)
