"""
Top-level request router.

Requests are dispatched on the `action` query parameter. Without one
the `none` route runs; an unknown action gets no response.
"""

import logging
from enum import Enum
from typing import Callable, Optional

from fastapi import Response

from sheet_api.config import ApiSettings
from sheet_api.schemas import GatewayRequest
from sheet_api.services import auth
from sheet_api.services.formatter import serve_jsonp
from sheet_api.services.workbook import Workbook

logger = logging.getLogger(__name__)

RouteHandler = Callable[[GatewayRequest], Optional[Response]]


class Action(str, Enum):
    NONE = "none"
    POLL = "poll"


class Router:
    def __init__(self) -> None:
        self._routes: dict[str, RouteHandler] = {}

    def register(self, name: str, handler: RouteHandler) -> None:
        self._routes[name] = handler

    def resolve(self, request: GatewayRequest) -> Optional[RouteHandler]:
        if request.has("action"):
            return self._routes.get(request.action)
        return self._routes.get(Action.NONE.value)

    def dispatch(self, request: GatewayRequest) -> Optional[Response]:
        handler = self.resolve(request)
        if handler is None:
            logger.warning("No route registered for action %r", request.action)
            return None
        return handler(request)


def build_router(workbook: Workbook, settings: ApiSettings) -> Router:
    """Router with the `none` and `poll` routes plus one route per API sheet."""
    router = Router()

    def serve_all(request: GatewayRequest) -> Response:
        return serve_jsonp(request, workbook.get_all_data())

    def poll(request: GatewayRequest) -> Response:
        all_data = workbook.get_all_data()
        if request.first("hash") != all_data["hash"]:
            return serve_jsonp(request, all_data)
        return serve_jsonp(request, all_data["hash"])

    router.register(Action.NONE.value, serve_all)
    router.register(Action.POLL.value, poll)

    for sheet_name in settings.api_sheets:
        router.register(sheet_name, _api_route(workbook, sheet_name, settings))

    return router


def _api_route(workbook: Workbook, sheet_name: str, settings: ApiSettings) -> RouteHandler:
    def handle(request: GatewayRequest) -> Optional[Response]:
        return auth.do_api_route(workbook, request, sheet_name, settings)

    return handle
