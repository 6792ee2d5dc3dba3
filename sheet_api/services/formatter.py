"""
JSON and JSONP responses.
"""

import re
from typing import Any

from fastapi import Response

from sheet_api.schemas import GatewayRequest
from sheet_api.services.signing import to_json

MEDIA_TYPE = "application/javascript"

# Dotted JavaScript identifier path, e.g. "cb" or "jQuery123.done".
_CALLBACK_RE = re.compile(r"^[A-Za-z_$][\w$]*(\.[A-Za-z_$][\w$]*)*$")


def serve_json(content: Any) -> Response:
    return Response(content=to_json(content), media_type=MEDIA_TYPE)


def serve_jsonp(request: GatewayRequest, content: Any) -> Response:
    """Wrap the JSON in the `prefix` callback when one is given, else plain JSON."""
    prefix = request.prefix
    if prefix and prefix != "undefined" and _CALLBACK_RE.match(prefix):
        return Response(content=f"{prefix}({to_json(content)})", media_type=MEDIA_TYPE)
    return serve_json(content)
