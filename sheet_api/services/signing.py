"""
Content signatures.

Compact JSON text and MD5 hex digests, used for row `_hash` values,
cache keys and the change-detection hash of the catch-all route.
"""

import hashlib
import json
from typing import Any


def to_json(value: Any) -> str:
    """Serialize to compact JSON, keeping key insertion order."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)


def content_signature(text: str) -> str:
    return hashlib.md5(text.encode("utf-8")).hexdigest()
