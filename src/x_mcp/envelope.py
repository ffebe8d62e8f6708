"""
Response envelope for X MCP tools.

Every tool call, successful or not, answers with a single text block holding
pretty-printed JSON. Callers tell failures apart by the payload shape
(an ``error`` key), not by the envelope.
"""

import json
from typing import Any, Dict

from .client import XApiError


def build_envelope(value: Any) -> Dict[str, Any]:
    """Wrap a result (or error payload) in the MCP text envelope.

    Strings are assumed to be JSON already and are passed through unchanged.
    """
    if isinstance(value, str):
        text = value
    else:
        text = json.dumps(value, indent=2, ensure_ascii=False, default=str)
    return {"content": [{"type": "text", "text": text}]}


def error_payload(exc: Exception) -> Dict[str, Any]:
    """Convert a raised remote failure into a JSON-safe payload."""
    payload = {
        "_success": False,
        "error": str(exc),
        "exception_type": type(exc).__name__,
    }
    if isinstance(exc, XApiError):
        payload["status"] = exc.status
        if exc.title:
            payload["title"] = exc.title
        if exc.detail:
            payload["detail"] = exc.detail
        payload["data"] = exc.data
    return payload
