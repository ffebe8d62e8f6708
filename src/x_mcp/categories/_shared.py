"""
Shared helpers for the category modules.
"""

from typing import Any

from ..client import XApiError


def data_of(body: Any) -> Any:
    """Return the ``data`` member of an API body.

    Bodies without ``data`` (only inline ``errors``, say) come back whole so
    the partial error object still reaches the caller.
    """
    if isinstance(body, dict) and "data" in body:
        return body["data"]
    return body


async def current_user_id(client) -> str:
    """Look up the authenticated user's id (one ``GET /2/users/me`` call)."""
    me = await client.me()
    if not isinstance(me, dict) or "data" not in me:
        raise XApiError(200, me)
    return me["data"]["id"]
