"""
Trends MCP Tool for the X API.
"""

import sys
from typing import Any

from ..models.operation import OperationSpec, ParamSpec

WORLDWIDE_WOEID = 1


async def _action_get_trending_topics(client, woeid: float = WORLDWIDE_WOEID) -> Any:
    """Locations with trends available.

    woeid is accepted but not used for filtering: the call always returns the
    full list of trend locations.
    """
    print(f"[INFO] get_trending_topics: woeid={woeid} (not applied, listing all trend locations)",
          file=sys.stderr)
    return await client.trends_available()


OPERATIONS = (
    OperationSpec(
        name="get_trending_topics",
        description="Get trending topics",
        invoke=_action_get_trending_topics,
        read_only=True,
        params=(
            ParamSpec(
                "woeid", "number",
                "The 'Where On Earth ID' (WOEID) for the location (1 for worldwide)",
                default=WORLDWIDE_WOEID,
            ),
        ),
    ),
)
