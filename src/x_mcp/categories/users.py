"""
User MCP Tools for the X API.

Provides 3 user actions:
- follow_user: Follow a user as the authenticated user
- unfollow_user: Unfollow a user as the authenticated user
- get_user_by_username: Look up a user by handle
"""

from typing import Any

from ..models.operation import OperationSpec, ParamSpec
from ._shared import current_user_id, data_of


async def _action_follow_user(client, targetUserId: str) -> Any:
    user_id = await current_user_id(client)
    return data_of(await client.follow(user_id, targetUserId))


async def _action_unfollow_user(client, targetUserId: str) -> Any:
    user_id = await current_user_id(client)
    return data_of(await client.unfollow(user_id, targetUserId))


async def _action_get_user_by_username(client, username: str) -> Any:
    return data_of(await client.user_by_username(username.lstrip("@")))


OPERATIONS = (
    OperationSpec(
        name="follow_user",
        description="Follow a user",
        invoke=_action_follow_user,
        params=(
            ParamSpec("targetUserId", "string", "The ID of the user to follow", required=True),
        ),
    ),
    OperationSpec(
        name="unfollow_user",
        description="Unfollow a user",
        invoke=_action_unfollow_user,
        params=(
            ParamSpec("targetUserId", "string", "The ID of the user to unfollow", required=True),
        ),
    ),
    OperationSpec(
        name="get_user_by_username",
        description="Get a user by username",
        invoke=_action_get_user_by_username,
        read_only=True,
        params=(
            ParamSpec("username", "string", "The Twitter username (without @ symbol)", required=True),
        ),
    ),
)
