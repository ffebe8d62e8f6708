"""
List Management MCP Tools for the X API.

Provides 4 list actions:
- create_list: Create a list (public unless isPrivate)
- add_list_member: Add a user to a list
- remove_list_member: Remove a user from a list
- get_owned_lists: Lists owned by the authenticated user
"""

from typing import Any, Optional

from ..models.operation import OperationSpec, ParamSpec
from ._shared import current_user_id, data_of


async def _action_create_list(
    client,
    name: str,
    description: Optional[str] = None,
    isPrivate: bool = False,
) -> Any:
    return data_of(await client.create_list(name, description=description, private=isPrivate))


async def _action_add_list_member(client, listId: str, userId: str) -> Any:
    return data_of(await client.add_list_member(listId, userId))


async def _action_remove_list_member(client, listId: str, userId: str) -> Any:
    return data_of(await client.remove_list_member(listId, userId))


async def _action_get_owned_lists(client) -> Any:
    user_id = await current_user_id(client)
    return data_of(await client.lists_owned(user_id))


OPERATIONS = (
    OperationSpec(
        name="create_list",
        description="Create a list",
        invoke=_action_create_list,
        params=(
            ParamSpec("name", "string", "The name of the list", required=True),
            ParamSpec("description", "string", "Optional description for the list"),
            ParamSpec("isPrivate", "boolean", "Whether the list should be private", default=False),
        ),
    ),
    OperationSpec(
        name="add_list_member",
        description="Add a member to a list",
        invoke=_action_add_list_member,
        params=(
            ParamSpec("listId", "string", "The ID of the list", required=True),
            ParamSpec("userId", "string", "The ID of the user to add", required=True),
        ),
    ),
    OperationSpec(
        name="remove_list_member",
        description="Remove a member from a list",
        invoke=_action_remove_list_member,
        params=(
            ParamSpec("listId", "string", "The ID of the list", required=True),
            ParamSpec("userId", "string", "The ID of the user to remove", required=True),
        ),
    ),
    OperationSpec(
        name="get_owned_lists",
        description="Get all lists owned by the authenticated user",
        invoke=_action_get_owned_lists,
        read_only=True,
    ),
)
