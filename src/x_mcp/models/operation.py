"""
Declarative operation specs for the tool catalogue.

An OperationSpec couples a tool name, its parameter schema (ParamSpec per
field, with required flags and defaults) and the coroutine that performs the
remote work. Validation and JSON-schema generation live here so the
dispatcher and the transport read the same definition.
"""

import copy
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Tuple

_NO_DEFAULT = object()

_JSON_TYPES = {
    "string": (str,),
    "integer": (int,),
    "number": (int, float),
    "boolean": (bool,),
    "array": (list, tuple),
}


class ToolValidationError(ValueError):
    """Tool arguments do not satisfy the operation's schema."""


class UnknownOperationError(KeyError):
    """No operation with the requested name is registered."""


def _is_type(value: Any, json_type: str) -> bool:
    # bool is an int subclass; keep it out of numeric fields
    if json_type in ("integer", "number") and isinstance(value, bool):
        return False
    if json_type == "integer" and isinstance(value, float):
        return value.is_integer()
    return isinstance(value, _JSON_TYPES[json_type])


@dataclass(frozen=True)
class ParamSpec:
    name: str
    type: str
    description: str
    required: bool = False
    default: Any = _NO_DEFAULT
    items: Optional[str] = None
    enum: Optional[Tuple[Any, ...]] = None

    def __post_init__(self):
        if self.type not in _JSON_TYPES:
            raise ValueError(f"Unsupported parameter type '{self.type}' for {self.name}")
        if self.required and self.has_default:
            raise ValueError(f"Required parameter '{self.name}' cannot declare a default")

    @property
    def has_default(self) -> bool:
        return self.default is not _NO_DEFAULT

    def json_schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {"type": self.type, "description": self.description}
        if self.type == "array":
            item_schema: Dict[str, Any] = {"type": self.items or "string"}
            if self.enum:
                item_schema["enum"] = list(self.enum)
            schema["items"] = item_schema
        elif self.enum:
            schema["enum"] = list(self.enum)
        if self.has_default:
            schema["default"] = copy.deepcopy(self.default)
        return schema

    def check(self, value: Any) -> Any:
        """Type-check a supplied value and return it in canonical form."""
        if not _is_type(value, self.type):
            raise ToolValidationError(
                f"Parameter '{self.name}' must be of type {self.type}, got {type(value).__name__}"
            )
        if self.type == "integer":
            return int(value)
        if self.type == "array":
            items = list(value)
            for item in items:
                if self.items and not _is_type(item, self.items):
                    raise ToolValidationError(
                        f"Items of '{self.name}' must be of type {self.items}"
                    )
                if self.enum and item not in self.enum:
                    raise ToolValidationError(
                        f"Invalid value '{item}' for '{self.name}'. "
                        f"Valid values: {', '.join(map(str, self.enum))}"
                    )
            return items
        if self.enum and value not in self.enum:
            raise ToolValidationError(
                f"Invalid value '{value}' for '{self.name}'. "
                f"Valid values: {', '.join(map(str, self.enum))}"
            )
        return value


Invoke = Callable[..., Awaitable[Any]]


@dataclass(frozen=True)
class OperationSpec:
    name: str
    description: str
    invoke: Invoke
    params: Tuple[ParamSpec, ...] = ()
    read_only: bool = False

    @property
    def defaults(self) -> Dict[str, Any]:
        return {p.name: p.default for p in self.params if p.has_default}

    def validate(self, arguments: Mapping[str, Any]) -> Dict[str, Any]:
        """Validate arguments, fill defaults and drop unknown fields.

        Raises:
            ToolValidationError: Missing required field or wrong value type
        """
        missing = [p.name for p in self.params if p.required and arguments.get(p.name) is None]
        if missing:
            raise ToolValidationError(
                f"Missing required parameter(s) for '{self.name}': {', '.join(missing)}"
            )

        validated = {}
        for param in self.params:
            value = arguments.get(param.name)
            if value is None:
                if param.has_default:
                    validated[param.name] = copy.deepcopy(param.default)
                continue
            validated[param.name] = param.check(value)
        return validated

    def json_schema(self, extra_params: Tuple[ParamSpec, ...] = ()) -> Dict[str, Any]:
        """JSON schema for the tool's arguments, as published to MCP clients."""
        params: List[ParamSpec] = list(self.params) + list(extra_params)
        return {
            "type": "object",
            "properties": {p.name: p.json_schema() for p in params},
            "required": [p.name for p in params if p.required],
        }


@dataclass(frozen=True)
class ToolCallRequest:
    operation_name: str
    params: Mapping[str, Any] = field(default_factory=dict)
