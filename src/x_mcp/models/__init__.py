"""
Data models for the X MCP server: credential configurations and
declarative operation specs.
"""

from .credentials import (
    CredentialConfig,
    MissingCredentialError,
    PerCallCredentials,
    StaticCredentials,
    load_static_credentials,
)
from .operation import (
    OperationSpec,
    ParamSpec,
    ToolCallRequest,
    ToolValidationError,
    UnknownOperationError,
)

__all__ = [
    'CredentialConfig',
    'MissingCredentialError',
    'PerCallCredentials',
    'StaticCredentials',
    'load_static_credentials',
    'OperationSpec',
    'ParamSpec',
    'ToolCallRequest',
    'ToolValidationError',
    'UnknownOperationError',
]
