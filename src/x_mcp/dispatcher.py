"""
Tool dispatcher: one generic routine for every catalogue operation.

handle() looks up the operation, validates and defaults the arguments,
resolves a client through the client factory, runs the operation once and
wraps whatever came back (payload or error) in the response envelope.
"""

import sys
from typing import Any, Dict, Mapping

from .envelope import build_envelope, error_payload
from .models.operation import OperationSpec, ToolCallRequest, UnknownOperationError


class Dispatcher:
    """Route tool calls to catalogue operations."""

    def __init__(self, catalog: Mapping[str, OperationSpec], client_factory):
        self.catalog = catalog
        self.client_factory = client_factory

    def get_operation(self, name: str) -> OperationSpec:
        spec = self.catalog.get(name)
        if spec is None:
            raise UnknownOperationError(
                f"Unknown operation: {name}. Valid operations: {', '.join(self.catalog)}"
            )
        return spec

    async def handle(self, request: ToolCallRequest) -> Dict[str, Any]:
        """Run one tool call and return its response envelope.

        Raises:
            UnknownOperationError: Operation name is not in the catalogue
            ToolValidationError: A required parameter is missing or mistyped
            MissingCredentialError: No usable credential for this call
        """
        spec = self.get_operation(request.operation_name)

        arguments = dict(request.params or {})
        credentials = self.client_factory.credentials_from(arguments)
        params = spec.validate(arguments)

        client = self.client_factory.resolve(credentials)
        print(f"[INFO] {spec.name} called with: {', '.join(sorted(params)) or '(no params)'}",
              file=sys.stderr)
        try:
            try:
                result = await spec.invoke(client, **params)
            except Exception as e:
                print(f"[ERROR] {spec.name} failed: {e}", file=sys.stderr)
                result = error_payload(e)
        finally:
            await self.client_factory.release(client)

        return build_envelope(result)
