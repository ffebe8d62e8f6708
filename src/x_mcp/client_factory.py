"""
Client factories: turn a credential configuration into an X client.

The credential source is chosen once, when the factory is built:
- StaticClientFactory reads app credentials from the environment at first
  use and shares one client for the life of the process.
- PerCallClientFactory builds a fresh client from the bearer token carried
  by each tool call and closes it when the call is done.
"""

import os
import sys
from typing import Any, Callable, Dict, Optional, Tuple

from .client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, XClient
from .models.credentials import (
    MissingCredentialError,
    PerCallCredentials,
    StaticCredentials,
    load_static_credentials,
    mask,
)
from .models.operation import ParamSpec

STATIC_MODE = "static"
PER_CALL_MODE = "per_call"

_MODE_ALIASES = {
    "static": STATIC_MODE,
    "per_call": PER_CALL_MODE,
    "per-call": PER_CALL_MODE,
    "percall": PER_CALL_MODE,
}


def _client_settings() -> Dict[str, Any]:
    return {
        "base_url": os.getenv("X_API_BASE_URL", DEFAULT_BASE_URL),
        "timeout": float(os.getenv("X_MCP_HTTP_TIMEOUT", str(DEFAULT_TIMEOUT))),
    }


class StaticClientFactory:
    """One shared client backed by environment-sourced OAuth 1.0a credentials."""

    mode = STATIC_MODE
    credential_params: Tuple[ParamSpec, ...] = ()

    def __init__(
        self,
        loader: Callable[[], StaticCredentials] = load_static_credentials,
        client_class: Callable[..., Any] = XClient,
        client_kwargs: Optional[Dict[str, Any]] = None,
    ):
        self._loader = loader
        self._client_class = client_class
        self._client_kwargs = client_kwargs
        self._client = None

    def credentials_from(self, params: Dict[str, Any]) -> None:
        return None

    def resolve(self, config=None):
        """Return the shared client, creating it on first use.

        Raises:
            MissingCredentialError: If any static secret is absent
        """
        if self._client is None:
            creds = self._loader()
            kwargs = self._client_kwargs if self._client_kwargs is not None else _client_settings()
            self._client = self._client_class(oauth1=creds.as_oauth1(), **kwargs)
            print(f"[INFO] X client initialized with static credentials (api key: {mask(creds.api_key)})",
                  file=sys.stderr)
        return self._client

    async def release(self, client) -> None:
        # Shared for the process lifetime
        return None

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


class PerCallClientFactory:
    """A new client per call, bound to the caller's bearer token."""

    mode = PER_CALL_MODE
    credential_params: Tuple[ParamSpec, ...] = (
        ParamSpec(
            "accessToken", "string",
            "OAuth 2.0 user access token used for this call",
            required=True,
        ),
        ParamSpec(
            "refreshToken", "string",
            "OAuth 2.0 refresh token (accepted but not used to refresh)",
        ),
    )

    def __init__(
        self,
        client_class: Callable[..., Any] = XClient,
        client_kwargs: Optional[Dict[str, Any]] = None,
    ):
        self._client_class = client_class
        self._client_kwargs = client_kwargs

    def credentials_from(self, params: Dict[str, Any]) -> PerCallCredentials:
        """Pop the credential fields out of the tool arguments.

        Raises:
            ToolValidationError: If a supplied token is not a string
        """
        values = {}
        for spec in self.credential_params:
            value = params.pop(spec.name, None)
            values[spec.name] = value if value is None else spec.check(value)
        return PerCallCredentials(
            access_token=values["accessToken"],
            refresh_token=values["refreshToken"],
        )

    def resolve(self, config: Optional[PerCallCredentials] = None):
        """Build a client for this call only.

        Raises:
            MissingCredentialError: If no access token was supplied
        """
        if config is None or not config.access_token:
            raise MissingCredentialError("Access token is required")

        kwargs = self._client_kwargs if self._client_kwargs is not None else _client_settings()
        client = self._client_class(bearer_token=config.access_token, **kwargs)
        print(f"[INFO] X client initialized for call (access token: {mask(config.access_token)})",
              file=sys.stderr)
        return client

    async def release(self, client) -> None:
        aclose = getattr(client, "aclose", None)
        if aclose is not None:
            await aclose()

    async def aclose(self) -> None:
        return None


def build_client_factory(mode: str):
    """Build the factory for a credential mode ("static" or "per_call")."""
    normalized = _MODE_ALIASES.get((mode or "").strip().lower())
    if normalized == STATIC_MODE:
        return StaticClientFactory()
    if normalized == PER_CALL_MODE:
        return PerCallClientFactory()
    raise ValueError(
        f"Invalid credential mode: '{mode}'. Valid values: {STATIC_MODE}, {PER_CALL_MODE}"
    )
