"""
Credential configurations for the X client.

Two mutually exclusive deployment styles:
- StaticCredentials: long-lived OAuth 1.0a app + user keys from the environment
- PerCallCredentials: short-lived OAuth 2.0 bearer token supplied with each call
"""

import os
from dataclasses import dataclass
from typing import Dict, Optional, Union

STATIC_ENV_VARS = {
    "api_key": "TWITTER_API_KEY",
    "api_key_secret": "TWITTER_API_KEY_SECRET",
    "access_token": "TWITTER_ACCESS_TOKEN",
    "access_token_secret": "TWITTER_ACCESS_TOKEN_SECRET",
}


class MissingCredentialError(PermissionError):
    """A required credential is absent; raised before any remote call."""


def mask(value: Optional[str]) -> str:
    """Short, log-safe preview of a secret."""
    if not value:
        return "<empty>"
    return f"{value[:5]}***"


@dataclass(frozen=True)
class StaticCredentials:
    api_key: str
    api_key_secret: str
    access_token: str
    access_token_secret: str

    def as_oauth1(self) -> Dict[str, str]:
        return {
            "api_key": self.api_key,
            "api_key_secret": self.api_key_secret,
            "access_token": self.access_token,
            "access_token_secret": self.access_token_secret,
        }


@dataclass(frozen=True)
class PerCallCredentials:
    access_token: Optional[str] = None
    # Accepted for compatibility with callers that send it; never used to refresh.
    refresh_token: Optional[str] = None


CredentialConfig = Union[StaticCredentials, PerCallCredentials]


def load_static_credentials(environ=None) -> StaticCredentials:
    """Read the four static secrets from the environment.

    Raises:
        MissingCredentialError: If any variable is unset or empty
    """
    environ = os.environ if environ is None else environ
    values = {field: environ.get(var, "") for field, var in STATIC_ENV_VARS.items()}
    missing = [STATIC_ENV_VARS[field] for field, value in values.items() if not value]
    if missing:
        raise MissingCredentialError(
            f"Missing required X credentials: {', '.join(missing)}"
        )
    return StaticCredentials(**values)
