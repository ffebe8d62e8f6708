"""
Async X API v2 client.

A thin binding over httpx: each verb issues exactly one HTTP request and
returns the decoded JSON body. Error responses (HTTP >= 400) raise
``XApiError`` with the raw body attached; nothing is retried.

Two auth styles are supported:
- OAuth 2.0 user-context bearer token (per-call credentials)
- OAuth 1.0a user context signed with authlib (static app credentials)
"""

from typing import Any, Dict, List, Optional

import httpx
from authlib.integrations.httpx_client import OAuth1Auth

DEFAULT_BASE_URL = "https://api.x.com"
DEFAULT_TIMEOUT = 30.0


class XApiError(Exception):
    """Error response returned by the X API."""

    def __init__(self, status: int, data: Any = None, message: str = None):
        self.status = status
        self.data = data
        self.title = None
        self.detail = None
        if isinstance(data, dict):
            self.title = data.get("title")
            self.detail = data.get("detail")
            if not self.detail and data.get("errors"):
                first = data["errors"][0]
                if isinstance(first, dict):
                    self.detail = first.get("message") or first.get("detail")
        if message is None:
            message = f"Request failed with code {status}"
            if self.detail:
                message += f" - {self.detail}"
            elif self.title:
                message += f" - {self.title}"
        super().__init__(message)


def _clean(values: Dict[str, Any]) -> Dict[str, Any]:
    """Drop None-valued entries so optional fields are simply omitted."""
    return {k: v for k, v in values.items() if v is not None}


class XClient:
    """Async client bound to one set of credentials."""

    def __init__(
        self,
        bearer_token: Optional[str] = None,
        oauth1: Optional[Dict[str, str]] = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            bearer_token: OAuth 2.0 user access token
            oauth1: Mapping with api_key, api_key_secret, access_token,
                    access_token_secret for OAuth 1.0a signing
            base_url: API root (no trailing /2)
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        if not bearer_token and not oauth1:
            raise ValueError("XClient requires a bearer token or OAuth 1.0a credentials")

        headers = {"User-Agent": "x-mcp-server/1.0"}
        auth = None
        if bearer_token:
            headers["Authorization"] = f"Bearer {bearer_token}"
        else:
            auth = OAuth1Auth(
                client_id=oauth1["api_key"],
                client_secret=oauth1["api_key_secret"],
                token=oauth1["access_token"],
                token_secret=oauth1["access_token_secret"],
            )

        self._http = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            auth=auth,
            timeout=timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
        **kwargs,
    ) -> Any:
        response = await self._http.request(
            method,
            path,
            params=_clean(params) if params else None,
            json=json,
            **kwargs,
        )
        try:
            body = response.json() if response.content else None
        except ValueError:
            body = response.text

        if response.status_code >= 400:
            raise XApiError(response.status_code, body)
        return body

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    async def me(self) -> Dict[str, Any]:
        return await self._request("GET", "/2/users/me")

    async def user_by_username(self, username: str) -> Dict[str, Any]:
        return await self._request("GET", f"/2/users/by/username/{username}")

    async def follow(self, user_id: str, target_user_id: str) -> Dict[str, Any]:
        return await self._request(
            "POST", f"/2/users/{user_id}/following",
            json={"target_user_id": target_user_id},
        )

    async def unfollow(self, user_id: str, target_user_id: str) -> Dict[str, Any]:
        return await self._request("DELETE", f"/2/users/{user_id}/following/{target_user_id}")

    # ------------------------------------------------------------------
    # Tweets
    # ------------------------------------------------------------------

    async def user_timeline(
        self,
        user_id: str,
        exclude: Optional[List[str]] = None,
        max_results: Optional[int] = None,
        pagination_token: Optional[str] = None,
    ) -> Dict[str, Any]:
        params = {
            "exclude": ",".join(exclude) if exclude else None,
            "max_results": max_results,
            "pagination_token": pagination_token,
        }
        return await self._request("GET", f"/2/users/{user_id}/tweets", params=params)

    async def user_mention_timeline(
        self,
        user_id: str,
        max_results: Optional[int] = None,
        pagination_token: Optional[str] = None,
    ) -> Dict[str, Any]:
        params = {"max_results": max_results, "pagination_token": pagination_token}
        return await self._request("GET", f"/2/users/{user_id}/mentions", params=params)

    async def single_tweet(self, tweet_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/2/tweets/{tweet_id}")

    async def tweet(
        self,
        text: str,
        quote_tweet_id: Optional[str] = None,
        in_reply_to_tweet_id: Optional[str] = None,
        media_ids: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        payload = _clean({"text": text, "quote_tweet_id": quote_tweet_id})
        if in_reply_to_tweet_id:
            payload["reply"] = {"in_reply_to_tweet_id": in_reply_to_tweet_id}
        if media_ids:
            payload["media"] = {"media_ids": list(media_ids)}
        return await self._request("POST", "/2/tweets", json=payload)

    async def like(self, user_id: str, tweet_id: str) -> Dict[str, Any]:
        return await self._request("POST", f"/2/users/{user_id}/likes", json={"tweet_id": tweet_id})

    async def search(self, query: str, max_results: Optional[int] = None) -> Dict[str, Any]:
        params = {"query": query, "max_results": max_results}
        return await self._request("GET", "/2/tweets/search/recent", params=params)

    async def upload_media(
        self,
        data: bytes,
        media_type: str,
        media_category: str = "tweet_image",
    ) -> str:
        """Upload media in one shot and return the new media id."""
        body = await self._request(
            "POST",
            "/2/media/upload",
            data={"media_category": media_category, "media_type": media_type},
            files={"media": ("media", data, media_type)},
        )
        media = (body or {}).get("data") or {}
        media_id = media.get("id") or media.get("media_id_string") or media.get("media_id")
        if not media_id:
            raise XApiError(200, body, "Media upload returned no media id")
        return str(media_id)

    # ------------------------------------------------------------------
    # Trends (v1.1)
    # ------------------------------------------------------------------

    async def trends_available(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/1.1/trends/available.json")

    # ------------------------------------------------------------------
    # Lists
    # ------------------------------------------------------------------

    async def create_list(
        self,
        name: str,
        description: Optional[str] = None,
        private: bool = False,
    ) -> Dict[str, Any]:
        payload = _clean({"name": name, "description": description, "private": private})
        return await self._request("POST", "/2/lists", json=payload)

    async def add_list_member(self, list_id: str, user_id: str) -> Dict[str, Any]:
        return await self._request("POST", f"/2/lists/{list_id}/members", json={"user_id": user_id})

    async def remove_list_member(self, list_id: str, user_id: str) -> Dict[str, Any]:
        return await self._request("DELETE", f"/2/lists/{list_id}/members/{user_id}")

    async def lists_owned(self, user_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/2/users/{user_id}/owned_lists")
