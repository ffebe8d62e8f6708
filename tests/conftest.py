"""Shared fixtures and test doubles for the X MCP server tests."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from x_mcp.models.credentials import StaticCredentials

ME_ID = "1111"


class FakeXClient:
    """Stands in for XClient: records every verb call and returns canned bodies."""

    instances = []

    def __init__(self, bearer_token=None, oauth1=None, **kwargs):
        self.bearer_token = bearer_token
        self.oauth1 = oauth1
        self.calls = []
        self.closed = False
        self.responses = {}
        self.errors = {}
        FakeXClient.instances.append(self)

    async def _record(self, verb, default, *args, **kwargs):
        self.calls.append((verb, args, kwargs))
        if verb in self.errors:
            raise self.errors[verb]
        return self.responses.get(verb, default)

    async def aclose(self):
        self.closed = True

    async def me(self):
        return await self._record("me", {"data": {"id": ME_ID, "username": "me"}})

    async def user_timeline(self, user_id, exclude=None, max_results=None, pagination_token=None):
        return await self._record(
            "user_timeline", {"data": [{"id": "1", "text": "hello"}], "meta": {"result_count": 1}},
            user_id, exclude=exclude, max_results=max_results, pagination_token=pagination_token,
        )

    async def single_tweet(self, tweet_id):
        return await self._record("single_tweet", {"data": {"id": tweet_id, "text": "hi"}}, tweet_id)

    async def user_mention_timeline(self, user_id, max_results=None, pagination_token=None):
        return await self._record(
            "user_mention_timeline",
            {"data": [{"id": "9", "text": "@me"}], "meta": {"result_count": 1, "next_token": "nxt"}},
            user_id, max_results=max_results, pagination_token=pagination_token,
        )

    async def tweet(self, text, quote_tweet_id=None, in_reply_to_tweet_id=None, media_ids=None):
        return await self._record(
            "tweet", {"data": {"id": "500", "text": text}},
            text, quote_tweet_id=quote_tweet_id,
            in_reply_to_tweet_id=in_reply_to_tweet_id, media_ids=media_ids,
        )

    async def upload_media(self, data, media_type, media_category="tweet_image"):
        return await self._record(
            "upload_media", "media-42", data, media_type=media_type, media_category=media_category,
        )

    async def like(self, user_id, tweet_id):
        return await self._record("like", {"data": {"liked": True}}, user_id, tweet_id)

    async def follow(self, user_id, target_user_id):
        return await self._record(
            "follow", {"data": {"following": True, "pending_follow": False}}, user_id, target_user_id,
        )

    async def unfollow(self, user_id, target_user_id):
        return await self._record("unfollow", {"data": {"following": False}}, user_id, target_user_id)

    async def user_by_username(self, username):
        return await self._record(
            "user_by_username", {"data": {"id": "77", "username": username}}, username,
        )

    async def search(self, query, max_results=None):
        return await self._record(
            "search", {"data": [{"id": "3", "text": query}], "meta": {"result_count": 1}},
            query, max_results=max_results,
        )

    async def trends_available(self):
        return await self._record("trends_available", [{"name": "Worldwide", "woeid": 1}])

    async def create_list(self, name, description=None, private=False):
        return await self._record(
            "create_list", {"data": {"id": "L1", "name": name}},
            name, description=description, private=private,
        )

    async def add_list_member(self, list_id, user_id):
        return await self._record("add_list_member", {"data": {"is_member": True}}, list_id, user_id)

    async def remove_list_member(self, list_id, user_id):
        return await self._record("remove_list_member", {"data": {"is_member": False}}, list_id, user_id)

    async def lists_owned(self, user_id):
        return await self._record(
            "lists_owned", {"data": [{"id": "L1", "name": "friends"}], "meta": {"result_count": 1}},
            user_id,
        )

    def verbs(self):
        return [verb for verb, _, _ in self.calls]


class RecordingFactory:
    """Client factory double that hands out one fake client and counts calls."""

    mode = "test"
    credential_params = ()

    def __init__(self, client=None):
        self.client = client or FakeXClient(bearer_token="test")
        self.resolve_calls = 0
        self.released = []

    def credentials_from(self, params):
        return None

    def resolve(self, config=None):
        self.resolve_calls += 1
        return self.client

    async def release(self, client):
        self.released.append(client)


@pytest.fixture(autouse=True)
def _reset_fake_instances():
    FakeXClient.instances = []
    yield
    FakeXClient.instances = []


@pytest.fixture
def fake_client():
    return FakeXClient(bearer_token="test")


@pytest.fixture
def factory(fake_client):
    return RecordingFactory(fake_client)


@pytest.fixture
def static_creds():
    return StaticCredentials(
        api_key="key-123456",
        api_key_secret="secret-123456",
        access_token="token-123456",
        access_token_secret="tsecret-123456",
    )
