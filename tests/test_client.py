"""Tests for the httpx-based X API client, using a mock transport."""

import asyncio
import json

import httpx
import pytest

from x_mcp.client import XApiError, XClient


class Recorder:
    """Mock transport handler: records requests and replies from a route table."""

    def __init__(self, routes=None):
        self.requests = []
        self.routes = routes or {}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        status, body = self.routes.get(key, (200, {"data": {"ok": True}}))
        return httpx.Response(status, json=body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def make_client(recorder, **kwargs):
    kwargs.setdefault("bearer_token", "user-token")
    return XClient(transport=httpx.MockTransport(recorder), **kwargs)


def run(coro):
    return asyncio.run(coro)


class TestAuth:
    """Bearer vs OAuth 1.0a request signing."""

    def test_requires_some_credentials(self):
        with pytest.raises(ValueError):
            XClient()

    def test_bearer_header(self):
        recorder = Recorder()
        client = make_client(recorder)
        run(client.me())
        assert recorder.last.headers["Authorization"] == "Bearer user-token"
        assert recorder.last.url.path == "/2/users/me"

    def test_oauth1_signature(self, static_creds):
        recorder = Recorder()
        client = XClient(oauth1=static_creds.as_oauth1(), transport=httpx.MockTransport(recorder))
        run(client.me())
        auth_header = recorder.last.headers["Authorization"]
        assert auth_header.startswith("OAuth ")
        assert 'oauth_consumer_key="key-123456"' in auth_header
        assert 'oauth_token="token-123456"' in auth_header


class TestRequests:
    """Each verb maps to one X API request."""

    def test_user_timeline_query(self):
        recorder = Recorder()
        run(make_client(recorder).user_timeline(
            "42", exclude=["retweets", "replies"], max_results=10, pagination_token=None,
        ))
        request = recorder.last
        assert request.method == "GET"
        assert request.url.path == "/2/users/42/tweets"
        assert request.url.params["exclude"] == "retweets,replies"
        assert request.url.params["max_results"] == "10"
        assert "pagination_token" not in request.url.params

    def test_reply_body(self):
        recorder = Recorder()
        run(make_client(recorder).tweet("hi", in_reply_to_tweet_id="100"))
        assert recorder.last.url.path == "/2/tweets"
        assert json.loads(recorder.last.content) == {
            "text": "hi", "reply": {"in_reply_to_tweet_id": "100"},
        }

    def test_quote_and_media_body(self):
        recorder = Recorder()
        client = make_client(recorder)
        run(client.tweet("q", quote_tweet_id="7"))
        assert json.loads(recorder.last.content) == {"text": "q", "quote_tweet_id": "7"}
        run(client.tweet("m", media_ids=["m1"]))
        assert json.loads(recorder.last.content) == {"text": "m", "media": {"media_ids": ["m1"]}}

    def test_like_follow_unfollow_paths(self):
        recorder = Recorder()
        client = make_client(recorder)
        run(client.like("1", "100"))
        assert (recorder.last.method, recorder.last.url.path) == ("POST", "/2/users/1/likes")
        assert json.loads(recorder.last.content) == {"tweet_id": "100"}
        run(client.follow("1", "55"))
        assert json.loads(recorder.last.content) == {"target_user_id": "55"}
        run(client.unfollow("1", "55"))
        assert (recorder.last.method, recorder.last.url.path) == ("DELETE", "/2/users/1/following/55")

    def test_list_requests(self):
        recorder = Recorder()
        client = make_client(recorder)
        run(client.create_list("friends", private=True))
        assert json.loads(recorder.last.content) == {"name": "friends", "private": True}
        run(client.add_list_member("L1", "55"))
        assert recorder.last.url.path == "/2/lists/L1/members"
        run(client.remove_list_member("L1", "55"))
        assert (recorder.last.method, recorder.last.url.path) == ("DELETE", "/2/lists/L1/members/55")
        run(client.lists_owned("1"))
        assert recorder.last.url.path == "/2/users/1/owned_lists"

    def test_search_and_trends(self):
        recorder = Recorder({("GET", "/1.1/trends/available.json"): (200, [{"woeid": 1}])})
        client = make_client(recorder)
        run(client.search("python", max_results=10))
        assert recorder.last.url.path == "/2/tweets/search/recent"
        assert recorder.last.url.params["query"] == "python"
        assert run(client.trends_available()) == [{"woeid": 1}]

    def test_upload_media_multipart(self):
        recorder = Recorder({("POST", "/2/media/upload"): (200, {"data": {"id": "9876"}})})
        media_id = run(make_client(recorder).upload_media(b"\x89PNG", media_type="image/png"))
        assert media_id == "9876"
        request = recorder.last
        assert request.headers["Content-Type"].startswith("multipart/form-data")
        assert b"tweet_image" in request.content
        assert b"image/png" in request.content


class TestErrors:
    """HTTP error responses raise XApiError with the raw body."""

    def test_error_response_raises(self):
        body = {"title": "Unauthorized", "type": "about:blank", "status": 401, "detail": "Unauthorized"}
        recorder = Recorder({("GET", "/2/users/me"): (401, body)})
        with pytest.raises(XApiError) as excinfo:
            run(make_client(recorder).me())
        assert excinfo.value.status == 401
        assert excinfo.value.data == body
        assert "401" in str(excinfo.value)

    def test_errors_array_detail(self):
        body = {"errors": [{"message": "You are not permitted to like this Tweet."}]}
        recorder = Recorder({("POST", "/2/users/1/likes"): (403, body)})
        with pytest.raises(XApiError) as excinfo:
            run(make_client(recorder).like("1", "100"))
        assert excinfo.value.detail == "You are not permitted to like this Tweet."

    def test_upload_without_id_raises(self):
        recorder = Recorder({("POST", "/2/media/upload"): (200, {"data": {}})})
        with pytest.raises(XApiError, match="no media id"):
            run(make_client(recorder).upload_media(b"x", media_type="image/jpeg"))
