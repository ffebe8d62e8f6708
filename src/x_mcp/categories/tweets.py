"""
Tweet MCP Tools for the X API.

Provides 8 tweet actions:
- get_tweets_by_userid: User timeline (one page)
- get_tweet_by_id: Single tweet lookup
- get_user_mentions: Mention timeline (one page, with meta)
- quote_tweet: Quote a tweet with a comment
- reply_to_tweet: Reply to a tweet
- post_tweet: Post a tweet, optionally with one image
- like_tweet: Like a tweet as the authenticated user
- search_tweets: Recent search
"""

import base64
import binascii
import json
import re
import sys
from typing import Any, Dict, Optional, Tuple

from ..models.operation import OperationSpec, ParamSpec
from ._shared import current_user_id, data_of

DEFAULT_MAX_RESULTS = 10
DEFAULT_EXCLUDE = ["retweets"]
EXCLUDE_CHOICES = ("retweets", "replies")

_DATA_URI_PREFIX = re.compile(r"^data:image/\w+;base64,")

_IMAGE_MIME_TYPES = {
    "data:image/png": "image/png",
    "data:image/gif": "image/gif",
    "data:image/webp": "image/webp",
}
_DEFAULT_IMAGE_MIME = "image/jpeg"


# ============================================================================
# Helpers
# ============================================================================

def decode_image(image_base64: str) -> Tuple[bytes, str]:
    """Decode a (possibly data-URI prefixed) base64 image.

    Returns:
        (raw bytes, MIME type); MIME defaults to image/jpeg when the prefix
        is absent or names another format.

    Raises:
        ValueError: If the payload is not valid base64
    """
    mime_type = _DEFAULT_IMAGE_MIME
    for prefix, candidate in _IMAGE_MIME_TYPES.items():
        if prefix in image_base64:
            mime_type = candidate
            break

    payload = _DATA_URI_PREFIX.sub("", image_base64, count=1)
    try:
        raw = base64.b64decode(payload, validate=False)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Invalid base64 image data: {e}") from e
    if not raw:
        raise ValueError("Image data is empty")
    return raw, mime_type


# ============================================================================
# Action Handlers
# ============================================================================

async def _action_get_tweets_by_userid(
    client,
    userId: str,
    exclude=None,
    maxResults: int = DEFAULT_MAX_RESULTS,
    paginationToken: Optional[str] = None,
) -> str:
    """User timeline, returned as an already-serialized JSON document."""
    body = await client.user_timeline(
        userId,
        exclude=exclude,
        max_results=maxResults,
        pagination_token=paginationToken,
    )
    return json.dumps({
        "result": body,
        "message": "Tweets fetched successfully",
    })


async def _action_get_tweet_by_id(client, tweetId: str) -> Any:
    return data_of(await client.single_tweet(tweetId))


async def _action_get_user_mentions(
    client,
    userId: str,
    maxResults: int = DEFAULT_MAX_RESULTS,
    paginationToken: Optional[str] = None,
) -> Dict[str, Any]:
    # Whole body: the caller needs meta.next_token to page
    return await client.user_mention_timeline(
        userId,
        max_results=maxResults,
        pagination_token=paginationToken,
    )


async def _action_quote_tweet(client, tweetId: str, replyText: str) -> Any:
    return data_of(await client.tweet(replyText, quote_tweet_id=tweetId))


async def _action_reply_to_tweet(client, tweetId: str, replyText: str) -> Any:
    return data_of(await client.tweet(replyText, in_reply_to_tweet_id=tweetId))


async def _action_post_tweet(client, text: str, imageBase64: Optional[str] = None) -> Any:
    if not imageBase64:
        return data_of(await client.tweet(text))

    raw, mime_type = decode_image(imageBase64)
    print(f"[INFO] Uploading {len(raw)} bytes of {mime_type} for post_tweet", file=sys.stderr)
    media_id = await client.upload_media(raw, media_type=mime_type, media_category="tweet_image")
    return data_of(await client.tweet(text, media_ids=[media_id]))


async def _action_like_tweet(client, tweetId: str) -> Dict[str, Any]:
    user_id = await current_user_id(client)
    result = await client.like(user_id, tweetId)
    if not isinstance(result, dict) or "data" not in result:
        return result
    return {"liked": result["data"].get("liked")}


async def _action_search_tweets(client, query: str, maxResults: int = DEFAULT_MAX_RESULTS) -> Any:
    return data_of(await client.search(query, max_results=maxResults))


# ============================================================================
# Operation table
# ============================================================================

_MAX_RESULTS_PARAM = ParamSpec(
    "maxResults", "integer", "The maximum number of results to return",
    default=DEFAULT_MAX_RESULTS,
)
_PAGINATION_PARAM = ParamSpec(
    "paginationToken", "string",
    "The pagination token to use for the next page of results",
)

OPERATIONS = (
    OperationSpec(
        name="get_tweets_by_userid",
        description="Get tweets by user ID",
        invoke=_action_get_tweets_by_userid,
        read_only=True,
        params=(
            ParamSpec("userId", "string", "The Twitter user ID to search for tweets", required=True),
            _PAGINATION_PARAM,
            ParamSpec(
                "exclude", "array", "The types of tweets to exclude from the search",
                items="string", enum=EXCLUDE_CHOICES, default=DEFAULT_EXCLUDE,
            ),
            _MAX_RESULTS_PARAM,
        ),
    ),
    OperationSpec(
        name="get_tweet_by_id",
        description="Get a tweet by ID",
        invoke=_action_get_tweet_by_id,
        read_only=True,
        params=(
            ParamSpec("tweetId", "string", "The ID of the tweet to retrieve", required=True),
        ),
    ),
    OperationSpec(
        name="get_user_mentions",
        description="Get mentions by user ID",
        invoke=_action_get_user_mentions,
        read_only=True,
        params=(
            ParamSpec("userId", "string", "The Twitter user ID to get mentions for", required=True),
            _PAGINATION_PARAM,
            _MAX_RESULTS_PARAM,
        ),
    ),
    OperationSpec(
        name="quote_tweet",
        description="Quote a tweet",
        invoke=_action_quote_tweet,
        params=(
            ParamSpec("tweetId", "string", "The ID of the tweet to quote", required=True),
            ParamSpec("replyText", "string", "The text to include with the quote", required=True),
        ),
    ),
    OperationSpec(
        name="reply_to_tweet",
        description="Reply to a tweet",
        invoke=_action_reply_to_tweet,
        params=(
            ParamSpec("tweetId", "string", "The ID of the tweet to reply to", required=True),
            ParamSpec("replyText", "string", "The text content of the reply", required=True),
        ),
    ),
    OperationSpec(
        name="post_tweet",
        description="Post a tweet",
        invoke=_action_post_tweet,
        params=(
            ParamSpec("text", "string", "The text content of the tweet", required=True),
            ParamSpec(
                "imageBase64", "string",
                "Optional base64 encoded image to attach to the tweet",
            ),
        ),
    ),
    OperationSpec(
        name="like_tweet",
        description="Like a tweet",
        invoke=_action_like_tweet,
        params=(
            ParamSpec("tweetId", "string", "The ID of the tweet to like", required=True),
        ),
    ),
    OperationSpec(
        name="search_tweets",
        description="Search for tweets",
        invoke=_action_search_tweets,
        read_only=True,
        params=(
            ParamSpec("query", "string", "The search query", required=True),
            ParamSpec(
                "maxResults", "integer", "Maximum number of results to return",
                default=DEFAULT_MAX_RESULTS,
            ),
        ),
    ),
)
