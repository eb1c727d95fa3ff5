"""Decide how to answer a post request: redirect, 404, or render props."""
from __future__ import annotations

import logging
from urllib.parse import quote

from pydantic import ValidationError

from .config import Settings, get_settings
from .content_api import ContentApiClient, ContentApiError
from .schemas import NotFound, Outcome, Post, PostProps, Redirect, RequestContext

logger = logging.getLogger(__name__)

# Characters JavaScript's encodeURI leaves untouched on top of quote()'s
# always-safe set (letters, digits, "_.-~").
_ENCODE_URI_SAFE = ";,/?:@&=+$!*'()#"


def encode_uri(value: str) -> str:
    return quote(value, safe=_ENCODE_URI_SAFE)


def join_path(segments: list[str]) -> str:
    return "/".join(segments)


def should_redirect(referer: str | None, fbclid: str | None, marker: str) -> bool:
    """Social referrer traffic goes straight to the canonical blog."""

    if referer and marker and marker in referer:
        return True
    return bool(fbclid)


def redirect_destination(origin: str, path: str) -> str:
    return f"{origin}/{encode_uri(path)}"


def resolve_request(
    context: RequestContext,
    client: ContentApiClient,
    settings: Settings | None = None,
) -> Outcome:
    """Resolve a request to exactly one outcome.

    Any failure while fetching or reading the post collapses into
    :class:`NotFound`; callers cannot tell a missing post from a broken API.
    """

    settings = settings or get_settings()
    path = join_path(context.path_segments)
    logger.info("Requested path: %s", path)

    if should_redirect(context.referer, context.fbclid, settings.referrer_marker):
        destination = redirect_destination(settings.content_origin, path)
        logger.info("Redirecting %s to %s", path, destination)
        return Redirect(destination=destination, permanent=False)

    if not context.path_segments:
        return NotFound(reason="Empty path")

    try:
        data = client.fetch_post(path)
        logger.info("GraphQL response: %s", data)
        if not isinstance(data, dict) or data.get("post") is None:
            logger.error("No post data found for path: %s", path)
            return NotFound()
        post = Post.model_validate(data["post"])
    except ContentApiError as exc:
        logger.warning("GraphQL request failed for %s: %s", path, exc)
        return NotFound(reason="Content API request failed")
    except ValidationError as exc:
        logger.warning("Unreadable post payload for %s: %s", path, exc)
        return NotFound(reason="Content API returned an unreadable post")

    return PostProps(path=path, post=post, host=context.host)
