"""Tests for request resolution in ``postpage.resolver``."""

import logging

import pytest

from postpage.config import Settings
from postpage.content_api import ContentApiError
from postpage.resolver import encode_uri, resolve_request, should_redirect
from postpage.schemas import NotFound, PostProps, Redirect, RequestContext

ORIGIN = "http://blog.example.com"

SETTINGS = Settings(
    content_origin=ORIGIN,
    graphql_endpoint=f"{ORIGIN}/graphql",
    referrer_marker="facebook.com",
)

POST = {
    "id": "cG9zdDox",
    "excerpt": "<p>Hello</p>",
    "title": "Hello world",
    "link": f"{ORIGIN}/hello-world",
    "dateGmt": "2024-01-02T03:04:05",
    "modifiedGmt": "2024-01-03T03:04:05",
    "content": "<p>Body</p>",
    "author": {"node": {"name": "Ada"}},
    "featuredImage": {"node": {"sourceUrl": f"{ORIGIN}/img.png", "altText": ""}},
}


class _FakeClient:
    def __init__(self, response=None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.paths: list[str] = []

    def fetch_post(self, path: str):
        self.paths.append(path)
        if self.error is not None:
            raise self.error
        return self.response


def _context(segments, referer=None, fbclid=None, host="www.example.com") -> RequestContext:
    return RequestContext(path_segments=segments, referer=referer, fbclid=fbclid, host=host)


def test_facebook_referer_redirects_without_fetching():
    client = _FakeClient(response={"post": POST})

    outcome = resolve_request(
        _context(["2024", "my-post"], referer="https://facebook.com/some/share"),
        client,
        SETTINGS,
    )

    assert isinstance(outcome, Redirect)
    assert outcome.destination == f"{ORIGIN}/2024/my-post"
    assert outcome.permanent is False
    assert client.paths == []


def test_fbclid_redirects_regardless_of_referer():
    client = _FakeClient(response={"post": POST})

    outcome = resolve_request(
        _context(["hello-world"], referer="https://news.example.org/", fbclid="abc123"),
        client,
        SETTINGS,
    )

    assert isinstance(outcome, Redirect)
    assert outcome.destination == f"{ORIGIN}/hello-world"
    assert client.paths == []


def test_empty_fbclid_does_not_redirect():
    assert should_redirect(None, "", "facebook.com") is False
    assert should_redirect("https://m.facebook.com/", None, "facebook.com") is True
    assert should_redirect("https://twitter.com/", None, "facebook.com") is False


def test_redirect_destination_is_uri_encoded():
    client = _FakeClient()

    outcome = resolve_request(
        _context(["2024", "café au lait"], fbclid="x"),
        client,
        SETTINGS,
    )

    assert outcome.destination == f"{ORIGIN}/2024/caf%C3%A9%20au%20lait"


def test_encode_uri_keeps_reserved_characters():
    assert encode_uri("a/b?c=d&e#f") == "a/b?c=d&e#f"
    assert encode_uri("100% sure") == "100%25%20sure"
    assert encode_uri("it's (ok)!") == "it's%20(ok)!"


def test_successful_fetch_returns_props():
    client = _FakeClient(response={"post": POST})

    outcome = resolve_request(_context(["hello-world"]), client, SETTINGS)

    assert isinstance(outcome, PostProps)
    assert outcome.path == "hello-world"
    assert outcome.host == "www.example.com"
    assert outcome.post.title == "Hello world"
    assert outcome.post.featured_image.node.source_url == f"{ORIGIN}/img.png"
    assert client.paths == ["hello-world"]


def test_segments_are_joined_without_outer_slashes():
    client = _FakeClient(response={"post": POST})

    outcome = resolve_request(_context(["2024", "01", "my-post"]), client, SETTINGS)

    assert outcome.path == "2024/01/my-post"
    assert client.paths == ["2024/01/my-post"]


def test_fetch_error_is_not_found():
    client = _FakeClient(error=ContentApiError("boom"))

    outcome = resolve_request(_context(["hello-world"]), client, SETTINGS)

    assert isinstance(outcome, NotFound)


@pytest.mark.parametrize("response", [None, {}, {"post": None}, {"other": 1}])
def test_missing_post_is_not_found(response):
    client = _FakeClient(response=response)

    outcome = resolve_request(_context(["hello-world"]), client, SETTINGS)

    assert isinstance(outcome, NotFound)


def test_unreadable_post_is_not_found():
    client = _FakeClient(response={"post": {"title": {"unexpected": "shape"}}})

    outcome = resolve_request(_context(["hello-world"]), client, SETTINGS)

    assert isinstance(outcome, NotFound)


def test_empty_path_is_not_found_without_fetch():
    client = _FakeClient(response={"post": POST})

    outcome = resolve_request(_context([]), client, SETTINGS)

    assert isinstance(outcome, NotFound)
    assert client.paths == []


def test_empty_post_object_reaches_renderer():
    client = _FakeClient(response={"post": {}})

    outcome = resolve_request(_context(["hello-world"]), client, SETTINGS)

    assert isinstance(outcome, PostProps)
    assert outcome.post.title is None
    assert outcome.post.featured_image is None


def test_raw_response_logged_at_info(caplog):
    client = _FakeClient(response={"post": POST})

    with caplog.at_level(logging.INFO, logger="postpage.resolver"):
        resolve_request(_context(["hello-world"]), client, SETTINGS)

    messages = [record.getMessage() for record in caplog.records if record.levelno == logging.INFO]
    assert any(message.startswith("GraphQL response: ") and "Hello world" in message for message in messages)
