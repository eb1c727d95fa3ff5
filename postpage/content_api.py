"""GraphQL client for the headless content API."""
from __future__ import annotations

import logging
from typing import Any, Mapping

import requests

logger = logging.getLogger(__name__)

USER_AGENT = "PostPage/1.0"

POST_QUERY = """
query PostByUri($id: ID!) {
  post(id: $id, idType: URI) {
    id
    excerpt
    title
    link
    dateGmt
    modifiedGmt
    content
    author {
      node {
        name
      }
    }
    featuredImage {
      node {
        sourceUrl
        altText
      }
    }
  }
}
"""


class ContentApiError(RuntimeError):
    """Raised when the content API cannot answer a query."""


def build_post_query() -> str:
    """Return the query document that looks a post up by its URI."""
    return POST_QUERY.strip()


def _error_messages(errors: Any) -> str:
    if not isinstance(errors, list):
        return str(errors)
    messages = []
    for entry in errors:
        if isinstance(entry, Mapping) and entry.get("message"):
            messages.append(str(entry["message"]))
        else:
            messages.append(str(entry))
    return "; ".join(messages)


class ContentApiClient:
    """Posts GraphQL documents to a single endpoint over HTTP.

    Without an explicit ``session`` every query runs on its own short-lived
    ``requests.Session``, so cookies set for one visitor never reach another.
    """

    def __init__(
        self,
        endpoint: str,
        session: requests.Session | None = None,
        timeout: float | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self.endpoint = endpoint
        self._session = session
        self._timeout = timeout
        self._headers = {
            "User-Agent": USER_AGENT,
            "Accept": "application/json",
        }
        if headers:
            self._headers.update(headers)

    def _post(self, payload: dict[str, Any]) -> requests.Response:
        if self._session is not None:
            return self._session.post(
                self.endpoint, json=payload, headers=self._headers, timeout=self._timeout
            )
        with requests.Session() as session:
            return session.post(
                self.endpoint, json=payload, headers=self._headers, timeout=self._timeout
            )

    def request(self, query: str, variables: Mapping[str, Any] | None = None) -> dict | None:
        """Run ``query`` and return the ``data`` member of the response.

        Transport failures, non-2xx statuses, non-JSON bodies and GraphQL
        ``errors`` all raise :class:`ContentApiError`.
        """

        payload: dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = dict(variables)

        try:
            response = self._post(payload)
        except requests.RequestException as exc:
            raise ContentApiError(f"Request to {self.endpoint} failed: {exc}") from exc

        if not response.ok:
            raise ContentApiError(
                f"Content API returned HTTP {response.status_code} for {self.endpoint}"
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise ContentApiError(f"Content API returned a non-JSON body: {exc}") from exc

        if not isinstance(body, Mapping):
            raise ContentApiError("Content API returned an unexpected payload")

        if body.get("errors"):
            raise ContentApiError(f"GraphQL errors: {_error_messages(body['errors'])}")

        return body.get("data")

    def fetch_post(self, path: str) -> dict | None:
        """Look a post up by its URI path."""
        return self.request(build_post_query(), {"id": path})
