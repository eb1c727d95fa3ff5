"""FastAPI application entrypoint."""
from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from .config import Settings, get_settings
from .content_api import ContentApiClient
from .logging_setup import configure_logging
from .render import POST_TEMPLATE, TEMPLATES, page_context
from .resolver import resolve_request
from .schemas import NotFound, Redirect, RequestContext

LOG_FILE_PATH = configure_logging(get_settings())
logger = logging.getLogger(__name__)
logger.info("Logging configured. File output: %s", LOG_FILE_PATH)

app = FastAPI(title="Post Page")


def get_content_client(settings: Settings = Depends(get_settings)) -> ContentApiClient:
    """A new client per request; nothing but settings outlives a request."""
    return ContentApiClient(settings.graphql_endpoint, timeout=settings.request_timeout)


def first_present(values: list[str]) -> str | None:
    # "?fbclid=abc&fbclid=" still counts as present.
    return next((value for value in values if value), None)


def build_request_context(request: Request, postpath: str) -> RequestContext:
    segments = [segment for segment in postpath.split("/") if segment]
    return RequestContext(
        path_segments=segments,
        referer=request.headers.get("referer"),
        fbclid=first_present(request.query_params.getlist("fbclid")),
        host=request.headers.get("host", ""),
    )


@app.get("/{postpath:path}", response_class=HTMLResponse, response_model=None)
def show_post(
    request: Request,
    postpath: str,
    client: ContentApiClient = Depends(get_content_client),
    settings: Settings = Depends(get_settings),
) -> HTMLResponse | RedirectResponse:
    context = build_request_context(request, postpath)
    outcome = resolve_request(context, client, settings)

    if isinstance(outcome, Redirect):
        code = (
            status.HTTP_308_PERMANENT_REDIRECT
            if outcome.permanent
            else status.HTTP_307_TEMPORARY_REDIRECT
        )
        return RedirectResponse(url=outcome.destination, status_code=code)
    if isinstance(outcome, NotFound):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=outcome.reason)

    return TEMPLATES.TemplateResponse(request, POST_TEMPLATE, page_context(outcome))
