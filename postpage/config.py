"""Environment-driven settings for the post page."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_ORIGIN = "http://pro-techs-bloggers.lovestoblog.com"
DEFAULT_REFERRER_MARKER = "facebook.com"


@dataclass(frozen=True, slots=True)
class Settings:
    content_origin: str
    graphql_endpoint: str
    referrer_marker: str
    request_timeout: float | None = None
    log_level: int = logging.INFO
    log_dir: Path = Path("logs")
    log_file: str = "latest-run.log"


def parse_log_level(raw: str | int | None) -> int:
    """Accept ``"debug"``, ``"10"`` or ``10``; anything else means INFO."""

    if isinstance(raw, int):
        return raw
    if not raw:
        return logging.INFO
    value = raw.strip().upper()
    if value.isdigit():
        return int(value)
    return logging.getLevelNamesMapping().get(value, logging.INFO)


def _timeout_from_env() -> float | None:
    raw = os.getenv("CONTENT_API_TIMEOUT")
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid CONTENT_API_TIMEOUT value %s; using transport default", raw)
        return None
    return value if value > 0 else None


def load_settings() -> Settings:
    """Read settings from the environment.

    The GraphQL endpoint defaults to ``/graphql`` on the content origin, which
    is also the redirect target for social referrer traffic.
    """

    origin = os.getenv("CONTENT_ORIGIN", DEFAULT_CONTENT_ORIGIN).strip().rstrip("/")
    endpoint = os.getenv("CONTENT_GRAPHQL_ENDPOINT") or f"{origin}/graphql"
    marker = os.getenv("REFERRER_MARKER", DEFAULT_REFERRER_MARKER).strip()
    return Settings(
        content_origin=origin,
        graphql_endpoint=endpoint.strip(),
        referrer_marker=marker,
        request_timeout=_timeout_from_env(),
        log_level=parse_log_level(os.getenv("LOG_LEVEL")),
        log_dir=Path(os.getenv("APP_LOG_DIR", "logs")),
        log_file=os.getenv("APP_LOG_FILENAME", "latest-run.log"),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
