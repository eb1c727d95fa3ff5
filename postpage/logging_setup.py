"""Root logger wiring for the post page service."""
from __future__ import annotations

import logging
from pathlib import Path

from .config import Settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


def _handlers(log_path: Path) -> list[logging.Handler]:
    formatter = logging.Formatter(LOG_FORMAT)
    console = logging.StreamHandler()
    # One file per server run.
    run_file = logging.FileHandler(log_path, mode="w", encoding="utf-8")
    for handler in (console, run_file):
        handler.setFormatter(formatter)
    return [console, run_file]


def configure_logging(settings: Settings) -> Path:
    """Point the root logger at the console and the run log in ``settings.log_dir``."""

    settings.log_dir.mkdir(parents=True, exist_ok=True)
    log_path = settings.log_dir / settings.log_file

    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    for handler in _handlers(log_path):
        root.addHandler(handler)
    root.setLevel(settings.log_level)

    logging.getLogger(__name__).info(
        "Logging at %s to %s", logging.getLevelName(settings.log_level), log_path
    )
    return log_path
