"""Run the post page with uvicorn."""
from __future__ import annotations

import os

import uvicorn


def main() -> None:
    uvicorn.run(
        "postpage.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":  # pragma: no cover - manual script usage
    main()
