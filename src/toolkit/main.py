"""CLI entrypoint for running the demo upload service with uvicorn."""

from __future__ import annotations

import uvicorn

from .config import get_settings


def main() -> None:
    """Serve ``create_app`` on the configured host and port."""

    settings = get_settings()
    uvicorn.run(
        "toolkit.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
    )


if __name__ == "__main__":  # pragma: no cover - manual invocation
    main()
