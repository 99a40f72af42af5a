"""Application factory for the FastAPI service."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI

from .config import get_settings
from .routers.uploads import router as uploads_router
from .services.uploads import UploadService

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _configure_logging() -> None:
    """Configure logging based on LOG_LEVEL environment variable."""
    # Load .env file first to ensure LOG_FILE is available
    load_dotenv()

    log_level_str = os.getenv("LOG_LEVEL", "INFO").upper()
    log_level = getattr(logging, log_level_str, logging.INFO)

    handlers: list[logging.Handler] = []

    log_file = os.getenv("LOG_FILE")
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_LOG_DATE_FORMAT))
        handlers.append(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_LOG_DATE_FORMAT))
    handlers.append(console_handler)

    logging.basicConfig(
        level=log_level,
        handlers=handlers,
        force=True,  # Override any existing configuration
    )

    logging.getLogger("toolkit").setLevel(log_level)
    logging.getLogger("uvicorn").setLevel(log_level)
    logging.getLogger("uvicorn.access").setLevel(log_level)
    logging.getLogger("uvicorn.error").setLevel(log_level)

    # python-multipart logs every parser callback at DEBUG
    if log_level > logging.DEBUG:
        logging.getLogger("python_multipart").setLevel(logging.WARNING)
        logging.getLogger("multipart").setLevel(logging.WARNING)


def create_app() -> FastAPI:
    _configure_logging()

    settings = get_settings()
    upload_service = UploadService.from_settings(settings)

    app = FastAPI(
        title="Web Toolkit",
        version="0.1.0",
        description="Upload, download and slug helpers for request handlers.",
    )

    app.state.upload_service = upload_service

    app.include_router(uploads_router)

    @app.get("/health", tags=["health"])
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    logging.getLogger(__name__).info(
        "Uploads stored in %s (limit %d bytes, allowed types: %s)",
        settings.upload_dir,
        upload_service.max_total_bytes,
        ", ".join(sorted(upload_service.allowed_content_types)) or "any",
    )
    return app


__all__ = ["create_app"]
