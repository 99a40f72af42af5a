"""Serve stored files as downloads."""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import HTTPException
from fastapi.responses import FileResponse

logger = logging.getLogger(__name__)


def download_static_file(
    directory: str | Path,
    file_name: str,
    display_name: str,
) -> FileResponse:
    """Return a response that makes the client save ``directory/file_name``.

    The ``Content-Disposition`` header is set to ``attachment`` with
    ``display_name`` as the suggested filename, so browsers download the file
    instead of rendering it. Range requests and content length are handled by
    ``FileResponse``.
    """

    file_path = Path(directory) / file_name
    if not file_path.is_file():
        logger.info("Download requested for missing file %s", file_path)
        raise HTTPException(status_code=404, detail="File not found")

    return FileResponse(
        file_path,
        filename=display_name,
        content_disposition_type="attachment",
    )


__all__ = ["download_static_file"]
