"""Directory helpers."""

from __future__ import annotations

import logging
from pathlib import Path

from ..errors import DirectoryError

logger = logging.getLogger(__name__)

_DIR_MODE = 0o755


def create_dir_if_not_exists(path: str | Path) -> Path:
    """Create ``path`` and any missing parents; existing directories are left alone."""

    directory = Path(path)
    if directory.is_dir():
        return directory
    try:
        directory.mkdir(mode=_DIR_MODE, parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryError(f"unable to create directory {directory}: {exc}") from exc
    logger.debug("Created directory %s", directory)
    return directory


__all__ = ["create_dir_if_not_exists"]
