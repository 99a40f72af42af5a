"""Helpers for request handlers: uploads, downloads, slugs and random names."""

from .errors import (
    DirectoryError,
    EmptyInputError,
    EmptyResultError,
    FileCreateError,
    FileWriteError,
    NoFilesUploaded,
    PartReadError,
    RequestTooLarge,
    SlugError,
    ToolkitError,
    UnsupportedFileType,
    UploadError,
)
from .services import UploadedFile, UploadService, download_static_file
from .utils import (
    create_dir_if_not_exists,
    detect_content_type,
    random_string,
    slugify,
)

__all__ = [
    "DirectoryError",
    "EmptyInputError",
    "EmptyResultError",
    "FileCreateError",
    "FileWriteError",
    "NoFilesUploaded",
    "PartReadError",
    "RequestTooLarge",
    "SlugError",
    "ToolkitError",
    "UnsupportedFileType",
    "UploadError",
    "UploadService",
    "UploadedFile",
    "create_dir_if_not_exists",
    "detect_content_type",
    "download_static_file",
    "random_string",
    "slugify",
]
