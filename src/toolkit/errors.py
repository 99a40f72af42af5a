"""Exception hierarchy shared by the toolkit helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .services.uploads import UploadedFile


class ToolkitError(RuntimeError):
    """Base error raised by toolkit helpers."""


class DirectoryError(ToolkitError):
    """Raised when a directory cannot be created or accessed."""


class SlugError(ToolkitError):
    """Base error raised while building a slug."""


class EmptyInputError(SlugError):
    """Raised when an empty string is passed to the slug generator."""


class EmptyResultError(SlugError):
    """Raised when no characters survive slug normalisation."""


class UploadError(ToolkitError):
    """Base error raised by the upload pipeline.

    ``uploaded_files`` holds the records for files that were fully written
    before the failure. They are left on disk; callers decide whether to
    remove them.
    """

    def __init__(
        self,
        message: str,
        *,
        uploaded_files: Sequence["UploadedFile"] | None = None,
    ) -> None:
        super().__init__(message)
        self.uploaded_files: list["UploadedFile"] = list(uploaded_files or [])


class RequestTooLarge(UploadError):
    """Raised when the multipart body exceeds the limit or cannot be parsed."""


class UnsupportedFileType(UploadError):
    """Raised when a sniffed content type is not on the allow-list."""

    def __init__(
        self,
        content_type: str,
        *,
        filename: str | None = None,
        uploaded_files: Sequence["UploadedFile"] | None = None,
    ) -> None:
        super().__init__(
            f"the uploaded file type is not permitted: {content_type}",
            uploaded_files=uploaded_files,
        )
        self.content_type = content_type
        self.filename = filename


class PartReadError(UploadError):
    """Raised when an uploaded part cannot be read before it is stored."""


class FileCreateError(UploadError):
    """Raised when the destination file cannot be created."""


class FileWriteError(UploadError):
    """Raised when copying an upload into its destination file fails."""


class NoFilesUploaded(UploadError):
    """Raised when a single-file upload finds no file parts in the request."""


__all__ = [
    "ToolkitError",
    "DirectoryError",
    "SlugError",
    "EmptyInputError",
    "EmptyResultError",
    "UploadError",
    "RequestTooLarge",
    "UnsupportedFileType",
    "PartReadError",
    "FileCreateError",
    "FileWriteError",
    "NoFilesUploaded",
]
