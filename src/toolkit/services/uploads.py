"""Multipart upload handling and on-disk persistence."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator, Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import IO, TYPE_CHECKING

from starlette.datastructures import FormData, UploadFile
from starlette.formparsers import MultiPartException, MultiPartParser
from starlette.requests import ClientDisconnect, Request

from ..errors import (
    FileCreateError,
    FileWriteError,
    NoFilesUploaded,
    PartReadError,
    RequestTooLarge,
    UnsupportedFileType,
)
from ..utils.directories import create_dir_if_not_exists
from ..utils.random_strings import random_string
from ..utils.sniffing import SNIFF_LEN, detect_content_type

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..config import Settings

logger = logging.getLogger(__name__)

DEFAULT_MAX_TOTAL_BYTES = 1024 * 1024 * 1024  # 1 GiB
RANDOM_NAME_LENGTH = 25
_COPY_CHUNK_SIZE = 1024 * 1024  # 1 MiB


@dataclass(frozen=True)
class UploadedFile:
    """A file persisted by :class:`UploadService`."""

    stored_name: str
    original_name: str
    size_bytes: int


def file_extension(filename: str) -> str:
    """Return the suffix of the last path element, starting at its final dot."""

    base = filename.rsplit("/", 1)[-1]
    dot = base.rfind(".")
    if dot < 0:
        return ""
    return base[dot:]


class UploadService:
    """Validate multipart uploads and write their files to a directory.

    The service is configured once and is read-only afterwards, so a single
    instance can serve concurrent requests.
    """

    def __init__(
        self,
        *,
        max_total_bytes: int = 0,
        allowed_content_types: Iterable[str] = (),
    ) -> None:
        if max_total_bytes < 0:
            raise ValueError("max_total_bytes must be non-negative")
        self._max_total_bytes = max_total_bytes or DEFAULT_MAX_TOTAL_BYTES
        self._allowed_content_types = frozenset(
            item.strip().lower() for item in allowed_content_types if item.strip()
        )

    @classmethod
    def from_settings(cls, settings: "Settings") -> "UploadService":
        return cls(
            max_total_bytes=settings.upload_max_total_bytes,
            allowed_content_types=settings.upload_allowed_content_types,
        )

    @property
    def max_total_bytes(self) -> int:
        return self._max_total_bytes

    @property
    def allowed_content_types(self) -> frozenset[str]:
        return self._allowed_content_types

    def is_allowed(self, content_type: str) -> bool:
        """Return True when ``content_type`` passes the allow-list (empty allows all)."""

        if not self._allowed_content_types:
            return True
        return content_type.lower() in self._allowed_content_types

    async def upload_files(
        self,
        request: Request,
        upload_dir: str | Path,
        rename: bool = True,
    ) -> list[UploadedFile]:
        """Store every file part of ``request`` under ``upload_dir``.

        Files are processed in the order they appear in the body. When
        ``rename`` is true each file is stored under a random 25 character
        name that keeps the original extension; otherwise the client supplied
        filename is used verbatim and the caller owns its path safety.

        Processing stops at the first failure. The raised
        :class:`~toolkit.errors.UploadError` carries the records for files
        already written in ``uploaded_files``; those files are not removed.
        """

        directory = create_dir_if_not_exists(upload_dir)
        form = await self._parse_form(request)

        uploaded: list[UploadedFile] = []
        try:
            for _, value in form.multi_items():
                if not isinstance(value, UploadFile):
                    continue
                record = await self._store(
                    value,
                    directory,
                    rename=rename,
                    uploaded=uploaded,
                )
                uploaded.append(record)
        finally:
            await form.close()
        return uploaded

    async def upload_one_file(
        self,
        request: Request,
        upload_dir: str | Path,
        rename: bool = True,
    ) -> UploadedFile:
        """Store the files of ``request`` and return the first one."""

        files = await self.upload_files(request, upload_dir, rename=rename)
        if not files:
            raise NoFilesUploaded("no files were found in the upload")
        return files[0]

    async def _parse_form(self, request: Request) -> FormData:
        content_type = request.headers.get("content-type", "")
        media_type, _, params = content_type.partition(";")
        if (
            media_type.strip().lower() != "multipart/form-data"
            or "boundary=" not in params.lower()
        ):
            logger.warning("Rejected upload with content type %r", content_type)
            raise RequestTooLarge(
                "failed parsing uploaded files, the request is not multipart/form-data"
            )

        declared_length = request.headers.get("content-length", "")
        if declared_length.isdigit() and int(declared_length) > self._max_total_bytes:
            logger.warning(
                "Rejected upload of %s bytes (limit %d)",
                declared_length,
                self._max_total_bytes,
            )
            raise RequestTooLarge(self._too_large_message())

        parser = MultiPartParser(request.headers, self._limited_stream(request))
        try:
            return await parser.parse()
        except (MultiPartException, ValueError, ClientDisconnect) as exc:
            logger.warning("Failed parsing multipart body: %s", exc)
            raise RequestTooLarge(f"failed parsing uploaded files: {exc}") from exc

    async def _limited_stream(self, request: Request) -> AsyncGenerator[bytes, None]:
        total = 0
        async for chunk in request.stream():
            total += len(chunk)
            if total > self._max_total_bytes:
                logger.warning(
                    "Upload body exceeded %d bytes; aborting", self._max_total_bytes
                )
                raise RequestTooLarge(self._too_large_message())
            yield chunk

    def _too_large_message(self) -> str:
        return (
            "failed parsing uploaded files, the upload exceeds "
            f"{self._max_total_bytes} bytes"
        )

    async def _store(
        self,
        upload: UploadFile,
        directory: Path,
        *,
        rename: bool,
        uploaded: Sequence[UploadedFile],
    ) -> UploadedFile:
        original_name = upload.filename or ""

        try:
            head = await upload.read(SNIFF_LEN)
        except OSError as exc:
            raise PartReadError(
                f"unable to read uploaded file {original_name!r}: {exc}",
                uploaded_files=uploaded,
            ) from exc

        content_type = detect_content_type(head)
        if not self.is_allowed(content_type):
            logger.warning(
                "Rejected upload %r with sniffed type %s", original_name, content_type
            )
            raise UnsupportedFileType(
                content_type,
                filename=original_name,
                uploaded_files=uploaded,
            )

        try:
            await upload.seek(0)
        except OSError as exc:
            raise PartReadError(
                f"unable to rewind uploaded file {original_name!r}: {exc}",
                uploaded_files=uploaded,
            ) from exc

        if rename:
            stored_name = f"{random_string(RANDOM_NAME_LENGTH)}{file_extension(original_name)}"
        else:
            stored_name = original_name
        destination = directory / stored_name

        try:
            out_file = destination.open("wb")
        except OSError as exc:
            logger.exception("Failed to create %s", destination)
            raise FileCreateError(
                f"unable to create {destination}: {exc}",
                uploaded_files=uploaded,
            ) from exc

        try:
            with out_file:
                size_bytes = await _copy_upload(upload, out_file)
        except OSError as exc:
            logger.exception("Failed to write %s", destination)
            raise FileWriteError(
                f"unable to write {destination}: {exc}",
                uploaded_files=uploaded,
            ) from exc

        logger.info(
            "Stored upload %r as %s (%s, %d bytes)",
            original_name,
            destination,
            content_type,
            size_bytes,
        )
        return UploadedFile(
            stored_name=stored_name,
            original_name=original_name,
            size_bytes=size_bytes,
        )


async def _copy_upload(upload: UploadFile, out_file: IO[bytes]) -> int:
    size = 0
    while True:
        chunk = await upload.read(_COPY_CHUNK_SIZE)
        if not chunk:
            break
        out_file.write(chunk)
        size += len(chunk)
    return size


__all__ = [
    "DEFAULT_MAX_TOTAL_BYTES",
    "RANDOM_NAME_LENGTH",
    "UploadService",
    "UploadedFile",
    "file_extension",
]
