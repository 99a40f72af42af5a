"""Routes for storing uploads and downloading stored files."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import FileResponse
from pydantic import BaseModel, ConfigDict, Field

from ..config import Settings, get_settings
from ..errors import (
    DirectoryError,
    NoFilesUploaded,
    RequestTooLarge,
    UnsupportedFileType,
    UploadError,
)
from ..services.downloads import download_static_file
from ..services.uploads import UploadedFile, UploadService

router = APIRouter(prefix="/api/uploads", tags=["uploads"])


def get_upload_service(request: Request) -> UploadService:
    service = getattr(request.app.state, "upload_service", None)
    if service is None:
        raise HTTPException(status_code=500, detail="Upload service unavailable")
    return service


class UploadedFileResource(BaseModel):
    """Response payload describing a stored file."""

    model_config = ConfigDict(populate_by_name=True)

    storedName: str = Field(alias="stored_name")
    originalName: str = Field(alias="original_name")
    sizeBytes: int = Field(alias="size_bytes")


class UploadResponse(BaseModel):
    files: list[UploadedFileResource]


def _resource(record: UploadedFile) -> UploadedFileResource:
    return UploadedFileResource(
        stored_name=record.stored_name,
        original_name=record.original_name,
        size_bytes=record.size_bytes,
    )


def _error_detail(exc: UploadError) -> dict[str, Any]:
    return {
        "message": str(exc),
        "uploaded": [
            _resource(record).model_dump() for record in exc.uploaded_files
        ],
    }


@router.post(
    "",
    response_model=UploadResponse,
    status_code=201,
    response_model_by_alias=False,
)
async def upload_files(
    request: Request,
    rename: bool | None = Query(default=None),
    service: UploadService = Depends(get_upload_service),
    settings: Settings = Depends(get_settings),
) -> UploadResponse:
    rename_files = settings.upload_rename_files if rename is None else rename
    try:
        records = await service.upload_files(
            request,
            settings.upload_dir,
            rename=rename_files,
        )
        if not records:
            raise NoFilesUploaded("no files were found in the upload")
    except RequestTooLarge as exc:
        raise HTTPException(status_code=413, detail=_error_detail(exc)) from exc
    except UnsupportedFileType as exc:
        raise HTTPException(status_code=415, detail=_error_detail(exc)) from exc
    except NoFilesUploaded as exc:
        raise HTTPException(status_code=400, detail=_error_detail(exc)) from exc
    except UploadError as exc:
        raise HTTPException(status_code=500, detail=_error_detail(exc)) from exc
    except DirectoryError as exc:
        raise HTTPException(
            status_code=500,
            detail={"message": str(exc), "uploaded": []},
        ) from exc

    return UploadResponse(files=[_resource(record) for record in records])


@router.get("/{stored_name}/download")
async def download_file(
    stored_name: str,
    display_name: str | None = Query(default=None),
    settings: Settings = Depends(get_settings),
) -> FileResponse:
    return download_static_file(
        settings.upload_dir,
        stored_name,
        display_name or stored_name,
    )


__all__ = ["router", "get_upload_service"]
