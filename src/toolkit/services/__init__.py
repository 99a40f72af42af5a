"""Service layer for upload and download handling."""

from .downloads import download_static_file
from .uploads import UploadedFile, UploadService

__all__ = ["UploadService", "UploadedFile", "download_static_file"]
