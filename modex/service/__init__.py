"""Service module - Upload, listing and lookup flow over the registry."""

from .uploads import UploadConfig, UploadService, status_for

__all__ = [
    "UploadConfig",
    "UploadService",
    "status_for",
]
