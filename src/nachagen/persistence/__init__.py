"""Pluggable storage backends for rendered files, behind the IFileStore protocol."""

from __future__ import annotations

from nachagen.core.config import AppSettings
from nachagen.core.protocols import IFileStore
from nachagen.persistence.memory_backend import MemoryFileStore
from nachagen.persistence.s3_backend import S3FileStore


def create_file_store(settings: AppSettings | None = None) -> IFileStore:
    """Create the file store selected by ``settings.storage.backend``."""
    if settings is None:
        settings = AppSettings()

    if settings.storage.backend == "memory":
        return MemoryFileStore()

    return S3FileStore(
        bucket=settings.s3.bucket,
        region=settings.s3.region,
        endpoint_url=settings.s3.endpoint_url,
    )


__all__ = ["MemoryFileStore", "S3FileStore", "create_file_store"]
