from pathlib import Path

import httpx

from postlink.config.settings import Settings
from postlink.storage.base import BaseBlobStore
from postlink.storage.http_adapter import HttpBlobStore
from postlink.storage.local_adapter import LocalBlobStore


class BlobStoreFactory:
    """Creates the blob store adapter selected by settings."""

    BACKENDS = ("local", "http")

    @classmethod
    def create(cls, settings: Settings, client: httpx.AsyncClient) -> BaseBlobStore:
        backend = settings.storage_backend.lower()
        if backend == "local":
            return LocalBlobStore(
                Path(settings.storage_root),
                base_url=settings.storage_base_url,
                chunk_size=settings.storage_chunk_size,
            )
        if backend == "http":
            return HttpBlobStore(
                client,
                settings.storage_base_url,
                chunk_size=settings.storage_chunk_size,
            )
        raise ValueError(
            f"Unknown storage backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
        )
