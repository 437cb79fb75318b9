from collections.abc import AsyncIterator
from urllib.parse import quote

import httpx

from postlink.storage.base import BaseBlobStore, ProgressCallback, chunked
from postlink.storage.exceptions import TransferError


class HttpBlobStore(BaseBlobStore):
    """Uploads blobs with a streamed HTTP PUT to an object-storage endpoint.

    The reference returned is the ``Location`` header when the server sends
    one, otherwise the URL the object was PUT to.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str,
        chunk_size: int = 256 * 1024,
    ) -> None:
        if not base_url:
            raise ValueError("storage_base_url is required for storage_backend=http")
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._chunk_size = chunk_size

    async def upload(
        self,
        key: str,
        data: bytes,
        on_progress: ProgressCallback | None = None,
    ) -> str:
        url = f"{self._base_url}/{quote(key)}"
        total = len(data)

        async def body() -> AsyncIterator[bytes]:
            transferred = 0
            for chunk in chunked(data, self._chunk_size):
                yield chunk
                transferred += len(chunk)
                if on_progress is not None:
                    on_progress(transferred, total)

        try:
            response = await self._client.put(
                url,
                content=body(),
                headers={
                    "Content-Length": str(total),
                    "Content-Type": "application/octet-stream",
                },
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise TransferError(
                f"Blob upload of {key} rejected with HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise TransferError(f"Blob upload of {key} failed: {exc}") from exc

        return response.headers.get("Location", url)
