import asyncio
from pathlib import Path, PurePosixPath
from typing import BinaryIO
from urllib.parse import quote

from postlink.storage.base import BaseBlobStore, ProgressCallback, chunked
from postlink.storage.exceptions import TransferError


def blob_file_path(root: Path, key: str) -> Path:
    """Build path to a blob file: {root}/{key}, refusing keys that escape root."""
    parts = PurePosixPath(key).parts
    if not parts or any(part in ("..", "/") for part in parts):
        raise TransferError(f"Invalid blob key: {key!r}")
    return root.joinpath(*parts)


def _write_chunk(fh: BinaryIO, chunk: bytes) -> None:
    fh.write(chunk)


class LocalBlobStore(BaseBlobStore):
    """Writes blobs to a directory on the local filesystem.

    Filesystem calls run in worker threads so sibling uploads keep running
    while a chunk is written.
    """

    def __init__(self, root: Path, base_url: str = "", chunk_size: int = 256 * 1024) -> None:
        self._root = root
        self._base_url = base_url.rstrip("/")
        self._chunk_size = chunk_size

    async def upload(
        self,
        key: str,
        data: bytes,
        on_progress: ProgressCallback | None = None,
    ) -> str:
        path = blob_file_path(self._root, key)
        total = len(data)
        transferred = 0
        try:
            await asyncio.to_thread(path.parent.mkdir, parents=True, exist_ok=True)
            fh = await asyncio.to_thread(path.open, "wb")
            try:
                for chunk in chunked(data, self._chunk_size):
                    await asyncio.to_thread(_write_chunk, fh, chunk)
                    transferred += len(chunk)
                    if on_progress is not None:
                        on_progress(transferred, total)
            finally:
                await asyncio.to_thread(fh.close)
        except OSError as exc:
            raise TransferError(f"Failed to write {key}: {exc}") from exc
        return self._reference(path, key)

    def _reference(self, path: Path, key: str) -> str:
        if self._base_url:
            return f"{self._base_url}/{quote(key)}"
        return path.resolve().as_uri()
