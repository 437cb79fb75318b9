from abc import ABC, abstractmethod
from collections.abc import Callable

ProgressCallback = Callable[[int, int], None]


class BaseBlobStore(ABC):
    """Contract for all blob storage adapters."""

    @abstractmethod
    async def upload(
        self,
        key: str,
        data: bytes,
        on_progress: ProgressCallback | None = None,
    ) -> str:
        """Store bytes under a key.

        Args:
            key: Object key, e.g. ``groups/Acme Corp - Q2 Report.pdf``.
            data: File content.
            on_progress: Called with (bytes_transferred, total_bytes) as
                chunks are written.

        Returns:
            A retrievable reference (URL) to the stored object.

        Raises:
            TransferError: if the transfer fails for any reason.
        """


def chunked(data: bytes, chunk_size: int) -> list[bytes]:
    """Split data into chunks; an empty payload yields one empty chunk."""
    if not data:
        return [b""]
    return [data[i : i + chunk_size] for i in range(0, len(data), chunk_size)]
