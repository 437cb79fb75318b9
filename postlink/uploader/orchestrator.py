import asyncio
from collections.abc import Iterable, Sequence
from pathlib import Path

import httpx

from postlink.config.settings import Settings
from postlink.encryption.base import BaseEncryptor
from postlink.encryption.factory import EncryptorFactory
from postlink.encryption.fields import encrypt_field
from postlink.logging.logger import Log
from postlink.storage.base import BaseBlobStore
from postlink.storage.exceptions import TransferError
from postlink.storage.factory import BlobStoreFactory
from postlink.uploader.client import ResolutionClient
from postlink.uploader.exceptions import ValidationError
from postlink.uploader.models import (
    BatchResult,
    SubmissionPayload,
    TaskState,
    UploadFailure,
    UploadResult,
    UploadTask,
)


class UploadOrchestrator:
    """Drives one upload pipeline per file: transfer -> encrypt -> submit.

    All pipelines share one event loop. A failing file is marked failed and
    recorded; it never stops the others. ``results``, ``upload_success`` and
    ``last_error`` describe the most recent batch only.
    """

    def __init__(
        self,
        blob_store: BaseBlobStore,
        encryptor: BaseEncryptor,
        client: ResolutionClient,
        allowed_categories: Iterable[str] = (),
        storage_prefix: str = "groups",
    ) -> None:
        self._blob_store = blob_store
        self._encryptor = encryptor
        self._client = client
        self._allowed_categories = tuple(allowed_categories)
        self._storage_prefix = storage_prefix.strip("/")
        self._tasks: list[UploadTask] = []
        self.results: list[UploadResult] = []
        self.upload_success = False
        self.last_error: str | None = None

    @property
    def tasks(self) -> list[UploadTask]:
        return list(self._tasks)

    @property
    def progress(self) -> float:
        """Mean progress fraction across the current tasks."""
        if not self._tasks:
            return 0.0
        return sum(task.progress for task in self._tasks) / len(self._tasks)

    def select_files(self, files: Sequence[Path | str], category: str) -> list[UploadTask]:
        """Create one pending task per file.

        Raises:
            ValidationError: if no file or no usable category is given.
        """
        self._validate(files, category)
        self._tasks = [UploadTask(source=Path(f), category=category) for f in files]
        return self.tasks

    async def upload_all(self, tasks: Sequence[UploadTask], category: str) -> BatchResult:
        """Run every task to a terminal state and collect each outcome.

        Raises:
            ValidationError: if no task or no usable category is given.
        """
        self._validate(tasks, category)
        self._tasks = list(tasks)
        self.results = []
        self.upload_success = False
        self.last_error = None
        Log.info(f"Uploading {len(tasks)} files with category '{category}'")

        await asyncio.gather(*(self._run_task(task, category) for task in tasks))

        batch = BatchResult()
        for task in tasks:
            if task.state is TaskState.SUBMITTED and task.group is not None:
                batch.results.append(UploadResult(task.file_name, task.group))
            else:
                batch.failures.append(
                    UploadFailure(task.file_name, task.error or "unknown error")
                )
        Log.info(
            f"Upload batch finished: {len(batch.results)} submitted, "
            f"{len(batch.failures)} failed"
        )
        return batch

    async def _run_task(self, task: UploadTask, category: str) -> None:
        task.category = category
        try:
            task.state = TaskState.UPLOADING
            data = await self._read(task)
            url = await self._blob_store.upload(
                f"{self._storage_prefix}/{task.file_name}",
                data,
                on_progress=lambda done, total: self._on_progress(task, done, total),
            )
            task.progress = 1.0
            Log.info(f"Stored {task.file_name} ({len(data)} bytes)")

            task.state = TaskState.ENCRYPTING
            payload = SubmissionPayload(
                file_name=encrypt_field(self._encryptor, task.file_name),
                url=encrypt_field(self._encryptor, url),
                original_file_name=task.file_name,
                categories=category,
            )
            receipt = await self._client.submit(payload)
        except Exception as exc:
            self._fail(task, exc)
            return

        task.group = receipt.group
        task.state = TaskState.SUBMITTED
        self.results.append(UploadResult(task.file_name, receipt.group))
        self.upload_success = True
        self.last_error = None
        Log.info(
            f"{task.file_name} linked to group '{receipt.group}' "
            f"via {receipt.matched_via}, post {receipt.post_id}"
        )

    def _fail(self, task: UploadTask, exc: Exception) -> None:
        task.state = TaskState.FAILED
        task.error = str(exc) or type(exc).__name__
        self.last_error = task.error
        Log.error(f"Error uploading file {task.file_name}: {task.error}")

    @staticmethod
    async def _read(task: UploadTask) -> bytes:
        try:
            return await asyncio.to_thread(task.source.read_bytes)
        except OSError as exc:
            raise TransferError(f"Cannot read {task.source}: {exc}") from exc

    @staticmethod
    def _on_progress(task: UploadTask, transferred: int, total: int) -> None:
        task.progress = transferred / total if total else 1.0
        Log.debug(f"Upload of {task.file_name} is {task.progress:.0%} done")

    def _validate(self, items: Sequence[object], category: str) -> None:
        if not items:
            raise ValidationError("Select at least one file before uploading")
        if not category or not category.strip():
            raise ValidationError("Please select a category before uploading")
        if self._allowed_categories and category not in self._allowed_categories:
            raise ValidationError(
                f"Unknown category '{category}'. Choose from: {list(self._allowed_categories)}"
            )


def build_orchestrator(settings: Settings, http_client: httpx.AsyncClient) -> UploadOrchestrator:
    """Build an UploadOrchestrator with the configured adapters."""
    return UploadOrchestrator(
        blob_store=BlobStoreFactory.create(settings, http_client),
        encryptor=EncryptorFactory.create(settings),
        client=ResolutionClient(http_client, path=f"{settings.api_prefix}/uploads"),
        allowed_categories=settings.upload_categories,
        storage_prefix=settings.storage_prefix,
    )
