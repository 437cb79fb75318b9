from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class TaskState(str, Enum):
    PENDING = "pending"
    UPLOADING = "uploading"
    ENCRYPTING = "encrypting"
    SUBMITTED = "submitted"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (TaskState.SUBMITTED, TaskState.FAILED)


@dataclass
class UploadTask:
    """Per-file upload state, mutated only by the orchestrator."""

    source: Path
    category: str
    progress: float = 0.0
    state: TaskState = TaskState.PENDING
    group: str | None = None
    error: str | None = None

    @property
    def file_name(self) -> str:
        return self.source.name


@dataclass(frozen=True)
class SubmissionPayload:
    """Wire body for the resolution service; both encrypted fields are base64."""

    file_name: str
    url: str
    original_file_name: str
    categories: str | list[str]

    def to_json(self) -> dict[str, object]:
        return {
            "fileName": self.file_name,
            "url": self.url,
            "originalFileName": self.original_file_name,
            "categories": self.categories,
        }


@dataclass(frozen=True)
class SubmissionReceipt:
    """Successful resolution reported by the service."""

    group: str
    matched_via: str
    matched_candidate: str | None
    members_copied: int
    post_id: str


@dataclass(frozen=True)
class UploadResult:
    file_name: str
    group: str


@dataclass(frozen=True)
class UploadFailure:
    file_name: str
    reason: str


@dataclass
class BatchResult:
    """Outcome of one upload_all call, collected per file."""

    results: list[UploadResult] = field(default_factory=list)
    failures: list[UploadFailure] = field(default_factory=list)

    @property
    def total_files(self) -> int:
        return len(self.results) + len(self.failures)

    @property
    def all_success(self) -> bool:
        return not self.failures
