import random
import string
from collections.abc import Callable
from dataclasses import dataclass

from postlink.database.models import GroupRecord
from postlink.database.repositories.post_repository import PostRepository
from postlink.logging.logger import Log
from postlink.resolution.models import MatchStrategy
from postlink.resolution.resolver import GroupResolver
from postlink.service.schemas import UploadRequest

POST_ID_ALPHABET = string.ascii_letters + string.digits
POST_ID_LENGTH = 20


def generate_post_id() -> str:
    """Random 20-character id; uniqueness matters, unpredictability does not."""
    return "".join(random.choices(POST_ID_ALPHABET, k=POST_ID_LENGTH))


def copy_members(group: GroupRecord) -> tuple[str, ...]:
    """Snapshot a group's members, dropping null and empty entries."""
    return tuple(member for member in group.members if member)


@dataclass(frozen=True)
class UploadOutcome:
    group_id: str
    matched_via: MatchStrategy
    matched_candidate: str | None
    members_copied: int
    post_id: str


class UploadService:
    """Resolves the owning group of an upload and records a post for it."""

    def __init__(
        self,
        resolver: GroupResolver,
        post_repo: PostRepository,
        id_factory: Callable[[], str] = generate_post_id,
    ) -> None:
        self._resolver = resolver
        self._post_repo = post_repo
        self._id_factory = id_factory

    def create_post(self, request: UploadRequest) -> UploadOutcome:
        """Resolve, snapshot members, persist one post.

        Raises:
            GroupNotFoundError: if the file name matches no group; no post is written.
            PersistenceError: if the post insert fails.
        """
        resolution = self._resolver.resolve(request.original_file_name)
        members = copy_members(resolution.group)

        post = self._post_repo.create(
            self._id_factory(),
            image=request.encrypted_file_name,
            download_url=request.encrypted_url,
            users=members,
            categories=request.categories,
        )
        Log.info(
            f"Created post {post.id}",
            group=resolution.group.id,
            members=len(members),
        )
        return UploadOutcome(
            group_id=resolution.group.id,
            matched_via=resolution.via,
            matched_candidate=resolution.candidate,
            members_copied=len(members),
            post_id=post.id,
        )
