from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class GroupRecord:
    """Represents a row from the groups table."""

    id: str
    members: tuple[str | None, ...] = ()
    alternate_names: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class PostRecord:
    """Represents a row from the posts table.

    ``users`` is a copy of the group's members taken when the post was created.
    """

    id: str
    image: str
    download_url: str
    users: tuple[str, ...]
    categories: str | list[str] | None
    created_at: datetime | None = None
