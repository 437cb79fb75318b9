from abc import ABC, abstractmethod

from postlink.database.models import GroupRecord


class BaseGroupCatalog(ABC):
    """Read-only view of the group records a file can be resolved against."""

    @abstractmethod
    def get(self, group_id: str) -> GroupRecord | None:
        """Return the record whose identifier is exactly ``group_id``."""

    @abstractmethod
    def find_by_alternate_name(self, name: str) -> GroupRecord | None:
        """Return the first record listing ``name`` among its alternate names."""

    @abstractmethod
    def list_all(self) -> list[GroupRecord]:
        """Return every record, ordered by identifier."""
