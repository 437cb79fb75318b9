import pytest
from cryptography.fernet import Fernet

from postlink.database.models import GroupRecord
from postlink.resolution.base import BaseGroupCatalog


class InMemoryGroupCatalog(BaseGroupCatalog):
    """Group catalog backed by a dict; records every lookup it serves."""

    def __init__(self, groups: list[GroupRecord] | None = None) -> None:
        self.groups: dict[str, GroupRecord] = {g.id: g for g in groups or []}
        self.id_lookups: list[str] = []
        self.alternate_lookups: list[str] = []
        self.scans = 0

    def add(
        self,
        group_id: str,
        members: list[str | None],
        alternate_names: tuple[str, ...] = (),
    ) -> None:
        self.groups[group_id] = GroupRecord(
            id=group_id,
            members=tuple(members),
            alternate_names=frozenset(alternate_names),
        )

    def get(self, group_id: str) -> GroupRecord | None:
        self.id_lookups.append(group_id)
        return self.groups.get(group_id)

    def find_by_alternate_name(self, name: str) -> GroupRecord | None:
        self.alternate_lookups.append(name)
        for group_id in sorted(self.groups):
            if name in self.groups[group_id].alternate_names:
                return self.groups[group_id]
        return None

    def list_all(self) -> list[GroupRecord]:
        self.scans += 1
        return [self.groups[group_id] for group_id in sorted(self.groups)]


@pytest.fixture()
def catalog() -> InMemoryGroupCatalog:
    return InMemoryGroupCatalog()


@pytest.fixture()
def fernet_key() -> str:
    return Fernet.generate_key().decode("ascii")
