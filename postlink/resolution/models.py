from dataclasses import dataclass
from enum import Enum

from postlink.database.models import GroupRecord


class MatchStrategy(str, Enum):
    """Which resolution step produced the group."""

    EXACT_ID = "exact-id"
    ALTERNATE_NAME = "alternate-name"
    NORMALIZED_SCAN = "normalized-scan"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving a file name against the group catalog."""

    group: GroupRecord
    via: MatchStrategy
    candidate: str | None = None
