"""Layered group resolution.

Steps, first success wins:
1. Exact identifier lookup for each candidate (slashes encoded).
2. Alternate-name lookup for each candidate.
3. Normalized comparison of every candidate against every identifier.
"""

from postlink.database.models import GroupRecord
from postlink.logging.logger import Log
from postlink.resolution.base import BaseGroupCatalog
from postlink.resolution.candidates import build_candidates
from postlink.resolution.exceptions import GroupNotFoundError
from postlink.resolution.models import MatchStrategy, Resolution
from postlink.resolution.normalize import normalize, to_identifier


class GroupResolver:
    """Finds the group that owns a document, judging by its file name."""

    def __init__(
        self,
        catalog: BaseGroupCatalog,
        fallback_group_id: str | None = None,
    ) -> None:
        self._catalog = catalog
        self._fallback_group_id = fallback_group_id

    def resolve(self, original_file_name: str) -> Resolution:
        """Resolve a file name to a group.

        Raises:
            GroupNotFoundError: if every strategy fails and no fallback
                group is configured.
        """
        candidates = build_candidates(original_file_name)
        Log.debug(f"Candidates for '{original_file_name}': {candidates}")

        resolution = (
            self._probe_exact_id(candidates)
            or self._probe_alternate_names(candidates)
            or self._scan_normalized(candidates)
        )
        if resolution is None:
            resolution = self._fallback(original_file_name)

        Log.info(
            f"Resolved '{original_file_name}'",
            group=resolution.group.id,
            via=resolution.via.value,
            candidate=resolution.candidate,
        )
        return resolution

    def _probe_exact_id(self, candidates: list[str]) -> Resolution | None:
        for candidate in candidates:
            group = self._catalog.get(to_identifier(candidate))
            if group is not None:
                return Resolution(group, MatchStrategy.EXACT_ID, candidate)
        return None

    def _probe_alternate_names(self, candidates: list[str]) -> Resolution | None:
        for candidate in candidates:
            group = self._catalog.find_by_alternate_name(candidate)
            if group is not None:
                return Resolution(group, MatchStrategy.ALTERNATE_NAME, candidate)
        return None

    def _scan_normalized(self, candidates: list[str]) -> Resolution | None:
        # First candidate per normalized key, so the reported one is the
        # highest-confidence spelling.
        by_key: dict[str, str] = {}
        for candidate in candidates:
            key = normalize(candidate)
            if key:
                by_key.setdefault(key, candidate)
        if not by_key:
            return None

        for group in self._catalog.list_all():
            candidate = by_key.get(normalize(group.id))
            if candidate is not None:
                return Resolution(group, MatchStrategy.NORMALIZED_SCAN, candidate)
        return None

    def _fallback(self, original_file_name: str) -> Resolution:
        if self._fallback_group_id is None:
            Log.warning(f"No group found for '{original_file_name}'")
            raise GroupNotFoundError(original_file_name)

        Log.warning(
            f"No group found for '{original_file_name}'; "
            f"falling back to '{self._fallback_group_id}'"
        )
        group = self._catalog.get(self._fallback_group_id)
        if group is None:
            group = GroupRecord(id=self._fallback_group_id)
        return Resolution(group, MatchStrategy.FALLBACK)
