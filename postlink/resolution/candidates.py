import re

SEGMENT_DELIMITER = " - "
DOCUMENT_EXTENSIONS = ("pdf", "doc", "docx", "xls", "xlsx")

_EXTENSION_RE = re.compile(
    r"\.(?:" + "|".join(DOCUMENT_EXTENSIONS) + r")\Z",
    re.IGNORECASE,
)


def strip_extension(file_name: str) -> str:
    """Drop one trailing recognized document extension."""
    return _EXTENSION_RE.sub("", file_name)


def split_segments(base: str) -> list[str]:
    """Split on ``" - "``, trimming each part and discarding empty ones."""
    parts = (part.strip() for part in base.split(SEGMENT_DELIMITER))
    return [part for part in parts if part]


def build_candidates(file_name: str) -> list[str]:
    """Return lookup keys for a file name, highest confidence first.

    The first segment (usually the partner name) leads, the remaining segments
    follow in order and the whole base name comes last. Repeats are dropped so
    ``"Acme Corp.pdf"`` yields a single candidate.

    >>> build_candidates("A - B - C.pdf")
    ['A', 'B', 'C', 'A - B - C']
    """
    base = strip_extension(file_name)
    ordered = split_segments(base)
    if base.strip():
        ordered.append(base)

    candidates: list[str] = []
    for candidate in ordered:
        if candidate not in candidates:
            candidates.append(candidate)
    return candidates
