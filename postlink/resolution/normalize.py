"""Identifier encoding and loose normalization for group names."""

import re

# Group identifiers cannot hold "/", so the catalog stores U+FF0F instead.
FULLWIDTH_SLASH = "／"
FULLWIDTH_AMPERSAND = "＆"

_SMART_QUOTES_RE = re.compile("[“”‘’]")
_DISALLOWED_RE = re.compile(r"[^a-z0-9/& ]+")
_WHITESPACE_RE = re.compile(r"\s+")


def to_identifier(candidate: str) -> str:
    """Encode a candidate as a catalog identifier."""
    return candidate.replace("/", FULLWIDTH_SLASH)


def normalize(value: str | None) -> str:
    """Reduce a name to lowercase ``[a-z0-9/& ]`` with single spaces.

    Idempotent: ``normalize(normalize(s)) == normalize(s)``.
    """
    text = (value or "").lower()
    text = _SMART_QUOTES_RE.sub("'", text)
    text = text.replace(FULLWIDTH_AMPERSAND, "&")
    text = text.replace(FULLWIDTH_SLASH, "/")
    text = _DISALLOWED_RE.sub(" ", text)
    text = _WHITESPACE_RE.sub(" ", text)
    return text.strip()
