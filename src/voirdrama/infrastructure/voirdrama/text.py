"""Display-text cleanup for extracted markup fragments."""

from __future__ import annotations

import re

_ENTITIES: tuple[tuple[str, str], ...] = (
    ("&amp;", "&"),
    ("&quot;", '"'),
    ("&#039;", "'"),
    ("&lt;", "<"),
    ("&gt;", ">"),
)

_WS_RE = re.compile(r"\s+")
_TAG_RE = re.compile(r"<[^>]+>")


def decode_html(text: str) -> str:
    """Decode the handful of entities WordPress emits and collapse whitespace."""
    for entity, char in _ENTITIES:
        text = text.replace(entity, char)
    return _WS_RE.sub(" ", text).strip()


def strip_tags(fragment: str) -> str:
    """Replace every tag with a space (callers decode/collapse afterwards)."""
    return _TAG_RE.sub(" ", fragment)


def extract_between(html: str, start: re.Pattern[str], end: re.Pattern[str]) -> str | None:
    """Return the text between the first ``start`` match and the next ``end``."""
    m = start.search(html)
    if not m:
        return None
    rest = html[m.end() :]
    e = end.search(rest)
    if not e:
        return None
    return rest[: e.start()]
