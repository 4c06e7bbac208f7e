"""Title normalization for exact title matching.

Pure transformation logic, no I/O.
"""

from __future__ import annotations

import re

# Runs of anything that is not an ASCII lowercase letter or digit.
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


def normalize_title(title: str) -> str:
    """Lowercase, ``&`` -> ``and``, non-alphanumerics collapsed, trimmed.

    Idempotent: ``normalize_title(normalize_title(t)) == normalize_title(t)``.
    """
    text = title.lower().replace("&", "and")
    return _NON_ALNUM_RE.sub(" ", text).strip()


def titles_match(a: str, b: str) -> bool:
    return normalize_title(a) == normalize_title(b)
