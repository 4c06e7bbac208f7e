"""Pipeline exceptions.

A pattern that finds nothing in upstream markup is not an error: parsers
return ``None`` or an empty collection instead of raising.
"""

from __future__ import annotations


class VoirdramaError(Exception):
    """Base class for all pipeline errors."""


class UpstreamUnavailable(VoirdramaError):
    """Raised when an external fetch times out, fails or returns non-2xx."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{reason} for {url}")
        self.url = url
        self.reason = reason


class EnrichmentUnavailable(VoirdramaError):
    """Raised when the metadata service cannot be queried."""
