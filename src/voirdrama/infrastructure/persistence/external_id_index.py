"""Process-lifetime map from external (IMDb) IDs to series slugs."""

from __future__ import annotations

import structlog

log = structlog.get_logger(__name__)


class ExternalIdIndex:
    """Grows monotonically, never evicted, rebuilt from scratch on restart.

    One shared instance is created at startup and injected into every
    use case that reads or records mappings.
    """

    def __init__(self) -> None:
        self._slugs: dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._slugs)

    def __contains__(self, external_id: object) -> bool:
        return external_id in self._slugs

    def get(self, external_id: str) -> str | None:
        return self._slugs.get(external_id)

    def record(self, external_id: str, slug: str) -> None:
        if self._slugs.get(external_id) == slug:
            return
        self._slugs[external_id] = slug
        log.debug("external_id_recorded", external_id=external_id, slug=slug)
