"""Port for the external-ID -> series-slug mapping."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ExternalIdIndexPort(Protocol):
    def get(self, external_id: str) -> str | None: ...

    def record(self, external_id: str, slug: str) -> None: ...
