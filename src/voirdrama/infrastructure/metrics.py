"""In-memory addon request counters, served by ``/stats.json``.

Plain integers mutated inside the single-threaded event loop: no locks,
no I/O, reset on restart.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

RESOURCES = ("catalog", "meta", "stream")


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class AddonStats:
    """Process start time plus one request counter per addon resource."""

    started_at: str = field(default_factory=_utc_now_iso)
    requests: dict[str, int] = field(default_factory=lambda: dict.fromkeys(RESOURCES, 0))

    def record_request(self, resource: str) -> None:
        self.requests[resource] = self.requests.get(resource, 0) + 1

    def snapshot(self) -> dict[str, object]:
        """Return a JSON-serializable summary."""
        return {"startedAt": self.started_at, "requests": dict(self.requests)}
