"""Stream candidates and resolution outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class StreamCandidate:
    """An unresolved stream source extracted from an episode page."""

    label: str  # Player name, e.g. "VIDMOLY"
    embed_url: str


@dataclass(frozen=True)
class DirectStream:
    """The embed page was unwrapped into a playable media URL."""

    label: str
    playable_url: str  # .m3u8 / .mp4


@dataclass(frozen=True)
class ExternalStream:
    """Only the embed page is known; the client has to open it itself."""

    label: str
    embed_url: str


ResolvedStream = Union[DirectStream, ExternalStream]
