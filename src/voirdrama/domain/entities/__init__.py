from .catalog import CatalogEntry, EpisodeRef, SeriesDetail
from .metadata import MetaOverlay, MetaSummary
from .stream import DirectStream, ExternalStream, ResolvedStream, StreamCandidate

__all__ = [
    "CatalogEntry",
    "DirectStream",
    "EpisodeRef",
    "ExternalStream",
    "MetaOverlay",
    "MetaSummary",
    "ResolvedStream",
    "SeriesDetail",
    "StreamCandidate",
]
