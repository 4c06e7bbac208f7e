from .cache import CachePort
from .embed_resolver import EmbedResolverPort
from .enrichment import EnricherPort
from .fetcher import FetcherPort
from .id_index import ExternalIdIndexPort
from .metadata import MetadataPort
from .site import ContentSitePort

__all__ = [
    "CachePort",
    "ContentSitePort",
    "EmbedResolverPort",
    "EnricherPort",
    "ExternalIdIndexPort",
    "FetcherPort",
    "MetadataPort",
]
