from .cinemeta import DEFAULT_CINEMETA_URL, CinemetaClient
from .enricher import MetadataEnricher, apply_to_detail, apply_to_entry, pick_best_match

__all__ = [
    "DEFAULT_CINEMETA_URL",
    "CinemetaClient",
    "MetadataEnricher",
    "apply_to_detail",
    "apply_to_entry",
    "pick_best_match",
]
