from .catalog import (
    CATALOG_ONGOING,
    CATALOG_RECENT,
    CATALOG_SEARCH,
    CatalogUseCase,
    page_for_skip,
)
from .meta import SeriesMetaUseCase
from .stream import StreamUseCase

__all__ = [
    "CATALOG_ONGOING",
    "CATALOG_RECENT",
    "CATALOG_SEARCH",
    "CatalogUseCase",
    "SeriesMetaUseCase",
    "StreamUseCase",
    "page_for_skip",
]
