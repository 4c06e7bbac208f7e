"""Application state container for FastAPI dependency injection."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
from starlette.datastructures import State

from voirdrama.infrastructure.config import AppConfig

if TYPE_CHECKING:
    from voirdrama.application.use_cases import (
        CatalogUseCase,
        SeriesMetaUseCase,
        StreamUseCase,
    )
    from voirdrama.domain.ports import CachePort, FetcherPort
    from voirdrama.infrastructure.metadata import MetadataEnricher
    from voirdrama.infrastructure.metrics import AddonStats
    from voirdrama.infrastructure.persistence import ExternalIdIndex
    from voirdrama.infrastructure.resolvers import StreamResolutionChain
    from voirdrama.infrastructure.voirdrama import VoirdramaSite


class AppState(State):
    """FastAPI application state with all DI resources.

    Lifecycle managed by composition.py::lifespan().
    """

    # Configuration
    config: AppConfig

    # Request counters (created in create_app, before lifespan)
    stats: AddonStats

    # Infrastructure
    cache: CachePort
    http_client: httpx.AsyncClient
    fetcher: FetcherPort
    site: VoirdramaSite
    enricher: MetadataEnricher
    id_index: ExternalIdIndex
    resolution_chain: StreamResolutionChain

    # Use cases
    catalog_uc: CatalogUseCase
    meta_uc: SeriesMetaUseCase
    stream_uc: StreamUseCase
