"""Composition root: dependency injection via FastAPI lifespan."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, cast

import httpx
import structlog
from fastapi import FastAPI

from voirdrama.application.use_cases import (
    CatalogUseCase,
    SeriesMetaUseCase,
    StreamUseCase,
)
from voirdrama.infrastructure.cache.cache_factory import create_cache
from voirdrama.infrastructure.http import HttpxFetcher
from voirdrama.infrastructure.metadata import CinemetaClient, MetadataEnricher
from voirdrama.infrastructure.persistence import ExternalIdIndex
from voirdrama.infrastructure.resolvers import StreamResolutionChain, VidmolyResolver
from voirdrama.infrastructure.voirdrama import VoirdramaSite
from voirdrama.interfaces.app_state import AppState

log = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan Hook: Initialize and cleanup all resources (DI Composition Root).

    Order matters:
        1. Cache (fetcher writes through it)
        2. HTTP client
        3. Fetcher (HTTP client + cache)
        4. Site adapter, Cinemeta client + enricher, external-ID index
        5. Embed resolvers + resolution chain
        6. Use cases
    """
    state = cast(AppState, app.state)
    config = state.config

    # 1) Cache
    cache = create_cache(
        backend=config.cache_backend,
        directory=config.cache_dir,
        ttl_seconds=config.cache_ttl_seconds,
        version=config.cache_version,
        max_concurrent=config.cache_max_concurrent,
    )
    await cache.__aenter__()
    state.cache = cache
    log.info(
        "cache_initialized",
        backend=config.cache_backend,
        directory=str(config.cache_dir),
        version=config.cache_version,
    )

    # 2) HTTP client
    state.http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(config.http_timeout_seconds),
        headers={"User-Agent": config.http_user_agent},
        follow_redirects=config.http_follow_redirects,
    )
    log.info("http_client_initialized", timeout=config.http_timeout_seconds)

    # 3) Fetcher
    state.fetcher = HttpxFetcher(
        http_client=state.http_client,
        cache=state.cache,
        timeout=config.http_timeout_seconds,
        user_agent=config.http_user_agent,
        ttl_seconds=config.cache_ttl_seconds,
    )

    # 4) Site, metadata enrichment, external-ID index
    state.site = VoirdramaSite(config.site_base_url)
    state.enricher = MetadataEnricher(
        CinemetaClient(fetcher=state.fetcher, base_url=config.cinemeta_base_url),
        enabled=config.cinemeta_enabled,
    )
    state.id_index = ExternalIdIndex()
    log.info(
        "metadata_enricher_initialized",
        cinemeta_enabled=config.cinemeta_enabled,
        site=config.site_base_url,
    )

    # 5) Stream resolution chain
    state.resolution_chain = StreamResolutionChain(
        resolvers=[VidmolyResolver(fetcher=state.fetcher)],
        max_concurrent=config.addon.unwrap_max_concurrent,
    )
    log.info(
        "resolution_chain_initialized",
        hosters=state.resolution_chain.supported_hosters,
    )

    # 6) Use cases
    state.catalog_uc = CatalogUseCase(
        fetcher=state.fetcher,
        site=state.site,
        enricher=state.enricher,
        id_index=state.id_index,
        page_size=config.addon.page_size,
        ongoing_max_pages=config.addon.ongoing_max_pages,
        ongoing_statuses=tuple(config.addon.ongoing_statuses),
    )
    state.meta_uc = SeriesMetaUseCase(
        fetcher=state.fetcher,
        site=state.site,
        enricher=state.enricher,
        catalog=state.catalog_uc,
        id_index=state.id_index,
    )
    state.stream_uc = StreamUseCase(
        fetcher=state.fetcher,
        site=state.site,
        chain=state.resolution_chain,
    )
    log.info("use_cases_initialized")

    try:
        yield
    finally:
        await state.http_client.aclose()
        log.info("http_client_closed")

        await state.cache.aclose()
        log.info("cache_closed")

        log.info("app_shutdown_complete")
