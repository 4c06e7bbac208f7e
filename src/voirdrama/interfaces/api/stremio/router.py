"""Stremio addon API endpoints (manifest, catalog, meta, stream, stats)."""

from __future__ import annotations

from typing import Any, cast
from urllib.parse import parse_qs

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from voirdrama.application.use_cases import (
    CATALOG_ONGOING,
    CATALOG_RECENT,
    CATALOG_SEARCH,
)
from voirdrama.domain.entities.catalog import CatalogEntry, EpisodeRef, SeriesDetail
from voirdrama.domain.entities.ids import ID_PREFIX
from voirdrama.domain.entities.stream import DirectStream, ResolvedStream
from voirdrama.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(tags=["stremio"])

_ADDON_ID = "org.voirdrama.addon"
ADDON_VERSION = "0.1.1"
_LOGO_URL = "https://voirdrama.org/wp-content/uploads/2022/07/voirdrama-logo.png"
_CONTENT_TYPE = "series"

_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "*",
}


def _build_manifest() -> dict[str, Any]:
    """Build the Stremio addon manifest."""
    return {
        "id": _ADDON_ID,
        "version": ADDON_VERSION,
        "name": "VoirDrama",
        "description": "Addon VoirDrama (catalogue, metadata, stream)",
        "logo": _LOGO_URL,
        "background": _LOGO_URL,
        "resources": ["catalog", "meta", "stream"],
        "types": [_CONTENT_TYPE],
        "idPrefixes": [ID_PREFIX],
        "catalogs": [
            {
                "type": _CONTENT_TYPE,
                "id": CATALOG_ONGOING,
                "name": "VoirDrama - En cours",
                "extra": [{"name": "skip", "isRequired": False}],
            },
            {
                "type": _CONTENT_TYPE,
                "id": CATALOG_RECENT,
                "name": "VoirDrama - Récents",
                "extra": [{"name": "skip", "isRequired": False}],
            },
            {
                "type": _CONTENT_TYPE,
                "id": CATALOG_SEARCH,
                "name": "VoirDrama - Recherche",
                "extra": [{"name": "search", "isRequired": True}],
            },
        ],
        "behaviorHints": {
            "adult": False,
            "configurable": False,
        },
    }


def _json(content: dict[str, Any]) -> JSONResponse:
    return JSONResponse(content=content, headers=_CORS_HEADERS)


def _drop_none(data: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


def parse_extra(extra: str) -> tuple[int, str | None]:
    """Parse still percent-encoded Stremio extras (``skip=20&search=foo``).

    Splitting happens before decoding, so an encoded ``%26`` stays part of
    its value.
    """
    params = parse_qs(extra, keep_blank_values=True)
    search = params.get("search", [None])[0]
    try:
        skip = int(params.get("skip", ["0"])[0] or 0)
    except ValueError:
        skip = 0
    return max(0, skip), search


def format_catalog_entry(entry: CatalogEntry) -> dict[str, Any]:
    """Catalog preview; the internal slug is never exposed."""
    return _drop_none(
        {
            "id": entry.id,
            "type": _CONTENT_TYPE,
            "name": entry.name,
            "poster": entry.poster_url,
            "background": entry.background_url,
            "imdb_id": entry.external_id,
        }
    )


def _format_video(episode: EpisodeRef) -> dict[str, Any]:
    return _drop_none(
        {
            "id": episode.id,
            "title": episode.title,
            "season": episode.season,
            "episode": episode.episode,
            "released": episode.released,
        }
    )


def format_series_detail(detail: SeriesDetail) -> dict[str, Any]:
    return _drop_none(
        {
            "id": detail.id,
            "type": _CONTENT_TYPE,
            "name": detail.name,
            "poster": detail.poster_url,
            "background": detail.background_url,
            "description": detail.description,
            "genres": list(detail.genres) or None,
            "imdb_id": detail.external_id,
            "videos": [_format_video(e) for e in detail.episodes],
        }
    )


def format_stream(stream: ResolvedStream) -> dict[str, str]:
    """Direct results play in-client; external ones open the embed page."""
    if isinstance(stream, DirectStream):
        return {"title": f"{stream.label} (direct)", "url": stream.playable_url}
    return {"title": stream.label, "externalUrl": stream.embed_url}


@router.get("/manifest.json")
async def stremio_manifest() -> JSONResponse:
    """Serve the Stremio addon manifest."""
    return _json(_build_manifest())


def _encoded_extra(request: Request, extra: str) -> str:
    """The extras path segment as sent, before Starlette decodes it."""
    raw_path = request.scope.get("raw_path")
    if not raw_path:
        return extra
    segment = raw_path.decode("latin-1").rsplit("/", 1)[-1]
    return segment.removesuffix(".json")

async def _catalog_response(
    request: Request,
    content_type: str,
    catalog_id: str,
    extra: str = "",
) -> JSONResponse:
    state = cast(AppState, request.app.state)
    state.stats.record_request("catalog")
    skip, search = parse_extra(_encoded_extra(request, extra)) if extra else (0, None)
    log.info(
        "stremio_catalog_request",
        content_type=content_type,
        catalog_id=catalog_id,
        skip=skip,
        search=search,
    )
    if content_type != _CONTENT_TYPE:
        return _json({"metas": []})

    try:
        entries = await state.catalog_uc.list_catalog(catalog_id, skip=skip, search=search)
    except Exception:
        log.warning(
            "stremio_catalog_failed",
            catalog_id=catalog_id,
            skip=skip,
            search=search,
            exc_info=True,
        )
        return _json({"metas": []})

    metas = [format_catalog_entry(e) for e in entries]
    log.debug(
        "stremio_catalog_served",
        catalog_id=catalog_id,
        count=len(metas),
        first_id=metas[0]["id"] if metas else None,
    )
    return _json({"metas": metas})


@router.get("/catalog/{content_type}/{catalog_id}.json")
async def stremio_catalog(
    request: Request,
    content_type: str,
    catalog_id: str,
) -> JSONResponse:
    """Serve a catalog page without extras (skip=0)."""
    return await _catalog_response(request, content_type, catalog_id)


@router.get("/catalog/{content_type}/{catalog_id}/{extra}.json")
async def stremio_catalog_extra(
    request: Request,
    content_type: str,
    catalog_id: str,
    extra: str,
) -> JSONResponse:
    """Serve a catalog page with Stremio extras (``skip=N``, ``search=q``)."""
    return await _catalog_response(request, content_type, catalog_id, extra)


@router.get("/meta/{content_type}/{series_id}.json")
async def stremio_meta(
    request: Request,
    content_type: str,
    series_id: str,
) -> JSONResponse:
    """Serve series detail for a ``voirdrama:<slug>`` or ``tt<digits>`` ID."""
    state = cast(AppState, request.app.state)
    state.stats.record_request("meta")
    log.info("stremio_meta_request", content_type=content_type, series_id=series_id)
    if content_type != _CONTENT_TYPE:
        return _json({"meta": None})

    try:
        detail = await state.meta_uc.get(series_id)
    except Exception:
        log.warning("stremio_meta_failed", series_id=series_id, exc_info=True)
        return _json({"meta": None})

    return _json({"meta": format_series_detail(detail) if detail else None})


@router.get("/stream/{content_type}/{video_id}.json")
async def stremio_stream(
    request: Request,
    content_type: str,
    video_id: str,
) -> JSONResponse:
    """Resolve the players of one episode into Stremio streams."""
    state = cast(AppState, request.app.state)
    state.stats.record_request("stream")
    log.info("stremio_stream_request", content_type=content_type, video_id=video_id)
    if content_type != _CONTENT_TYPE:
        return _json({"streams": []})

    try:
        streams = await state.stream_uc.get(video_id)
    except Exception:
        log.warning("stremio_stream_failed", video_id=video_id, exc_info=True)
        return _json({"streams": []})

    return _json({"streams": [format_stream(s) for s in streams]})


@router.get("/stats.json")
async def stremio_stats(request: Request) -> JSONResponse:
    """Process start time and per-resource request counters."""
    state = cast(AppState, request.app.state)
    return JSONResponse(content=state.stats.snapshot())
