"""End-to-end addon requests through the real lifespan wiring.

Upstream pages are served by respx; cache, fetcher, parsers, the
resolution chain and the router are the production components.
"""

from __future__ import annotations

import httpx
import pytest
import respx
from fastapi.testclient import TestClient

from voirdrama.infrastructure.config import AppConfig
from voirdrama.interfaces.app import create_app

pytestmark = pytest.mark.integration

_BASE = "https://voirdrama.org"


def test_healthz_lists_hosters(app_config: AppConfig) -> None:
    with TestClient(create_app(app_config)) as client:
        body = client.get("/healthz").json()

    assert body == {"status": "ok", "hosters": ["vidmoly"]}


def test_catalog_meta_stream_flow(
    app_config: AppConfig,
    respx_mock: respx.MockRouter,
    listing_html: str,
    series_html: str,
    episode_html: str,
    vidmoly_embed_html: str,
) -> None:
    listing = respx_mock.get(f"{_BASE}/drama/").respond(200, text=listing_html)
    respx_mock.get(f"{_BASE}/drama/moving/").respond(200, text=series_html)
    respx_mock.get(f"{_BASE}/drama/moving/moving-episode-1/").respond(200, text=episode_html)
    respx_mock.get("https://vidmoly.net/embed-abc.html").respond(200, text=vidmoly_embed_html)

    with TestClient(create_app(app_config)) as client:
        catalog = client.get("/catalog/series/voirdrama-search.json").json()
        # Second request is served from the cache.
        client.get("/catalog/series/voirdrama-search.json")
        meta = client.get("/meta/series/voirdrama:moving.json").json()
        streams = client.get("/stream/series/voirdrama:moving:moving-episode-1.json").json()
        stats = client.get("/stats.json").json()

    assert [m["id"] for m in catalog["metas"]] == ["voirdrama:moving", "voirdrama:queen-of-tears"]
    assert listing.call_count == 1

    assert meta["meta"]["name"] == "Moving"
    assert meta["meta"]["genres"] == ["Action", "Fantasy"]
    assert [v["id"] for v in meta["meta"]["videos"]][0] == "voirdrama:moving:moving-episode-2"

    assert streams == {
        "streams": [
            {
                "title": "VIDMOLY (direct)",
                "url": "https://box-42.vmwesa.online/hls/xyz/master.m3u8",
            },
            {"title": "DOOD", "externalUrl": "https://dood.re/e/xyz"},
        ]
    }
    assert stats["requests"] == {"catalog": 2, "meta": 1, "stream": 1}


def test_upstream_outage_degrades_to_empty(
    app_config: AppConfig, respx_mock: respx.MockRouter
) -> None:
    respx_mock.get(f"{_BASE}/drama/moving/").mock(side_effect=httpx.ConnectError("down"))
    respx_mock.get(f"{_BASE}/drama/page/2/?m_orderby=new-manga").respond(503)

    with TestClient(create_app(app_config)) as client:
        meta = client.get("/meta/series/voirdrama:moving.json")
        catalog = client.get("/catalog/series/voirdrama-recent/skip=10.json")

    assert meta.status_code == 200
    assert meta.json() == {"meta": None}
    assert catalog.json() == {"metas": []}


def test_vidmoly_failure_falls_back_to_embed(
    app_config: AppConfig, respx_mock: respx.MockRouter, episode_html: str
) -> None:
    respx_mock.get(f"{_BASE}/drama/moving/moving-episode-1/").respond(200, text=episode_html)
    respx_mock.get("https://vidmoly.net/embed-abc.html").respond(404)

    with TestClient(create_app(app_config)) as client:
        streams = client.get("/stream/series/voirdrama:moving:moving-episode-1.json").json()

    assert streams["streams"][0] == {
        "title": "VIDMOLY",
        "externalUrl": "https://vidmoly.net/embed-abc.html",
    }
