"""Shared test fixtures for the voirdrama-stremio test suite."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from voirdrama.infrastructure.voirdrama import VoirdramaSite

_BASE = "https://voirdrama.org"

# ---------------------------------------------------------------------------
# Markup samples (trimmed copies of real VoirDrama / vidmoly pages)
# ---------------------------------------------------------------------------

_LISTING_HTML = f"""
<div class="page-item-detail">
  <div class="item-thumb">
    <a href="{_BASE}/drama/moving/" title="Moving">
      <img data-src="https://cdn.voirdrama.org/moving-193x278.jpg" src="data:image/gif;base64,AAAA">
    </a>
  </div>
  <h3 class="h5"><a href="{_BASE}/drama/moving/">Moving</a></h3>
</div>
<div class="page-item-detail">
  <h3 class="h5"><a href="{_BASE}/drama/queen-of-tears/">Queen of Tears &amp; Joy</a></h3>
</div>
"""

_SERIES_HTML = f"""
<div class="post-title"><h1> Moving </h1></div>
<div class="summary_image">
  <a href="{_BASE}/drama/moving/"><img class="img-responsive" data-src="https://cdn.voirdrama.org/moving.jpg" src="data:image/gif;base64,AAAA" alt="Moving"></a>
</div>
<div class="post-content_item">
  <div class="summary-heading"><h5>Status</h5></div>
  <div class="summary-content"> En cours </div>
</div>
<div class="genres-content">
  <a href="{_BASE}/drama-genre/action/" rel="tag">Action</a>,
  <a href="{_BASE}/drama-genre/fantasy/" rel="tag">Fantasy</a>,
  <a href="{_BASE}/drama-genre/action/" rel="tag">Action</a>
</div>
<div class="summary__content ">
  <p>Des adolescents cachent   des <b>super-pouvoirs</b> &amp; leurs parents aussi.</p>
</div>
<ul class="main version-chap">
  <li class="wp-manga-chapter">
    <a href="{_BASE}/drama/moving/moving-episode-2/">Moving Episode 2</a>
  </li>
  <li class="wp-manga-chapter">
    <a href="{_BASE}/drama/moving/moving-episode-1/">Moving Episode 1</a>
    <span class="post-on font-meta">09 août 2023</span>
  </li>
  <li class="wp-manga-chapter">
    <a href="{_BASE}/drama/moving/special/">Special</a>
  </li>
</ul>
"""

_EPISODE_HTML = """
<script>
var thisChapterSources = {"VIDMOLY": "<iframe src=\\"https://vidmoly.net/embed-abc.html\\" allowfullscreen></iframe>", "DOOD": "<iframe src=\\"https://dood.re/e/xyz\\"></iframe>"};
</script>
<iframe src="https://other.example/fallback"></iframe>
"""

_VIDMOLY_EMBED_HTML = """
<script>
player.setup({
  sources: [{file:"https://box-42.vmwesa.online/hls/xyz/master.m3u8"}],
  image: "https://vidmoly.net/thumb.jpg"
});
</script>
"""


@pytest.fixture()
def base_url() -> str:
    return _BASE


@pytest.fixture()
def listing_html() -> str:
    """Listing page: "moving" (lazy poster) and "queen-of-tears" (no poster)."""
    return _LISTING_HTML


@pytest.fixture()
def series_html() -> str:
    """Series page of "moving": status En cours, 2 genres, 3 episodes."""
    return _SERIES_HTML


@pytest.fixture()
def episode_html() -> str:
    """Episode page with a two-player sources map (vidmoly first)."""
    return _EPISODE_HTML


@pytest.fixture()
def vidmoly_embed_html() -> str:
    return _VIDMOLY_EMBED_HTML


# ---------------------------------------------------------------------------
# Port mocks
# ---------------------------------------------------------------------------


@pytest.fixture()
def site() -> VoirdramaSite:
    return VoirdramaSite(_BASE)


@pytest.fixture()
def fetcher() -> AsyncMock:
    """FetcherPort mock; tests route ``fetch_text`` per URL via side_effect."""
    return AsyncMock()


@pytest.fixture()
def enricher() -> AsyncMock:
    """EnricherPort mock that passes records through unchanged."""
    mock = AsyncMock()
    mock.enrich_entries.side_effect = lambda entries: list(entries)
    mock.enrich_detail.side_effect = lambda detail: detail
    mock.find_by_id.return_value = None
    return mock


@pytest.fixture()
def id_index() -> MagicMock:
    mock = MagicMock()
    mock.get.return_value = None
    return mock
