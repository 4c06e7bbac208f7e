"""URL templates of the VoirDrama site (WordPress + Madara "wp-manga" theme).

Listing:  /drama/  and  /drama/page/<n>/   (``?m_orderby=new-manga`` = newest)
Search:   /?s=<query>&post_type=wp-manga
Series:   /drama/<series-slug>/
Episode:  /drama/<series-slug>/<episode-slug>/
"""

from __future__ import annotations

import re
from urllib.parse import quote, urlparse

DEFAULT_BASE_URL = "https://voirdrama.org"

# Same unreserved set as JavaScript's encodeURIComponent.
_QUERY_SAFE = "-_.!~*'()"

# Slugs never contain ":" so that composite IDs stay splittable.
_SLUG = r'[^/":?#\s]+'


class SiteUrls:
    """Builds site URLs and the patterns that recognise them in markup."""

    def __init__(self, base_url: str = DEFAULT_BASE_URL) -> None:
        self.base_url = base_url.rstrip("/")
        host = re.escape(urlparse(self.base_url).netloc)
        series = rf"https?://{host}/drama/{_SLUG}/"
        episode = rf"https?://{host}/drama/{_SLUG}/{_SLUG}/"

        self.series_anchor_re = re.compile(rf'<a href="({series})"[^>]*>([^<]+)</a>')
        self.episode_anchor_re = re.compile(
            rf'<a href="({episode})"[^>]*>([^<]+)</a>', re.IGNORECASE
        )
        self._series_url_re = re.compile(rf"^https?://{host}/drama/({_SLUG})/?$")
        self._episode_url_re = re.compile(
            rf"^https?://{host}/drama/{_SLUG}/({_SLUG})/?$"
        )

    # --- builders ---
    def listing(self, page: int = 1, *, newest: bool = False) -> str:
        path = f"{self.base_url}/drama/page/{page}/" if page > 1 else f"{self.base_url}/drama/"
        return f"{path}?m_orderby=new-manga" if newest else path

    def search(self, query: str) -> str:
        return f"{self.base_url}/?s={quote(query, safe=_QUERY_SAFE)}&post_type=wp-manga"

    def series(self, slug: str) -> str:
        return f"{self.base_url}/drama/{slug}/"

    def episode(self, series_slug: str, episode_slug: str) -> str:
        return f"{self.base_url}/drama/{series_slug}/{episode_slug}/"

    # --- parsers ---
    def series_slug(self, url: str) -> str | None:
        m = self._series_url_re.match(url)
        return m.group(1) if m else None

    def episode_slug(self, url: str) -> str | None:
        m = self._episode_url_re.match(url)
        return m.group(1) if m else None


DEFAULT_SITE = SiteUrls()
