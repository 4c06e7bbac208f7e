"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "voirdrama-stremio",
    "environment": "dev",
    "http": {
        "timeout_seconds": 15.0,
        "follow_redirects": True,
        "user_agent": "Mozilla/5.0 (Stremio Addon; +https://stremio.com)",
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
    "cache": {
        "dir": "/tmp/voirdrama-stremio-cache",
        "backend": "files",
        "ttl_seconds": 900,
        "version": "v2",
        "max_concurrent": 10,
    },
    "site": {
        "base_url": "https://voirdrama.org",
    },
    "cinemeta": {
        "base_url": "https://v3-cinemeta.strem.io",
        "enabled": True,
    },
    "addon": {
        "page_size": 10,
        "ongoing_max_pages": 12,
        "ongoing_statuses": ["ongoing", "en cours"],
        "unwrap_max_concurrent": 5,
    },
}
