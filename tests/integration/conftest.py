"""Shared fixtures for integration tests.

These tests use real infrastructure components (file/diskcache tiers,
the full FastAPI lifespan) with upstream HTTP mocked via respx.
"""

from __future__ import annotations

from pathlib import Path

import pytest
import respx

from voirdrama.infrastructure.config import AppConfig


@pytest.fixture()
def respx_mock() -> respx.MockRouter:
    """Explicit respx mock router for request interception."""
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture()
def app_config(tmp_path: Path) -> AppConfig:
    """Test config with an isolated cache dir and enrichment disabled."""
    return AppConfig.model_validate(
        {
            "environment": "test",
            "cache": {"dir": str(tmp_path / "cache"), "ttl_seconds": 60},
            "cinemeta": {"enabled": False},
        }
    )
