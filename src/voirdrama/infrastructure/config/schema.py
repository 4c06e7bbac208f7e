"""Pydantic configuration models with validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]
CacheBackend = Literal["files", "diskcache"]

# Flat field name -> (YAML section, key inside section).
# Shared by AppConfig aliases, EnvOverrides and load.py's layer normalization.
SECTIONED_KEYS: dict[str, tuple[str, str]] = {
    "http_timeout_seconds": ("http", "timeout_seconds"),
    "http_follow_redirects": ("http", "follow_redirects"),
    "http_user_agent": ("http", "user_agent"),
    "log_level": ("logging", "level"),
    "log_format": ("logging", "format"),
    "cache_dir": ("cache", "dir"),
    "cache_backend": ("cache", "backend"),
    "cache_ttl_seconds": ("cache", "ttl_seconds"),
    "cache_version": ("cache", "version"),
    "cache_max_concurrent": ("cache", "max_concurrent"),
    "site_base_url": ("site", "base_url"),
    "cinemeta_base_url": ("cinemeta", "base_url"),
    "cinemeta_enabled": ("cinemeta", "enabled"),
    "page_size": ("addon", "page_size"),
    "ongoing_max_pages": ("addon", "ongoing_max_pages"),
}

SECTIONS: frozenset[str] = frozenset(section for section, _ in SECTIONED_KEYS.values())


def _sectioned(flat_key: str) -> AliasChoices:
    """Accept a field either flat or at its ``section.key`` path."""
    section, key = SECTIONED_KEYS[flat_key]
    return AliasChoices(flat_key, AliasPath(section, key))


def _normalize_path(value: Any) -> Path:
    """
    Normalize a path-like value without causing filesystem side-effects.

    This function MUST NOT create directories or files.
    """
    if isinstance(value, Path):
        return value.expanduser()
    if isinstance(value, str):
        return Path(value).expanduser()
    raise TypeError(f"Expected path-like value, got: {type(value)!r}")


class AddonConfig(BaseModel):
    """Catalog and stream knobs of the Stremio addon (YAML section: addon.*)."""

    page_size: int = Field(
        default=10,
        gt=0,
        description="Entries per catalog page; also maps skip -> upstream page.",
    )
    ongoing_max_pages: int = Field(
        default=12,
        gt=0,
        description="Upper bound of listing pages scanned by the ongoing catalog.",
    )
    ongoing_statuses: list[str] = Field(
        default=["ongoing", "en cours"],
        description="Status substrings (case-insensitive) that mark a series ongoing.",
    )
    unwrap_max_concurrent: int = Field(
        default=5,
        gt=0,
        description="Max parallel embed unwraps within one stream request.",
    )


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Every field listed in SECTIONED_KEYS validates from either its flat
    name or its YAML section path, so the merged layer dict from load.py
    and plain keyword construction both work.
    """

    # General
    app_name: str = Field(default="voirdrama-stremio", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # HTTP
    http_timeout_seconds: float = Field(
        default=15.0,
        validation_alias=_sectioned("http_timeout_seconds"),
        description="Per-fetch timeout in seconds.",
    )
    http_follow_redirects: bool = Field(
        default=True,
        validation_alias=_sectioned("http_follow_redirects"),
    )
    http_user_agent: str = Field(
        default="Mozilla/5.0 (Stremio Addon; +https://stremio.com)",
        validation_alias=_sectioned("http_user_agent"),
        description="User-Agent for upstream site and Cinemeta requests.",
    )

    # Logging
    log_level: LogLevel = Field(default="INFO", validation_alias=_sectioned("log_level"))
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=_sectioned("log_format"),
        description="console/json; derived from environment when unset.",
    )

    # Cache
    cache_dir: Path = Field(
        default=Path("/tmp/voirdrama-stremio-cache"),
        validation_alias=_sectioned("cache_dir"),
        description="Durable cache directory (created on first write).",
    )
    cache_backend: CacheBackend = Field(
        default="files",
        validation_alias=_sectioned("cache_backend"),
        description="Durable tier: 'files' (one JSON file per URL) or 'diskcache'.",
    )
    cache_ttl_seconds: int = Field(
        default=900,
        ge=0,
        validation_alias=_sectioned("cache_ttl_seconds"),
        description="TTL of both cache tiers.",
    )
    cache_version: str = Field(
        default="v2",
        min_length=1,
        validation_alias=_sectioned("cache_version"),
        description="Mixed into durable cache keys; bump to invalidate.",
    )
    cache_max_concurrent: int = Field(
        default=10,
        gt=0,
        validation_alias=_sectioned("cache_max_concurrent"),
        description="Max parallel durable cache operations.",
    )

    # Upstreams
    site_base_url: str = Field(
        default="https://voirdrama.org",
        validation_alias=_sectioned("site_base_url"),
    )
    cinemeta_base_url: str = Field(
        default="https://v3-cinemeta.strem.io",
        validation_alias=_sectioned("cinemeta_base_url"),
    )
    cinemeta_enabled: bool = Field(
        default=True,
        validation_alias=_sectioned("cinemeta_enabled"),
        description="Enrich catalog and meta responses with Cinemeta artwork/IDs.",
    )

    addon: AddonConfig = Field(default_factory=AddonConfig)

    @model_validator(mode="before")
    @classmethod
    def _lift_addon_flat_keys(cls, data: Any) -> Any:
        # page_size / ongoing_max_pages may arrive flat (ENV, CLI).
        if not isinstance(data, dict):
            return data
        flat = {k: data[k] for k in ("page_size", "ongoing_max_pages") if k in data}
        if not flat:
            return data
        data = dict(data)
        addon = dict(data.get("addon") or {})
        for key, value in flat.items():
            addon[key] = value
            del data[key]
        data["addon"] = addon
        return data

    @field_validator("cache_dir", mode="before")
    @classmethod
    def _validate_paths(cls, v: Any) -> Path:
        return _normalize_path(v)

    @field_validator("http_timeout_seconds")
    @classmethod
    def _validate_http_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("http_timeout_seconds must be > 0")
        return v

    @field_validator("site_base_url", "cinemeta_base_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    def to_sectioned_dict(self) -> dict[str, Any]:
        """Dump configuration in the sectioned shape used by config.yaml."""
        out: dict[str, Any] = {
            "app_name": self.app_name,
            "environment": self.environment,
            "addon": self.addon.model_dump(),
        }
        for flat_key, (section, key) in SECTIONED_KEYS.items():
            if section == "addon":
                continue
            value = getattr(self, flat_key)
            out.setdefault(section, {})[key] = str(value) if isinstance(value, Path) else value
        return out


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    load.py reads VOIRDRAMA_* variables through this model and merges the
    values that were actually set above YAML and below CLI overrides.

    Examples:
    - VOIRDRAMA_CACHE_DIR
    - VOIRDRAMA_HTTP_TIMEOUT_SECONDS
    - VOIRDRAMA_CINEMETA_ENABLED
    - VOIRDRAMA_ONGOING_MAX_PAGES
    """

    model_config = SettingsConfigDict(
        env_prefix="VOIRDRAMA_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    http_timeout_seconds: Optional[float] = None
    http_follow_redirects: Optional[bool] = None
    http_user_agent: Optional[str] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    cache_dir: Optional[Path] = None
    cache_backend: Optional[CacheBackend] = None
    cache_ttl_seconds: Optional[int] = None
    cache_version: Optional[str] = None
    cache_max_concurrent: Optional[int] = None

    site_base_url: Optional[str] = None
    cinemeta_base_url: Optional[str] = None
    cinemeta_enabled: Optional[bool] = None

    page_size: Optional[int] = None
    ongoing_max_pages: Optional[int] = None

    @field_validator("cache_dir", mode="before")
    @classmethod
    def _validate_paths(cls, v: Any) -> Any:
        if v is None:
            return None
        return _normalize_path(v)

    def to_update_dict(self) -> dict[str, Any]:
        """Return only values that were actually provided (non-None)."""
        return self.model_dump(exclude_none=True)
