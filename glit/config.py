"""
Configuration
-------------
Plain frozen dataclasses with defaults, plus `from_env` loaders for
embedding applications. Nothing here reads a file.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from urllib.parse import urlsplit

from glit.domain.errors import ConfigError

log = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE       = 30    # repositories per listing page on the forge
DEFAULT_MAX_CONCURRENT  = 8     # listing pages in flight at once
DEFAULT_REQUEST_TIMEOUT = 30.0

_TRUTHY = {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from exc


@dataclass(frozen=True)
class UserConfig:
    """Which account to scan and which branches its repositories use."""
    url:          str
    all_branches: bool = False

    @property
    def account_name(self) -> str:
        """
        First path segment of the account URL.

        Raises:
            ConfigError — URL has no scheme/host or an empty first segment
        """
        parts = urlsplit(self.url)
        if not parts.scheme or not parts.netloc:
            raise ConfigError(f"Account URL is not absolute: {self.url!r}")
        segment = parts.path.lstrip("/").split("/", 1)[0]
        if not segment:
            raise ConfigError(f"Account URL has no account segment: {self.url!r}")
        return segment

    @classmethod
    def from_env(cls) -> "UserConfig":
        url = os.environ.get("GLIT_USER_URL")
        if not url:
            raise ConfigError("GLIT_USER_URL environment variable is required")
        all_branches = os.environ.get("GLIT_ALL_BRANCHES", "").strip().lower() in _TRUTHY
        return cls(url=url, all_branches=all_branches)


@dataclass(frozen=True)
class PipelineSettings:
    """Knobs for the discovery stage. Extraction has no cap."""
    page_size:            int   = DEFAULT_PAGE_SIZE
    max_concurrent_pages: int   = DEFAULT_MAX_CONCURRENT
    request_timeout:      float = DEFAULT_REQUEST_TIMEOUT

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ConfigError(f"page_size must be >= 1, got {self.page_size}")
        if self.max_concurrent_pages < 1:
            raise ConfigError(
                f"max_concurrent_pages must be >= 1, got {self.max_concurrent_pages}"
            )
        if self.request_timeout <= 0:
            raise ConfigError(f"request_timeout must be > 0, got {self.request_timeout}")

    @classmethod
    def from_env(cls) -> "PipelineSettings":
        settings = cls(
            page_size            = _env_int("GLIT_PAGE_SIZE", DEFAULT_PAGE_SIZE),
            max_concurrent_pages = _env_int("GLIT_MAX_CONCURRENT_PAGES", DEFAULT_MAX_CONCURRENT),
            request_timeout      = _env_float("GLIT_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT),
        )
        log.debug("PipelineSettings loaded from environment: %s", settings)
        return settings
