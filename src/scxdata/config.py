"""Local configuration for scxdata."""

from __future__ import annotations

import os
from pathlib import Path


DEFAULT_API_BASE = "https://suttacentral.net/api"
DEFAULT_SITE_LANGUAGE = "en"
DEFAULT_ENV = "dev"
DEFAULT_CACHE_DIR = ".scx_cache"
DEFAULT_CACHE_TTL_SECONDS = 0
DEFAULT_DEV_CACHE_TTL_SECONDS = 7 * 24 * 60 * 60
DEFAULT_FETCH_TIMEOUT_S = 30.0
DEFAULT_USER_AGENT = "scxdata/0.1 (+https://suttacentral.express)"
DEFAULT_MAX_CONCURRENCY = 50
DEFAULT_ROOT_UIDS = "sutta,vinaya,abhidhamma"
DEFAULT_TRANSLATION_LANGS = "en"
DEFAULT_LOG_LEVEL = "INFO"


def _split_list(value: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in value.split(",") if item.strip())


SCX_API_BASE = os.getenv("SCX_API_BASE", DEFAULT_API_BASE).rstrip("/")
SCX_SITE_LANGUAGE = os.getenv("SCX_SITE_LANGUAGE", DEFAULT_SITE_LANGUAGE)
SCX_ENV = os.getenv("SCX_ENV", DEFAULT_ENV)
SCX_DEV_MODE = SCX_ENV != "prod"

# Cache lifetime of 0 keeps cached responses forever; dev builds expire them.
SCX_CACHE_PATH = Path(os.getenv("SCX_CACHE_PATH", DEFAULT_CACHE_DIR)).expanduser().resolve()
SCX_CACHE_TTL_SECONDS = int(
    os.getenv(
        "SCX_CACHE_TTL_SECONDS",
        str(DEFAULT_DEV_CACHE_TTL_SECONDS if SCX_DEV_MODE else DEFAULT_CACHE_TTL_SECONDS),
    )
)
SCX_FETCH_TIMEOUT_S = float(os.getenv("SCX_FETCH_TIMEOUT_S", str(DEFAULT_FETCH_TIMEOUT_S)))
SCX_USER_AGENT = os.getenv("SCX_USER_AGENT", DEFAULT_USER_AGENT)

SCX_MAX_CONCURRENCY = int(os.getenv("SCX_MAX_CONCURRENCY", str(DEFAULT_MAX_CONCURRENCY)))
SCX_ROOT_UIDS = _split_list(os.getenv("SCX_ROOT_UIDS", DEFAULT_ROOT_UIDS))
SCX_TRANSLATION_LANGS = _split_list(os.getenv("SCX_TRANSLATION_LANGS", DEFAULT_TRANSLATION_LANGS))
SCX_FETCH_PUBLICATION_INFO = os.getenv("SCX_FETCH_PUBLICATION_INFO", "true").lower() == "true"

SCX_LOG_LEVEL = os.getenv("SCX_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
