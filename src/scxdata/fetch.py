"""Fetch and cache upstream JSON resources."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import httpx

from scxdata.cache_utils import (
    cache_file_for,
    cached_timestamp,
    is_cache_fresh,
    mkdir_async,
    read_text_async,
    write_text_async,
)
from scxdata.config import SCX_CACHE_PATH, SCX_CACHE_TTL_SECONDS
from scxdata.exceptions import MalformedResponseError
from scxdata.http_utils import fetch_text
from scxdata.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class FetchResult:
    """Parsed JSON plus the time it was originally retrieved upstream."""

    data: Any
    retrieved_at: datetime


@dataclass
class FetchStats:
    """Counters reported at the end of a build.

    Attributes:
        endpoints_hit: Every call to fetch_json, cached or not.
        fetch_errors: Failed fetches, as counted by callers.
        pub_info_errors: The subset of fetch_errors from publication info.
        cache_time_errors: Cache hits whose timestamp could not be read.
    """

    endpoints_hit: int = 0
    fetch_errors: int = 0
    pub_info_errors: int = 0
    cache_time_errors: int = 0

    def summary(self) -> str:
        successes = self.endpoints_hit - self.fetch_errors
        rate = (successes / self.endpoints_hit * 100) if self.endpoints_hit else 0.0
        text = f"{successes}/{self.endpoints_hit} successful ({rate:.1f}%)"
        if self.fetch_errors:
            text += f", {self.fetch_errors} total failed"
            if self.pub_info_errors:
                share = self.pub_info_errors / self.fetch_errors * 100
                text += f", {self.pub_info_errors} ({share:.1f}%) failed from /publication_info"
        if self.cache_time_errors:
            text += f", {self.cache_time_errors} errors reading cache data timestamp"
        return text


async def fetch_json(
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
    stats: FetchStats | None = None,
    use_cache: bool = True,
) -> FetchResult:
    """Fetch a JSON resource, serving it from the local cache when fresh.

    Args:
        url: API URL to fetch.
        client: Optional shared httpx.AsyncClient.
        stats: Optional counters to update.
        use_cache: Whether to use a cached response if available.

    Returns:
        FetchResult whose ``retrieved_at`` is the original fetch time for
        cache hits and the current time for fresh fetches.

    Raises:
        FetchError: If the resource cannot be fetched or is not JSON.
    """
    if stats is not None:
        stats.endpoints_hit += 1

    cache_path = cache_file_for(url, SCX_CACHE_PATH)

    if use_cache and is_cache_fresh(cache_path, SCX_CACHE_TTL_SECONDS):
        try:
            data = json.loads(await read_text_async(cache_path))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning("Discarding unreadable cache file %s for %s: %s", cache_path, url, exc)
        else:
            return FetchResult(data=data, retrieved_at=_retrieved_at(cache_path, url, stats))

    text = await fetch_text(url, client=client)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedResponseError(f"Invalid JSON from {url}: {exc}") from exc

    # A failed cache write costs a refetch next build, never this result.
    try:
        await mkdir_async(cache_path.parent, parents=True, exist_ok=True)
        await write_text_async(cache_path, text)
    except OSError as exc:
        logger.warning("Could not write cache file %s for %s: %s", cache_path, url, exc)
    return FetchResult(data=data, retrieved_at=datetime.now(timezone.utc))


def _retrieved_at(cache_path: Path, url: str, stats: FetchStats | None) -> datetime:
    try:
        return cached_timestamp(cache_path)
    except OSError as exc:
        if stats is not None:
            stats.cache_time_errors += 1
        logger.warning("Could not read cache timestamp for %s: %s", url, exc)
        return datetime.now(timezone.utc)
