"""Cache utilities for managing local file caching."""

from __future__ import annotations

import asyncio
import hashlib
import re
from datetime import datetime, timezone
from pathlib import Path

_UNSAFE_CHARS_RE = re.compile(r"[^A-Za-z0-9._-]+")
_MAX_SLUG_LENGTH = 120


def is_cache_fresh(path: Path, ttl_seconds: int) -> bool:
    """Check if a cached file is still fresh based on its modification time.

    Args:
        path: Path to the cached file.
        ttl_seconds: Time-to-live in seconds. If <= 0, cache is considered
            fresh indefinitely (cache forever mode).

    Returns:
        True if the cache is fresh and usable, False otherwise.
    """
    if not path.exists():
        return False
    if ttl_seconds <= 0:
        return True
    age_seconds = (datetime.now(timezone.utc) - cached_timestamp(path)).total_seconds()
    return age_seconds <= ttl_seconds


def cached_timestamp(path: Path) -> datetime:
    """Return when a cached file was written, as an aware UTC datetime.

    Raises:
        OSError: If the file metadata cannot be read.
    """
    return datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)


def cache_file_for(url: str, base_path: Path) -> Path:
    """Get the cache file path for a given API URL.

    The file name keeps the part of the URL after ``/api/`` readable and
    appends a short hash of the whole URL so query strings never collide.

    Args:
        url: The full URL being cached.
        base_path: The base cache directory path.

    Returns:
        Path to the JSON cache file for this URL.
    """
    _, _, api_path = url.partition("/api/")
    slug = _UNSAFE_CHARS_RE.sub("_", api_path or url).strip("_")[:_MAX_SLUG_LENGTH]
    digest = hashlib.sha1(url.encode("utf-8")).hexdigest()[:12]
    return base_path / f"{slug}-{digest}.json"


async def read_text_async(path: Path, encoding: str = "utf-8") -> str:
    """Read text from a file asynchronously using a thread pool.

    Args:
        path: Path to the file to read.
        encoding: Text encoding to use.

    Returns:
        The file contents as a string.
    """
    return await asyncio.to_thread(path.read_text, encoding=encoding)


async def write_text_async(path: Path, content: str, encoding: str = "utf-8") -> None:
    """Write text to a file asynchronously using a thread pool.

    Args:
        path: Path to the file to write.
        content: Text content to write.
        encoding: Text encoding to use.
    """
    await asyncio.to_thread(path.write_text, content, encoding=encoding)


async def mkdir_async(
    path: Path, parents: bool = False, exist_ok: bool = False
) -> None:
    """Create a directory asynchronously using a thread pool.

    Args:
        path: Path to the directory to create.
        parents: If True, create parent directories as needed.
        exist_ok: If True, don't raise an error if directory exists.
    """
    await asyncio.to_thread(path.mkdir, parents=parents, exist_ok=exist_ok)
