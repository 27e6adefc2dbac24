"""Tests for the cached JSON fetcher."""

from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from scxdata.cache_utils import cache_file_for
from scxdata.exceptions import FetchError, MalformedResponseError
from scxdata.fetch import FetchStats, fetch_json

URL = "https://suttacentral.net/api/menu/dn?language=en"


@pytest.fixture
def cache_dir(tmp_path: Path):
    with patch("scxdata.fetch.SCX_CACHE_PATH", tmp_path):
        yield tmp_path


class TestFetchJson:
    """Tests for fetch_json function."""

    @pytest.mark.asyncio
    async def test_fetches_and_caches(self, cache_dir: Path) -> None:
        """A fresh fetch is parsed, written to the cache and stamped now."""
        before = datetime.now(timezone.utc)
        with patch("scxdata.fetch.fetch_text", AsyncMock(return_value='[{"uid": "dn"}]')):
            result = await fetch_json(URL)

        assert result.data == [{"uid": "dn"}]
        assert result.retrieved_at >= before
        assert cache_file_for(URL, cache_dir).read_text() == '[{"uid": "dn"}]'

    @pytest.mark.asyncio
    async def test_cache_hit_keeps_original_timestamp(self, cache_dir: Path) -> None:
        """Cached data reports when it was first fetched, not now."""
        path = cache_file_for(URL, cache_dir)
        path.write_text('[{"uid": "cached"}]')
        fetched = int(datetime.now(timezone.utc).timestamp()) - 3600
        os.utime(path, (fetched, fetched))

        mock_fetch = AsyncMock()
        with patch("scxdata.fetch.fetch_text", mock_fetch):
            result = await fetch_json(URL)

        mock_fetch.assert_not_called()
        assert result.data == [{"uid": "cached"}]
        assert result.retrieved_at == datetime.fromtimestamp(fetched, tz=timezone.utc)

    @pytest.mark.asyncio
    async def test_timestamp_failure_falls_back_to_now(self, cache_dir: Path) -> None:
        """An unreadable cache timestamp never raises."""
        cache_file_for(URL, cache_dir).write_text('{"uid": "dn"}')
        stats = FetchStats()
        before = datetime.now(timezone.utc)

        with patch("scxdata.fetch.cached_timestamp", side_effect=OSError("stat failed")):
            result = await fetch_json(URL, stats=stats)

        assert result.data == {"uid": "dn"}
        assert result.retrieved_at >= before
        assert stats.cache_time_errors == 1

    @pytest.mark.asyncio
    async def test_bypasses_cache_when_disabled(self, cache_dir: Path) -> None:
        cache_file_for(URL, cache_dir).write_text('"old"')

        with patch("scxdata.fetch.fetch_text", AsyncMock(return_value='"new"')):
            result = await fetch_json(URL, use_cache=False)

        assert result.data == "new"

    @pytest.mark.asyncio
    async def test_unreadable_cache_file_is_refetched(self, cache_dir: Path) -> None:
        cache_file_for(URL, cache_dir).write_text("{not json")

        with patch("scxdata.fetch.fetch_text", AsyncMock(return_value="[]")) as mock_fetch:
            result = await fetch_json(URL)

        mock_fetch.assert_awaited_once()
        assert result.data == []

    @pytest.mark.asyncio
    async def test_undecodable_cache_file_is_refetched(self, cache_dir: Path) -> None:
        """Bytes that are not UTF-8 count as a cache miss."""
        cache_file_for(URL, cache_dir).write_bytes(b"\xff\xfe\x00garbage")

        with patch("scxdata.fetch.fetch_text", AsyncMock(return_value='{"uid": "dn"}')) as mock_fetch:
            result = await fetch_json(URL)

        mock_fetch.assert_awaited_once()
        assert result.data == {"uid": "dn"}
        assert cache_file_for(URL, cache_dir).read_text() == '{"uid": "dn"}'

    @pytest.mark.asyncio
    async def test_cache_read_error_is_refetched(self, cache_dir: Path) -> None:
        cache_file_for(URL, cache_dir).write_text('"old"')

        with patch("scxdata.fetch.read_text_async", AsyncMock(side_effect=PermissionError("denied"))):
            with patch("scxdata.fetch.fetch_text", AsyncMock(return_value='"new"')):
                result = await fetch_json(URL)

        assert result.data == "new"

    @pytest.mark.asyncio
    async def test_cache_write_failure_still_returns_data(self, cache_dir: Path) -> None:
        """A full disk loses the cache entry, not the fetched response."""
        before = datetime.now(timezone.utc)
        disk_full = AsyncMock(side_effect=OSError(28, "No space left on device"))
        with patch("scxdata.fetch.fetch_text", AsyncMock(return_value='[{"uid": "dn"}]')):
            with patch("scxdata.fetch.write_text_async", disk_full):
                result = await fetch_json(URL)

        disk_full.assert_awaited_once()
        assert result.data == [{"uid": "dn"}]
        assert result.retrieved_at >= before
        assert not cache_file_for(URL, cache_dir).exists()

    @pytest.mark.asyncio
    async def test_cache_dir_failure_still_returns_data(self, cache_dir: Path) -> None:
        with patch("scxdata.fetch.fetch_text", AsyncMock(return_value="[]")):
            with patch("scxdata.fetch.mkdir_async", AsyncMock(side_effect=PermissionError("read-only"))):
                result = await fetch_json(URL)

        assert result.data == []

    @pytest.mark.asyncio
    async def test_invalid_json_is_malformed(self, cache_dir: Path) -> None:
        with patch("scxdata.fetch.fetch_text", AsyncMock(return_value="<html>")):
            with pytest.raises(MalformedResponseError):
                await fetch_json(URL)

        assert not cache_file_for(URL, cache_dir).exists()

    @pytest.mark.asyncio
    async def test_fetch_error_propagates(self, cache_dir: Path) -> None:
        """Transport failures reach the caller, which decides the fallback."""
        with patch("scxdata.fetch.fetch_text", AsyncMock(side_effect=FetchError("HTTP 500"))):
            with pytest.raises(FetchError):
                await fetch_json(URL)

    @pytest.mark.asyncio
    async def test_counts_endpoints(self, cache_dir: Path) -> None:
        stats = FetchStats()
        with patch("scxdata.fetch.fetch_text", AsyncMock(return_value="[]")):
            await fetch_json(URL, stats=stats)
            await fetch_json(URL, stats=stats)

        assert stats.endpoints_hit == 2


class TestFetchStats:
    """Tests for FetchStats.summary."""

    def test_all_successful(self) -> None:
        assert FetchStats(endpoints_hit=4).summary() == "4/4 successful (100.0%)"

    def test_error_breakdown(self) -> None:
        stats = FetchStats(endpoints_hit=10, fetch_errors=4, pub_info_errors=1, cache_time_errors=2)
        assert stats.summary() == (
            "6/10 successful (60.0%), 4 total failed, 1 (25.0%) failed from /publication_info"
            ", 2 errors reading cache data timestamp"
        )

    def test_nothing_fetched(self) -> None:
        assert FetchStats().summary() == "0/0 successful (0.0%)"
