"""Recursive construction of the unified content tree."""

from __future__ import annotations

import asyncio
import time
from functools import partial
from typing import Any, Iterable

import httpx
from pydantic import ValidationError

from scxdata.concurrency import limit_concurrency
from scxdata.config import (
    SCX_FETCH_PUBLICATION_INFO,
    SCX_MAX_CONCURRENCY,
    SCX_ROOT_UIDS,
    SCX_TRANSLATION_LANGS,
)
from scxdata.endpoints import (
    leaf_url,
    menu_url,
    parallels_url,
    publication_info_url,
    segmented_translation_url,
    suttas_url,
)
from scxdata.exceptions import FetchError
from scxdata.fetch import FetchResult, FetchStats, fetch_json
from scxdata.http_utils import create_client
from scxdata.logging_config import get_logger
from scxdata.schemas import ContentNode, NodeKind, Translation

logger = get_logger(__name__)


def is_detail_bearing_uid(uid: str) -> bool:
    """Return True for pātimokkha-style branches that also have leaf detail."""
    return uid.endswith("-pm") or "-pm-" in uid


def _first_record(data: Any) -> dict[str, Any] | None:
    """Return the first element of a non-empty JSON array of objects."""
    if not isinstance(data, list) or not data or not isinstance(data[0], dict):
        return None
    return data[0]


def _child_uids(children: Any) -> list[str]:
    if not isinstance(children, list):
        return []
    return [child["uid"] for child in children if isinstance(child, dict) and child.get("uid")]


def _parallels_map(data: Any) -> dict[str, list[Any]] | None:
    if not isinstance(data, dict):
        return None
    return {key: value for key, value in data.items() if isinstance(value, list)}


class TreeBuilder:
    """Builds ContentNode subtrees from the menu, leaf and translation endpoints.

    Every upstream failure is absorbed here: a failed or malformed menu
    lookup makes the subtree absent, a failed leaf lookup leaves the bare
    menu node, and a failed body lookup drops just that translation.
    """

    def __init__(
        self,
        *,
        client: httpx.AsyncClient | None = None,
        stats: FetchStats | None = None,
        max_concurrency: int = SCX_MAX_CONCURRENCY,
        languages: Iterable[str] = SCX_TRANSLATION_LANGS,
        fetch_publication_info: bool = SCX_FETCH_PUBLICATION_INFO,
    ) -> None:
        self.client = client
        self.stats = stats or FetchStats()
        self.max_concurrency = max_concurrency
        self.languages = frozenset(languages)
        self.fetch_publication_info = fetch_publication_info

    async def _fetch(self, url: str) -> FetchResult:
        return await fetch_json(url, client=self.client, stats=self.stats)

    def _keep_translation(self, record: Any) -> bool:
        if not isinstance(record, dict):
            return False
        if not self.languages:
            return True
        return record.get("lang") in self.languages or bool(record.get("is_root"))

    async def build_node(self, uid: str, depth: int = 0) -> ContentNode | None:
        """Resolve ``uid`` and everything below it.

        Returns:
            The resolved node, or None when the subtree is absent.
        """
        try:
            result = await self._fetch(menu_url(uid))
        except FetchError as exc:
            self.stats.fetch_errors += 1
            logger.warning("Fetch error for /menu with uid %s at depth %d: %s", uid, depth, exc)
            return None

        raw = _first_record(result.data)
        if raw is None:
            logger.warning("Malformed or empty data from /menu for uid %s at depth %d", uid, depth)
            return None

        raw = {**raw, "fetched_at": result.retrieved_at}
        child_uids = _child_uids(raw.pop("children", None))
        node_uid = raw.get("uid") or uid

        if raw.get("node_type") == NodeKind.LEAF.value:
            return self._validate_node(await self._resolve_leaf(raw, node_uid, depth), uid, depth)

        if child_uids and is_detail_bearing_uid(node_uid):
            resolved = await self._resolve_leaf(raw, node_uid, depth)
            # _resolve_leaf hands back the menu record untouched when detail is missing
            if resolved is not raw:
                raw = {**resolved, "has_detail": True}

        node = self._validate_node(raw, uid, depth)
        if node is None or not child_uids:
            return node

        children = await limit_concurrency(
            [partial(self.build_node, child_uid, depth + 1) for child_uid in child_uids],
            self.max_concurrency,
        )
        node.children = [child for child in children if child is not None]
        return node

    def _validate_node(self, raw: dict[str, Any], uid: str, depth: int) -> ContentNode | None:
        try:
            return ContentNode.model_validate(raw)
        except ValidationError as exc:
            logger.warning("Malformed node for uid %s at depth %d: %s", uid, depth, exc)
            return None

    async def _resolve_leaf(self, raw: dict[str, Any], uid: str, depth: int) -> dict[str, Any]:
        """Merge leaf detail, parallels and translation bodies into ``raw``."""
        try:
            result = await self._fetch(leaf_url(uid))
        except FetchError as exc:
            self.stats.fetch_errors += 1
            logger.warning("Fetch error for /suttaplex with uid %s: %s", uid, exc)
            return raw

        detail = _first_record(result.data)
        if detail is None:
            return raw

        merged = {**raw, **detail}
        merged.pop("children", None)
        merged["parallels"] = await self._parallels(uid)

        records = [record for record in merged.pop("translations", None) or [] if self._keep_translation(record)]
        translations = await limit_concurrency(
            [partial(self._resolve_translation, uid, record, depth) for record in records],
            self.max_concurrency,
        )
        merged["translations"] = [translation for translation in translations if translation is not None]
        return merged

    async def _parallels(self, uid: str) -> dict[str, list[Any]] | None:
        try:
            result = await self._fetch(parallels_url(uid))
        except FetchError as exc:
            self.stats.fetch_errors += 1
            logger.warning("Fetch error for /parallels/%s: %s", uid, exc)
            return None
        return _parallels_map(result.data)

    async def _resolve_translation(
        self, uid: str, record: dict[str, Any], depth: int
    ) -> Translation | None:
        try:
            translation = Translation.model_validate(record)
        except ValidationError as exc:
            logger.warning("Malformed translation record for uid %s: %s", uid, exc)
            return None

        label = f"{uid}/{translation.author_uid}"
        if translation.segmented:
            try:
                bilara = await self._fetch(
                    segmented_translation_url(uid, translation.author_uid, translation.lang)
                )
            except FetchError as exc:
                self.stats.fetch_errors += 1
                logger.warning("Fetch error for /bilarasuttas with translation %s at depth %d: %s", label, depth, exc)
                return None
            translation.bilara_data = bilara.data

        try:
            suttas = await self._fetch(suttas_url(uid, translation.author_uid, translation.lang))
        except FetchError as exc:
            self.stats.fetch_errors += 1
            logger.warning("Fetch error for /suttas with translation %s at depth %d: %s", label, depth, exc)
            return None

        suttas_data = suttas.data
        if isinstance(suttas_data, dict) and isinstance(suttas_data.get("suttaplex"), dict):
            plex = suttas_data["suttaplex"]
            suttas_data = {
                **suttas_data,
                "suttaplex": {
                    **plex,
                    "translations": [t for t in plex.get("translations") or [] if self._keep_translation(t)],
                },
            }
        translation.suttas_data = suttas_data
        translation.fetched_at = suttas.retrieved_at

        if self.fetch_publication_info:
            translation.publication_info = await self._publication_info(uid, translation)
        return translation

    async def _publication_info(self, uid: str, translation: Translation) -> dict[str, Any] | None:
        # Most translations have no publication info; upstream answers with an error object.
        try:
            result = await self._fetch(
                publication_info_url(uid, translation.lang, translation.author_uid)
            )
        except FetchError as exc:
            self.stats.fetch_errors += 1
            self.stats.pub_info_errors += 1
            logger.debug("No publication info for %s/%s/%s: %s", uid, translation.lang, translation.author_uid, exc)
            return None

        data = result.data
        if isinstance(data, dict):
            return None if data.get("error") else data
        return _first_record(data)


async def build_tree(root_uids: Iterable[str] | None = None) -> list[ContentNode]:
    """Build the unified tree for the configured top-level roots.

    Roots are built concurrently over one shared HTTP client. Roots that
    resolve to nothing are dropped, so a wholly unreachable upstream gives
    an empty list.
    """
    uids = list(root_uids) if root_uids is not None else list(SCX_ROOT_UIDS)
    stats = FetchStats()
    started = time.monotonic()

    async with create_client() as client:
        builder = TreeBuilder(client=client, stats=stats)
        roots = await asyncio.gather(*(builder.build_node(uid) for uid in uids))

    elapsed_mins = (time.monotonic() - started) / 60
    logger.info("Fetched from %d endpoints in ~%.2f mins", stats.endpoints_hit, elapsed_mins)
    logger.info("Results: %s", stats.summary())
    return [root for root in roots if root is not None]
