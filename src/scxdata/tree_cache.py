"""Single-flight, process-lifetime cache of the unified tree."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Iterable

from scxdata.exceptions import ScxDataError
from scxdata.logging_config import get_logger
from scxdata.schemas import ContentNode
from scxdata.tree_builder import build_tree

logger = get_logger(__name__)

TreeBuild = Callable[[Iterable[str] | None], Awaitable[list[ContentNode]]]


class TreeCache:
    """Runs the tree build at most once and shares the result.

    The first caller starts the build as a task; callers arriving while it
    runs await that same task. A successful result is kept for the lifetime
    of the instance. A failed build yields an empty tree and is not kept.
    """

    def __init__(
        self,
        build: TreeBuild = build_tree,
        root_uids: Iterable[str] | None = None,
    ) -> None:
        self._build = build
        self._root_uids = list(root_uids) if root_uids is not None else None
        self._tree: list[ContentNode] | None = None
        self._pending: asyncio.Task[list[ContentNode]] | None = None

    @property
    def is_populated(self) -> bool:
        return self._tree is not None

    async def get_tree(self) -> list[ContentNode]:
        if self._tree is not None:
            return self._tree
        if self._pending is None:
            self._pending = asyncio.ensure_future(self._run())
        # Shielded so one cancelled waiter does not cancel the shared build.
        return await asyncio.shield(self._pending)

    async def _run(self) -> list[ContentNode]:
        try:
            tree = await self._build(self._root_uids)
        except (ScxDataError, OSError) as exc:
            logger.error("Tree build failed: %s", exc)
            return []
        else:
            self._tree = tree
            return tree
        finally:
            # Never pin a finished task; a later call retries unless populated.
            self._pending = None


_default_cache: TreeCache | None = None


async def get_tree() -> list[ContentNode]:
    """Return the process-wide unified tree, building it on first use."""
    global _default_cache
    if _default_cache is None:
        _default_cache = TreeCache()
    return await _default_cache.get_tree()
