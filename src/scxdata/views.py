"""Flat, path-addressable views of the unified content tree.

Every view is a pure function of the tree. The ``*_data`` coroutines are
the zero-argument producers handed to page generation; they read the
shared tree from the single-flight cache.
"""

from __future__ import annotations

from typing import Iterable

from scxdata.flatten import (
    DedupGuard,
    flatten_terminals,
    join_path,
    make_entry,
    redact_bodies,
    redact_grandchildren,
    redact_translations,
)
from scxdata.ranges import expand_range, is_range_uid
from scxdata.schemas import ContentNode, FlatEntry, NodeKind
from scxdata.tree_cache import get_tree


def is_chapter(node: ContentNode) -> bool:
    """Chapter boundary: a non-leaf without branch children, or a detail-bearing branch."""
    if node.has_detail:
        return True
    return not node.is_leaf and not any(child.is_branch for child in node.children)


def has_leaf_child(node: ContentNode) -> bool:
    return any(child.is_leaf for child in node.children)


def is_leaf(node: ContentNode) -> bool:
    return node.kind is NodeKind.LEAF


def has_branch_child(node: ContentNode) -> bool:
    return any(child.is_branch for child in node.children)


def chapter_view(tree: Iterable[ContentNode]) -> list[FlatEntry]:
    """Chapters: the last level above the texts, e.g. ``dn-silakkhandhavagga``."""
    return flatten_terminals(tree, stop=is_chapter, redact=redact_bodies)


def leaf_parent_view(tree: Iterable[ContentNode]) -> list[FlatEntry]:
    """Chapters under the older convention: any node directly holding a leaf."""
    return flatten_terminals(tree, stop=has_leaf_child, redact=redact_bodies)


def text_meta_view(tree: Iterable[ContentNode]) -> list[FlatEntry]:
    """Per-text metadata pages (``/dn1``), with parallels but no bodies."""
    return flatten_terminals(tree, stop=is_leaf, redact=redact_bodies)


def pitaka_view(tree: Iterable[ContentNode]) -> list[FlatEntry]:
    """Nested menu pages (``sutta/long/dn``) above the chapter level."""
    guard = DedupGuard()
    entries: list[FlatEntry] = []

    def walk(level: Iterable[ContentNode], parent_path: str) -> None:
        for node in level:
            if not has_branch_child(node):
                continue
            path = join_path(parent_path, node.uid)
            if guard.claim(path):
                entries.append(make_entry(redact_translations(node.model_dump()), path=path, breadcrumb=path))
            walk(node.children, path)

    walk(tree, "")
    return entries


def index_view(tree: Iterable[ContentNode]) -> list[FlatEntry]:
    """Top-level roots with their direct children only."""
    guard = DedupGuard()
    return [
        make_entry(redact_grandchildren(redact_translations(root.model_dump())), path=root.uid, breadcrumb=root.uid)
        for root in tree
        if guard.claim(root.uid)
    ]


def text_view(tree: Iterable[ContentNode]) -> list[FlatEntry]:
    """One entry per translation, at ``uid/lang/author_uid``.

    Segmented translations of range nodes are replaced by one entry per
    unit. Two translations resolving to the same path keep the first.
    """
    guard = DedupGuard()
    entries: list[FlatEntry] = []

    def emit(node: ContentNode, breadcrumb: str) -> None:
        shared = node.model_dump(exclude={"translations", "children"})
        for translation in node.translations:
            path = f"{node.uid}/{translation.lang}/{translation.author_uid}"
            # upstream lists some (text, lang, author) triples twice, e.g. mn1/ru/sv
            if not guard.claim(path):
                continue
            base = {**shared, **translation.model_dump()}
            if translation.segmented and is_range_uid(node.uid):
                entries.extend(
                    unit for unit in expand_range(node, translation, base, breadcrumb) if guard.claim(unit.path)
                )
            else:
                entries.append(make_entry(base, path=path, breadcrumb=breadcrumb))

    def walk(level: Iterable[ContentNode], parent_path: str) -> None:
        for node in level:
            breadcrumb = join_path(parent_path, node.uid)
            if node.translations:
                emit(node, breadcrumb)
            walk(node.children, breadcrumb)

    walk(tree, "")
    return entries


async def chapter_data() -> list[FlatEntry]:
    return chapter_view(await get_tree())


async def leaf_parent_data() -> list[FlatEntry]:
    return leaf_parent_view(await get_tree())


async def text_meta_data() -> list[FlatEntry]:
    return text_meta_view(await get_tree())


async def text_data() -> list[FlatEntry]:
    return text_view(await get_tree())


async def pitaka_data() -> list[FlatEntry]:
    return pitaka_view(await get_tree())


async def index_data() -> list[FlatEntry]:
    return index_view(await get_tree())
