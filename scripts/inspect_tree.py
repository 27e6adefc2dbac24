"""Build the content tree for a few roots and summarise each flat view."""

from __future__ import annotations

import argparse
import asyncio
from collections import Counter

from scxdata.logging_config import configure_logging
from scxdata.schemas import ContentNode, FlatEntry
from scxdata.tree_builder import build_tree
from scxdata.views import (
    chapter_view,
    index_view,
    leaf_parent_view,
    pitaka_view,
    text_meta_view,
    text_view,
)

VIEWS = {
    "index": index_view,
    "pitaka": pitaka_view,
    "chapter": chapter_view,
    "leaf-parent": leaf_parent_view,
    "text-meta": text_meta_view,
    "text": text_view,
}


def main() -> None:
    parser = argparse.ArgumentParser(description="Inspect the unified content tree and its flat views.")
    parser.add_argument("uids", nargs="+", help="Root uids to build (e.g. dn, an1, dhp)")
    parser.add_argument("--view", choices=sorted(VIEWS), help="Only summarise this view")
    parser.add_argument("--limit", type=int, default=10, help="Number of paths to print per view")
    parser.add_argument("--log-level", default=None, help="Override SCX_LOG_LEVEL")
    args = parser.parse_args()

    configure_logging(args.log_level)
    tree = asyncio.run(build_tree(args.uids))

    kinds = collect_kinds(tree)
    print("Nodes:")
    for name, count in kinds.most_common():
        print(f"{name}: {count}")

    for name, view in VIEWS.items():
        if args.view and name != args.view:
            continue
        print_view(name, view(tree), limit=args.limit)


def collect_kinds(tree: list[ContentNode]) -> Counter:
    kinds = Counter()
    stack = list(tree)
    while stack:
        node = stack.pop()
        kinds[node.kind.value] += 1
        if node.has_detail:
            kinds["detail-bearing branch"] += 1
        stack.extend(node.children)
    return kinds


def print_view(name: str, entries: list[FlatEntry], *, limit: int) -> None:
    print(f"\n{name}: {len(entries)} entries")
    for entry in entries[:limit]:
        print(f"  /{entry.path}  ({entry.breadcrumb})")


if __name__ == "__main__":
    main()
