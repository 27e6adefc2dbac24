"""scxdata: aggregate the SuttaCentral catalog into flat, path-addressable views."""

from scxdata.concurrency import limit_concurrency
from scxdata.exceptions import (
    FetchError,
    MalformedResponseError,
    NotFoundError,
    ScxDataError,
)
from scxdata.fetch import FetchResult, FetchStats, fetch_json
from scxdata.schemas import ContentNode, FlatEntry, NodeKind, RangeEntry, Translation
from scxdata.tree_builder import TreeBuilder, build_tree
from scxdata.tree_cache import TreeCache, get_tree
from scxdata.views import (
    chapter_data,
    chapter_view,
    index_data,
    index_view,
    leaf_parent_data,
    leaf_parent_view,
    pitaka_data,
    pitaka_view,
    text_data,
    text_meta_data,
    text_meta_view,
    text_view,
)

__all__ = [
    "ContentNode",
    "FetchError",
    "FetchResult",
    "FetchStats",
    "FlatEntry",
    "MalformedResponseError",
    "NodeKind",
    "NotFoundError",
    "RangeEntry",
    "ScxDataError",
    "Translation",
    "TreeBuilder",
    "TreeCache",
    "build_tree",
    "chapter_data",
    "chapter_view",
    "fetch_json",
    "get_tree",
    "index_data",
    "index_view",
    "leaf_parent_data",
    "leaf_parent_view",
    "limit_concurrency",
    "pitaka_data",
    "pitaka_view",
    "text_data",
    "text_meta_data",
    "text_meta_view",
    "text_view",
]
