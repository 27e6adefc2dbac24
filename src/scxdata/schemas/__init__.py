"""Shared schemas for scxdata."""

from scxdata.schemas.entries import FlatEntry, Pagination, RangeEntry, UnitLink
from scxdata.schemas.nodes import ContentNode, NodeKind, Translation

__all__ = [
    "ContentNode",
    "FlatEntry",
    "NodeKind",
    "Pagination",
    "RangeEntry",
    "Translation",
    "UnitLink",
]
