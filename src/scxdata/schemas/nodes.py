"""Content tree models."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class NodeKind(str, Enum):
    """Position of a node in the upstream hierarchy."""

    ROOT = "root"
    BRANCH = "branch"
    LEAF = "leaf"


class Translation(BaseModel):
    """One (language, contributor) rendering of a leaf.

    Upstream descriptive fields (title, publication date, ...) are kept as
    extra fields. Bodies are attached by the tree builder.
    """

    model_config = ConfigDict(extra="allow")

    lang: str
    author_uid: str
    author: str | None = None
    is_root: bool = False
    segmented: bool = False
    publication_date: str | None = None
    bilara_data: Any = None
    suttas_data: Any = None
    publication_info: dict[str, Any] | None = None
    fetched_at: datetime | None = None


class ContentNode(BaseModel):
    """A node of the unified content tree.

    ``has_detail`` marks branches that also carry leaf detail (translations
    and parallels) alongside their children.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    uid: str
    kind: NodeKind = Field(..., alias="node_type")
    has_detail: bool = False
    children: list["ContentNode"] = Field(default_factory=list)
    translations: list[Translation] = Field(default_factory=list)
    parallels: dict[str, list[Any]] | None = None
    fetched_at: datetime | None = None

    @property
    def is_leaf(self) -> bool:
        return self.kind is NodeKind.LEAF

    @property
    def is_branch(self) -> bool:
        return self.kind is NodeKind.BRANCH
