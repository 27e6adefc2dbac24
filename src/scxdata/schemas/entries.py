"""Flat view entry models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class FlatEntry(BaseModel):
    """One addressable entry of a flat view.

    Node or translation fields are carried as extra fields.
    """

    model_config = ConfigDict(extra="allow")

    uid: str
    path: str
    breadcrumb: str


class UnitLink(BaseModel):
    """Neighbouring unit of a range entry."""

    uid: str
    name: str


class Pagination(BaseModel):
    previous: UnitLink | None = None
    next: UnitLink | None = None


class RangeEntry(FlatEntry):
    """A single unit expanded out of a compound range entry."""

    range_unit: bool = True
    range_title: str
    acronym: str
    pagination: Pagination
    range_parallels: dict[str, list[Any]] | None = None
    range_parallels_count: int | None = None
