"""Expansion of compound range uids into individually addressable units."""

from __future__ import annotations

import copy
import re
from typing import Any

from scxdata.parallels import count_parallels, filter_parallels
from scxdata.schemas import ContentNode, Pagination, RangeEntry, Translation, UnitLink

_DOTTED_RANGE_RE = re.compile(r"^([a-z]+\d+)\.(\d+)-(\d+)$")
_FLAT_RANGE_RE = re.compile(r"^([a-z]+)(\d+)-(\d+)$")
_ACRONYM_RE = re.compile(r"^([a-zA-Z]+)(.*)$")

# Upper-cased prefixes that are written in mixed case instead.
_MIXED_CASE_PREFIXES = {"DHP": "Dhp"}


def range_units(uid: str) -> list[str]:
    """List the single-unit uids a range uid covers.

    ``an1.1-3`` gives ``["an1.1", "an1.2", "an1.3"]`` and ``dhp1-2`` gives
    ``["dhp1", "dhp2"]``. Anything that is not a range gives ``[]``.
    """
    match = _DOTTED_RANGE_RE.match(uid)
    if match:
        prefix = f"{match.group(1)}."
    else:
        match = _FLAT_RANGE_RE.match(uid)
        if not match:
            return []
        prefix = match.group(1)
    start, end = int(match.group(2)), int(match.group(3))
    if start > end:
        return []
    return [f"{prefix}{number}" for number in range(start, end + 1)]


def is_range_uid(uid: str) -> bool:
    return bool(range_units(uid))


def uid_to_acronym(uid: str | None) -> str:
    """Render a unit uid as a label, e.g. ``an1.1`` as ``AN 1.1``."""
    if not uid:
        return ""
    match = _ACRONYM_RE.match(uid)
    if not match:
        return uid
    letters = match.group(1).upper()
    letters = _MIXED_CASE_PREFIXES.get(letters, letters)
    return f"{letters} {match.group(2)}"


def uid_to_title(uid: str) -> str:
    """Short title of a unit: the part after the dot, or its number."""
    if "." in uid:
        return uid.split(".", 1)[1]
    return uid_to_acronym(uid).split(" ", 1)[-1]


def _neighbour_uid(translation: Translation, direction: str) -> str | None:
    record = translation.suttas_data
    if not isinstance(record, dict):
        return None
    body = record.get("translation")
    if not isinstance(body, dict):
        return None
    neighbour = body.get(direction)
    if not isinstance(neighbour, dict):
        return None
    return neighbour.get("uid") or None


def previous_unit(translation: Translation) -> str | None:
    """Last unit of the preceding sibling, which may itself be a range."""
    uid = _neighbour_uid(translation, "previous")
    if uid is None:
        return None
    units = range_units(uid)
    return units[-1] if units else uid


def next_unit(translation: Translation) -> str | None:
    """First unit of the following sibling, which may itself be a range."""
    uid = _neighbour_uid(translation, "next")
    if uid is None:
        return None
    units = range_units(uid)
    return units[0] if units else uid


def _link(uid: str | None) -> UnitLink | None:
    if uid is None:
        return None
    return UnitLink(uid=uid, name=uid_to_acronym(uid))


def expand_range(
    node: ContentNode,
    translation: Translation,
    base: dict[str, Any],
    breadcrumb: str,
) -> list[RangeEntry]:
    """Explode one translation of a range node into per-unit entries.

    Args:
        node: The range node, used for its uid and parallels.
        translation: The segmented translation being expanded.
        base: Merged node and translation fields; each unit gets its own copy.
        breadcrumb: Breadcrumb of the compound entry; its last segment is
            replaced by each unit uid.

    Returns:
        One entry per unit, in range order, or ``[]`` if ``node`` is not a range.
    """
    units = range_units(node.uid)
    parent_crumb = breadcrumb.rpartition("/")[0]
    entries: list[RangeEntry] = []

    for index, unit in enumerate(units):
        previous = units[index - 1] if index > 0 else previous_unit(translation)
        following = units[index + 1] if index < len(units) - 1 else next_unit(translation)
        parallels = copy.deepcopy(filter_parallels(node.parallels, unit))

        data = {
            **copy.deepcopy(base),
            "uid": unit,
            "acronym": uid_to_acronym(unit),
            "path": f"{unit}/{translation.lang}/{translation.author_uid}",
            "breadcrumb": f"{parent_crumb}/{unit}" if parent_crumb else unit,
            "range_unit": True,
            "range_title": uid_to_title(unit),
            "pagination": Pagination(previous=_link(previous), next=_link(following)),
            "range_parallels": parallels,
            "range_parallels_count": count_parallels(parallels),
        }
        entries.append(RangeEntry.model_validate(data))
    return entries
