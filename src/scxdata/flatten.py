"""Generic depth-first flattening, deduplication and redaction."""

from __future__ import annotations

from typing import Any, Callable, Iterable

from scxdata.schemas import ContentNode, FlatEntry

REDACTED: dict[str, Any] = {"redacted": True}

_BODY_FIELDS = ("bilara_data", "suttas_data")

StopPredicate = Callable[[ContentNode], bool]
Redactor = Callable[[dict[str, Any]], dict[str, Any]]


class DedupGuard:
    """Set of paths already emitted by one flatten pass.

    Create one per pass; reusing it would suppress entries in the next view.
    """

    def __init__(self) -> None:
        self._seen: set[str] = set()

    def claim(self, path: str) -> bool:
        """Record ``path`` and return True, or False if it was already taken."""
        if path in self._seen:
            return False
        self._seen.add(path)
        return True

    def __contains__(self, path: object) -> bool:
        return path in self._seen

    def __len__(self) -> int:
        return len(self._seen)


def join_path(parent_path: str, uid: str) -> str:
    return f"{parent_path}/{uid}" if parent_path else uid


def redact_bodies(data: dict[str, Any]) -> dict[str, Any]:
    """Replace text bodies with a marker, recursing into translations and children."""
    redacted = {
        key: value
        for key, value in data.items()
        if key not in _BODY_FIELDS and key not in ("children", "translations")
    }
    for field in _BODY_FIELDS:
        if data.get(field):
            redacted[field] = dict(REDACTED)
    if "translations" in data:
        redacted["translations"] = [redact_bodies(t) for t in data["translations"]]
    if "children" in data:
        redacted["children"] = [redact_bodies(child) for child in data["children"]]
    return redacted


def redact_translations(data: dict[str, Any]) -> dict[str, Any]:
    """Collapse translation lists to a marker, recursing into children."""
    redacted = {key: value for key, value in data.items() if key not in ("children", "translations")}
    if data.get("translations"):
        redacted["translations"] = [dict(REDACTED)]
    if "children" in data:
        redacted["children"] = [redact_translations(child) for child in data["children"]]
    return redacted


def redact_grandchildren(data: dict[str, Any]) -> dict[str, Any]:
    """Keep direct children but collapse anything below them to a marker."""
    redacted = {key: value for key, value in data.items() if key != "children"}
    if "children" in data:
        children = []
        for child in data["children"]:
            trimmed = {key: value for key, value in child.items() if key != "children"}
            if child.get("children"):
                trimmed["children"] = [dict(REDACTED)]
            children.append(trimmed)
        redacted["children"] = children
    return redacted


def make_entry(data: dict[str, Any], *, path: str, breadcrumb: str) -> FlatEntry:
    return FlatEntry.model_validate({**data, "path": path, "breadcrumb": breadcrumb})


def flatten_terminals(
    nodes: Iterable[ContentNode],
    *,
    stop: StopPredicate,
    redact: Redactor = redact_bodies,
    guard: DedupGuard | None = None,
) -> list[FlatEntry]:
    """Emit every node where ``stop`` holds, without descending below it.

    Each entry's path is its uid and its breadcrumb the full chain of
    ancestor uids. A uid reached through a second route is emitted once.
    """
    guard = guard if guard is not None else DedupGuard()
    entries: list[FlatEntry] = []

    def walk(level: Iterable[ContentNode], parent_path: str) -> None:
        for node in level:
            breadcrumb = join_path(parent_path, node.uid)
            if stop(node):
                if guard.claim(node.uid):
                    entries.append(make_entry(redact(node.model_dump()), path=node.uid, breadcrumb=breadcrumb))
                continue
            walk(node.children, breadcrumb)

    walk(nodes, "")
    return entries
