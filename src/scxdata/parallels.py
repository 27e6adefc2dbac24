"""Match cross-reference keys against individual units.

Parallels maps are keyed by unit identifiers that may carry a ``#anchor``
and may denote an inclusive range, e.g. ``dhp1-20`` or ``an1.188-197``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

_UNIT_RE = re.compile(r"^(.+?)(\d+)(?:\.(\d+))?$")
_RANGE_KEY_RE = re.compile(r"^(.+?)(\d+)(?:\.(\d+))?-(\d+)$")


@dataclass(frozen=True)
class UnitRef:
    """A unit identifier split as prefix, number and optional decimal.

    ``an1.197`` is ``("an", 1, 197)`` and ``dhp20`` is ``("dhp", 20, None)``.
    """

    prefix: str
    number: int
    decimal: int | None = None


@dataclass(frozen=True)
class RangeKey:
    """An inclusive range key.

    For dotted ranges (``an1.188-197``) ``start`` is the first decimal and
    ``number`` the shared major number. For flat ranges (``dhp1-3``)
    ``start`` is None and the span is ``number`` to ``end``.
    """

    prefix: str
    number: int
    start: int | None
    end: int


def parse_unit(uid: str) -> UnitRef | None:
    match = _UNIT_RE.match(uid)
    if not match:
        return None
    prefix, number, decimal = match.groups()
    return UnitRef(prefix, int(number), int(decimal) if decimal is not None else None)


def parse_range_key(key: str) -> RangeKey | None:
    match = _RANGE_KEY_RE.match(key.split("#", 1)[0])
    if not match:
        return None
    prefix, number, start, end = match.groups()
    return RangeKey(prefix, int(number), int(start) if start is not None else None, int(end))


def matches_exact_or_prefix(unit_uid: str, key: str) -> bool:
    """The key is the unit itself, or starts a range or anchor at it."""
    return key == unit_uid or key.startswith(f"{unit_uid}-") or key.startswith(f"{unit_uid}#")


def matches_range_end(unit_uid: str, key: str) -> bool:
    """The key is a range ending at the unit (``dhp5-20`` for ``dhp20``).

    Dotted ranges only end at units of the same book: ``an1.197`` ends
    ``an1.188-197`` but not ``an2.188-197``, even though the two share an
    end number.
    """
    unit = parse_unit(unit_uid)
    span = parse_range_key(key)
    if unit is None or span is None or unit.prefix != span.prefix:
        return False
    if span.start is not None:
        return unit.number == span.number and unit.decimal == span.end
    return unit.decimal is None and unit.number == span.end


def matches_within_range(unit_uid: str, key: str) -> bool:
    """The unit falls inside the range the key denotes."""
    unit = parse_unit(unit_uid)
    span = parse_range_key(key)
    if unit is None or span is None or unit.prefix != span.prefix:
        return False
    if span.start is not None:
        # an1.* ranges only ever contain an1.* units
        if unit.number != span.number or unit.decimal is None:
            return False
        return span.start <= unit.decimal <= span.end
    return span.number <= unit.number <= span.end


_RULES = (matches_exact_or_prefix, matches_range_end, matches_within_range)


def parallel_key_matches(unit_uid: str, key: str) -> bool:
    """Return True if the parallels ``key`` applies to ``unit_uid``."""
    return any(rule(unit_uid, key) for rule in _RULES)


def filter_parallels(
    parallels: dict[str, list[Any]] | None, unit_uid: str
) -> dict[str, list[Any]] | None:
    """Slice a parallels map down to the keys relevant to one unit."""
    if parallels is None:
        return None
    return {key: value for key, value in parallels.items() if parallel_key_matches(unit_uid, key)}


def count_parallels(parallels: dict[str, list[Any]] | None) -> int | None:
    if parallels is None:
        return None
    return sum(len(value) for value in parallels.values())
