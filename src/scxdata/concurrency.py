"""Bounded fan-out for asynchronous producers."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Sequence, TypeVar

T = TypeVar("T")


async def limit_concurrency(
    producers: Sequence[Callable[[], Awaitable[T]]],
    limit: int,
) -> list[T]:
    """Run producers in sequential waves of at most ``limit``.

    Each producer is only called once its wave starts, so no more than
    ``limit`` of them are ever in flight. Results keep input order. A wave
    always settles completely before the next one starts; if any producer
    in it raised, the first such exception is re-raised at that point.

    Args:
        producers: Zero-argument callables returning awaitables.
        limit: Maximum number of simultaneous producers.

    Returns:
        Results in the same order as ``producers``.
    """
    if limit < 1:
        raise ValueError(f"limit must be at least 1, got {limit}")

    results: list[T] = []
    for start in range(0, len(producers), limit):
        wave = producers[start : start + limit]
        outcomes = await asyncio.gather(*(produce() for produce in wave), return_exceptions=True)
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                raise outcome
        results.extend(outcomes)  # type: ignore[arg-type]
    return results
