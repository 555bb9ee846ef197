"""Fan-out helper shared by the concurrent stages."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Iterable


async def gather_settled[T](awaitables: Iterable[Awaitable[T]]) -> list[T]:
    """Run every awaitable to completion, then surface the first problem.

    Siblings are never cancelled because one of them failed. Once all have
    settled, a captured cancellation wins over any other exception; otherwise
    the first exception in submission order is re-raised.
    """
    results = await asyncio.gather(*awaitables, return_exceptions=True)
    errors = [r for r in results if isinstance(r, BaseException)]
    for error in errors:
        if isinstance(error, asyncio.CancelledError):
            raise error
    if errors:
        raise errors[0]
    return list(results)  # type: ignore[arg-type]
