"""Settle-all concurrent join.

Every enrichment stage fires a batch of independent requests and waits for
all of them; one failure never unwinds the batch.
"""

import asyncio
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
K = TypeVar("K")
V = TypeVar("V")


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    """Outcome of an awaitable that returned."""

    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Failure:
    """Outcome of an awaitable that raised."""

    reason: BaseException

    @property
    def ok(self) -> bool:
        return False


Result = Success[T] | Failure


async def join_all_tolerant(awaitables: Iterable[Awaitable[T]]) -> list[Result[T]]:
    """Await every awaitable and collect per-item outcomes.

    Args:
        awaitables: Independent operations to run concurrently.

    Returns:
        One Success or Failure per input, in input order.
    """
    outcomes = await asyncio.gather(*awaitables, return_exceptions=True)

    results: list[Result[T]] = []
    for outcome in outcomes:
        if isinstance(outcome, BaseException):
            results.append(Failure(outcome))
        else:
            results.append(Success(outcome))
    return results


def value_or(result: Result[T], default: T) -> T:
    """Return the success value or `default` for a failure."""
    if isinstance(result, Success):
        return result.value
    return default


def successes(results: Iterable[Result[T]]) -> list[T]:
    """Keep only the values of successful outcomes."""
    return [result.value for result in results if isinstance(result, Success)]


async def map_tolerant(
    keys: Iterable[K],
    loader: Callable[[K], Awaitable[V | None]],
) -> dict[K, V]:
    """Load a value per key concurrently, keeping only usable results.

    Keys whose loader raised or returned None are absent from the map:
    absence means "enrichment unavailable".

    Args:
        keys: Lookup keys (duplicates are loaded once).
        loader: Coroutine factory for one key.

    Returns:
        Mapping of key to loaded value.
    """
    unique_keys = list(dict.fromkeys(keys))
    results = await join_all_tolerant(loader(key) for key in unique_keys)
    return {
        key: result.value
        for key, result in zip(unique_keys, results, strict=True)
        if isinstance(result, Success) and result.value is not None
    }
