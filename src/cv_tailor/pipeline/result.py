"""Result type and combinators shared by every pipeline stage.

Each stage returns either ``Ok`` or ``Err`` instead of raising. Composition
with ``chain``, ``chain_pipe`` and ``map_results`` stops at the first ``Err``
so exactly one failure surfaces per run.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful stage output."""

    data: T
    success: bool = field(default=True, init=False)


@dataclass(frozen=True)
class Err:
    """Failed stage output.

    ``error`` is a stable, short tag; ``details`` is ready-to-print text;
    ``file_path`` points at the file the user has to fix, when there is one.
    """

    error: str
    details: str | None = None
    original_error: Any = None
    file_path: str | None = None
    success: bool = field(default=False, init=False)


Result = Union[Ok[T], Err]


def try_catch(fn: Callable[[], T], error_message: str) -> Result[T]:
    """Run ``fn`` and convert a raised exception into an ``Err``."""
    try:
        return Ok(fn())
    except Exception as exc:
        return Err(error=error_message, details=str(exc), original_error=exc)


async def try_catch_async(fn: Callable[[], Awaitable[T]], error_message: str) -> Result[T]:
    """Async variant of :func:`try_catch`; awaits ``fn()`` before branching."""
    try:
        return Ok(await fn())
    except Exception as exc:
        return Err(error=error_message, details=str(exc), original_error=exc)


def chain(result: Result[T], fn: Callable[[T], Result[U]]) -> Result[U]:
    if not result.success:
        return result
    return fn(result.data)


def chain_pipe(initial: Any, *fns: Callable[[Any], Result[Any]]) -> Result[Any]:
    """Thread ``initial`` through ``fns`` left to right, stopping at the first ``Err``."""
    result: Result[Any] = Ok(initial)
    for fn in fns:
        result = chain(result, fn)
        if not result.success:
            break
    return result


def map_results(items: Iterable[T], fn: Callable[[T], Result[U]]) -> Result[list[U]]:
    """Apply ``fn`` to each item in order.

    Returns the first ``Err`` without touching the remaining items, or
    ``Ok`` with every output in input order.
    """
    collected: list[U] = []
    for item in items:
        result = fn(item)
        if not result.success:
            return result
        collected.append(result.data)
    return Ok(collected)


def tap(result: Result[T], side_effect: Callable[[T], Any]) -> Result[T]:
    """Run ``side_effect`` on success data; the result is returned untouched."""
    if result.success:
        side_effect(result.data)
    return result
