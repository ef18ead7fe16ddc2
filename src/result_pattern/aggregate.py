"""Collection operations over sequences of Results.

``combine`` accumulates every failure. ``sequence`` and ``traverse`` stop at the
first one.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, TypeVar

from .logger import get_logger
from .result import Fail, Ok, Result

if TYPE_CHECKING:
    from collections.abc import Iterable

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")

_log = get_logger("result_pattern.aggregate")


def combine(*results: Result[T, E]) -> Result[list[T], list[E]]:
    """Fold Results into one, collecting ALL failures (not fail-fast).

    Ok with every value in input order if all succeed, otherwise Fail with
    every failure payload in input order. ``combine()`` is ``Ok([])``.

    Example:
        >>> combine(Ok(1), Ok(2), Ok(3))
        Ok([1, 2, 3])
        >>> combine(Ok(1), Fail("a"), Fail("b"), Ok(4))
        Fail(['a', 'b'])
        >>> combine(*[Ok(1), Fail("user.not-found")])
        Fail(['user.not-found'])
    """
    values, errors = partition(results)
    _log.debug("results combined", total=len(results), failures=len(errors))
    return Fail(errors) if errors else Ok(values)


def partition(results: Iterable[Result[T, E]]) -> tuple[list[T], list[E]]:
    """Split into (values, errors), preserving relative order in each."""
    values: list[T] = []
    errors: list[E] = []
    for r in results:
        (values if r.is_ok() else errors).append(r.value)  # type: ignore[arg-type]
    return values, errors


def sequence(results: Iterable[Result[T, E]]) -> Result[list[T], E]:
    """Iterable[Result[T,E]] → Result[list[T], E]. Fail-fast on first Fail."""
    values: list[T] = []
    for r in results:
        if r.is_fail():
            return Fail(r.value)  # type: ignore[arg-type]
        values.append(r.value)  # type: ignore[arg-type]
    return Ok(values)


def traverse(items: Iterable[T], f: Callable[[T], Result[U, E]]) -> Result[list[U], E]:
    """Map f over items and sequence the results. f is not called past the first Fail.

    Example:
        >>> traverse(["1", "2"], lambda s: Ok(int(s)))
        Ok([1, 2])
    """
    values: list[U] = []
    for item in items:
        r = f(item)
        if r.is_fail():
            return Fail(r.value)  # type: ignore[arg-type]
        values.append(r.value)  # type: ignore[arg-type]
    return Ok(values)
