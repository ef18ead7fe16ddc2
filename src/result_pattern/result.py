"""Result type: a two-variant sum type for success (Ok) or failure (Fail).

Implements the combinator algebra used for railway-oriented programming:
- Functor: map, map_fails, bimap
- Monad: flat_map (bind), and_then, flatten
- Logical combinators: and_, or_, and_with, or_with, or_else
- Extraction: unwrap, unwrap_or, unwrap_or_else, expect, value_or_error
- Pattern matching: match(ok=..., fail=...) and structural ``match`` statements

Every operation is pure. Instances are immutable and transformations build new
instances, except ``flat_map``/``and_`` which hand back the Result they were
given or produced.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Generic, NoReturn, TypeVar

from .errors import UnwrapOnFailError, UnwrapOnOkError

if TYPE_CHECKING:
    from collections.abc import Iterator

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Failure type
U = TypeVar("U")  # Mapped success type
F = TypeVar("F")  # Mapped failure type


class Result(Generic[T, E]):
    """Discriminated union representing success (Ok) or failure (Fail).

    ``Ok`` and ``Fail`` are the only two subclasses. Both hold exactly one
    payload, available as ``value`` (or ``value_or_error()``), and a tag that
    ``is_ok()``/``is_fail()`` report.

    Examples:
        >>> Ok(42).map(lambda x: x * 2).unwrap()
        84
        >>> Fail("boom").map(lambda x: x * 2)
        Fail('boom')
        >>> Ok(5).flat_map(lambda x: Ok(x * 2) if x > 0 else Fail("neg")).unwrap()
        10

        Structural pattern matching:
        >>> match Ok(3):
        ...     case Ok(v):
        ...         print(f"got {v}")
        ...     case Fail(e):
        ...         print(f"failed {e}")
        got 3
    """

    __slots__ = ("_value", "_is_ok")

    def __init__(self, value: T | E, is_ok: bool) -> None:
        """Private constructor. Use Ok() or Fail() instead."""
        object.__setattr__(self, "_value", value)
        object.__setattr__(self, "_is_ok", is_ok)

    def __setattr__(self, name: str, value: object) -> NoReturn:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> NoReturn:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self) -> tuple[type[Result[T, E]], tuple[T | E]]:
        return (Ok if self._is_ok else Fail, (self._value,))

    # ─── Tags ─────────────────────────────────────────────────────────

    def is_ok(self) -> bool:
        """True if this is the Ok variant."""
        return self._is_ok

    def is_fail(self) -> bool:
        """True if this is the Fail variant."""
        return not self._is_ok

    @property
    def value(self) -> T | E:
        """Raw payload of whichever variant this is."""
        return self._value

    # ─── Value Extraction ─────────────────────────────────────────────

    def unwrap(self) -> T:
        """Extract Ok value.

        Raises:
            UnwrapOnFailError: If Result is Fail
        """
        if self._is_ok:
            return self._value  # type: ignore[return-value]
        raise UnwrapOnFailError(self._value)

    def unwrap_fail(self) -> E:
        """Extract Fail payload.

        Raises:
            UnwrapOnOkError: If Result is Ok
        """
        if not self._is_ok:
            return self._value  # type: ignore[return-value]
        raise UnwrapOnOkError(self._value)

    def unwrap_or(self, default: T) -> T:
        """Extract Ok value or return default."""
        return self._value if self._is_ok else default  # type: ignore[return-value]

    def unwrap_or_else(self, f: Callable[[E], T]) -> T:
        """Extract Ok value or compute one from the failure via f."""
        return self._value if self._is_ok else f(self._value)  # type: ignore[return-value,arg-type]

    def expect(self, msg: str) -> T:
        """Extract Ok value; on Fail raise UnwrapOnFailError carrying msg."""
        if self._is_ok:
            return self._value  # type: ignore[return-value]
        raise UnwrapOnFailError.with_message(msg, self._value)

    def expect_fail(self, msg: str) -> E:
        """Extract Fail payload; on Ok raise UnwrapOnOkError carrying msg."""
        if not self._is_ok:
            return self._value  # type: ignore[return-value]
        raise UnwrapOnOkError.with_message(msg, self._value)

    def value_or_error(self) -> T | E:
        """Whichever payload is present, with the channel erased. Meant for display and logging."""
        return self._value

    # ─── Functor Operations ───────────────────────────────────────────

    def map(self, f: Callable[[T], U]) -> Result[U, E]:
        """Apply f to Ok value. Signature: Result[T,E] → (T→U) → Result[U,E]

        f must not fail; use flat_map for steps that can.
        """
        return Ok(f(self._value)) if self._is_ok else Fail(self._value)  # type: ignore[arg-type]

    def map_fails(self, f: Callable[[E], F]) -> Result[T, F]:
        """Apply f to Fail payload. Signature: Result[T,E] → (E→F) → Result[T,F]"""
        return Fail(f(self._value)) if not self._is_ok else Ok(self._value)  # type: ignore[arg-type]

    def bimap(self, ok_fn: Callable[[T], U], fail_fn: Callable[[E], F]) -> Result[U, F]:
        """Apply ok_fn if Ok, fail_fn if Fail."""
        return Ok(ok_fn(self._value)) if self._is_ok else Fail(fail_fn(self._value))  # type: ignore[arg-type]

    def flip(self) -> Result[E, T]:
        """Swap the variant and keep the payload: Ok(v) → Fail(v), Fail(e) → Ok(e).

        flip() is its own inverse.
        """
        return Fail(self._value) if self._is_ok else Ok(self._value)  # type: ignore[arg-type]

    # ─── Monad Operations ─────────────────────────────────────────────

    def flat_map(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Monadic bind (>>=). Chain a step that can itself fail.

        On Ok the Result returned by f is handed back as-is (no double wrapping).
        On Fail, f is never called.

        Example:
            >>> def parse_int(s: str) -> Result[int, str]:
            ...     return Ok(int(s)) if s.lstrip("-").isdigit() else Fail(f"invalid int: {s}")
            >>> Ok("42").flat_map(parse_int).flat_map(lambda n: Ok(n) if n > 0 else Fail("neg"))
            Ok(42)
        """
        return f(self._value) if self._is_ok else Fail(self._value)  # type: ignore[arg-type]

    def and_then(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Alias for flat_map, reads better when the next step ignores the value."""
        return f(self._value) if self._is_ok else Fail(self._value)  # type: ignore[arg-type]

    def flatten(self: Result[Result[U, E], E]) -> Result[U, E]:
        """Flatten a nested Result. Result[Result[U,E],E] → Result[U,E]

        Same as ``flat_map(lambda inner: inner)``.
        """
        return self._value if self._is_ok else Fail(self._value)  # type: ignore[return-value,arg-type]

    def or_else(self, f: Callable[[E], Result[T, F]]) -> Result[T, F]:
        """On Fail, recover via f(error). On Ok, pass through and f is never called."""
        return f(self._value) if not self._is_ok else Ok(self._value)  # type: ignore[arg-type]

    # ─── Logical Combinators ──────────────────────────────────────────

    def and_(self, other: Result[U, E]) -> Result[U, E]:
        """Return other if Ok, else this failure. Short-circuit AND.

        other is evaluated eagerly by the caller; use and_with to defer it.
        """
        return other if self._is_ok else Fail(self._value)  # type: ignore[arg-type]

    def or_(self, other: Result[T, F]) -> Result[T, F]:
        """Return this value if Ok, else other. Short-circuit OR.

        other is evaluated eagerly by the caller; use or_with to defer it.
        """
        return Ok(self._value) if self._is_ok else other  # type: ignore[arg-type]

    def and_with(self, f: Callable[[], Result[U, E]]) -> Result[U, E]:
        """Lazy and_: call f() only if Ok."""
        return f() if self._is_ok else Fail(self._value)  # type: ignore[arg-type]

    def or_with(self, f: Callable[[], Result[T, F]]) -> Result[T, F]:
        """Lazy or_: call f() only if Fail."""
        return Ok(self._value) if self._is_ok else f()  # type: ignore[arg-type]

    # ─── Inspection ───────────────────────────────────────────────────

    def ok(self) -> T | None:
        """Ok value, or None if Fail."""
        return self._value if self._is_ok else None  # type: ignore[return-value]

    def fail(self) -> E | None:
        """Fail payload, or None if Ok."""
        return self._value if not self._is_ok else None  # type: ignore[return-value]

    def inspect(self, f: Callable[[T], object]) -> Result[T, E]:
        """Call f with Ok value for side effects, return self."""
        if self._is_ok:
            f(self._value)  # type: ignore[arg-type]
        return self

    def inspect_fail(self, f: Callable[[E], object]) -> Result[T, E]:
        """Call f with Fail payload for side effects, return self."""
        if not self._is_ok:
            f(self._value)  # type: ignore[arg-type]
        return self

    def to_tuple(self) -> tuple[T | None, E | None]:
        """Convert to (value, None) or (None, error)."""
        return (self._value, None) if self._is_ok else (None, self._value)  # type: ignore[return-value]

    # ─── Pattern Matching ─────────────────────────────────────────────

    def match(self, *, ok: Callable[[T], U], fail: Callable[[E], U]) -> U:
        """Exhaustive case analysis. Exactly one handler runs and its result is returned.

        Example:
            >>> Ok(42).match(ok=lambda x: f"success: {x}", fail=lambda e: f"failed: {e}")
            'success: 42'
        """
        return ok(self._value) if self._is_ok else fail(self._value)  # type: ignore[arg-type]

    # ─── Dunder Methods ───────────────────────────────────────────────

    __bool__ = lambda self: self._is_ok  # noqa: E731
    __hash__ = lambda self: hash((self._is_ok, self._value))  # noqa: E731
    __repr__ = lambda self: f"{'Ok' if self._is_ok else 'Fail'}({self._value!r})"  # noqa: E731
    __str__ = __repr__

    def __eq__(self, other: object) -> bool:
        return self._is_ok == other._is_ok and self._value == other._value if isinstance(other, Result) else NotImplemented

    def __iter__(self) -> Iterator[T]:
        """Yields the value once if Ok, nothing if Fail."""
        if self._is_ok:
            yield self._value  # type: ignore[misc]


class Ok(Result[T, E]):
    """Success variant. ``Ok(value)``"""

    __slots__ = ()
    __match_args__ = ("value",)

    def __init__(self, value: T) -> None:
        super().__init__(value, True)


class Fail(Result[T, E]):
    """Failure variant. ``Fail(error)``"""

    __slots__ = ()
    __match_args__ = ("value",)

    def __init__(self, error: E) -> None:
        super().__init__(error, False)
