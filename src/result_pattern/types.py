"""Structured failure payloads and the exception boundary helper.

The core treats Fail payloads as opaque. ``ErrorTrace`` is an optional payload
type for callers that want provenance: a message plus a stack of
``ErrorContext`` entries appended as the failure travels outwards through
``map_fails``.

Example:
    >>> def load(path: str) -> Result[str, ErrorTrace]:
    ...     return try_fn(open(path).read, operation="load")  # doctest: +SKIP
    >>> trace("user not found", code="NOT_FOUND").with_operation("fetch_user", location="user.service").format()
    'user not found [NOT_FOUND]\\nContext trace:\\n  - fetch_user at user.service\\n(This error may be recoverable)'
"""

from __future__ import annotations

import traceback
from typing import Annotated, Any, Callable, TypeVar

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, computed_field

from .result import Fail, Ok, Result

T = TypeVar("T")

JsonDict = dict[str, Any]

_EMPTY_CONTEXTS: tuple[ErrorContext, ...] = ()


class ErrorContext(BaseModel):
    """One step of a failure's provenance: operation, location, metadata."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True, extra="forbid")

    operation: Annotated[str, Field(min_length=1)]
    location: str = Field(default="", repr=False)
    metadata: JsonDict = Field(default_factory=dict, repr=False)

    def __str__(self) -> str:
        loc = f" at {self.location}" if self.location else ""
        meta = f" ({', '.join(f'{k}={v}' for k, v in self.metadata.items())})" if self.metadata else ""
        return f"{self.operation}{loc}{meta}"

    def __hash__(self) -> int:
        return hash((self.operation, self.location, tuple(sorted((k, repr(v)) for k, v in self.metadata.items()))))


class ErrorTrace(BaseModel):
    """A failure message with the chain of contexts it passed through. Immutable."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True, extra="forbid")

    message: Annotated[str, Field(min_length=1)]
    contexts: tuple[ErrorContext, ...] = _EMPTY_CONTEXTS
    error_code: str | None = None
    recoverable: bool = True
    details: str | None = Field(default=None, repr=False)

    @computed_field
    @property
    def root_operation(self) -> str | None:
        """First operation in the trace (origin)."""
        return self.contexts[0].operation if self.contexts else None

    def __hash__(self) -> int:
        return hash((self.message, self.contexts, self.error_code, self.recoverable))

    def with_context(self, ctx: ErrorContext) -> ErrorTrace:
        """New trace with ctx appended."""
        return self.model_copy(update={"contexts": (*self.contexts, ctx)})

    def with_operation(self, operation: str, location: str = "", **metadata: Any) -> ErrorTrace:
        """New trace with an operation context appended."""
        return self.with_context(ErrorContext(operation=operation, location=location, metadata=metadata))

    def with_code(self, code: str) -> ErrorTrace:
        return self.model_copy(update={"error_code": code})

    def as_unrecoverable(self) -> ErrorTrace:
        return self.model_copy(update={"recoverable": False})

    def format(self, *, include_details: bool = False) -> str:
        """Human-readable rendering, outermost context last."""
        parts = [self.message]
        if self.error_code:
            parts.append(f" [{self.error_code}]")
        if self.contexts:
            parts.append("\nContext trace:\n" + "\n".join(f"  - {ctx}" for ctx in self.contexts))
        if self.recoverable:
            parts.append("\n(This error may be recoverable)")
        if include_details and self.details:
            parts.append(f"\nDetails:\n{self.details}")
        return "".join(parts)

    def __str__(self) -> str:
        return self.format()


_ErrorTraceAdapter: TypeAdapter[ErrorTrace] = TypeAdapter(ErrorTrace)


# ═══════════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════════


def context(operation: str, location: str = "", **metadata: Any) -> ErrorContext:
    """Create ErrorContext concisely."""
    return ErrorContext(operation=operation, location=location, metadata=metadata)


def trace(message: str, *, code: str | None = None, recoverable: bool = True, details: str | None = None) -> ErrorTrace:
    """Create ErrorTrace concisely."""
    return ErrorTrace(message=message, error_code=code, recoverable=recoverable, details=details)


def trace_from_exc(exc: BaseException, *, operation: str = "", code: str | None = None) -> ErrorTrace:
    """ErrorTrace from an exception. The formatted traceback goes into details."""
    t = ErrorTrace(
        message=str(exc).strip() or type(exc).__name__,
        error_code=code,
        details="".join(traceback.format_exception(exc)),
    )
    return t.with_operation(operation) if operation.strip() else t


def validate_trace(data: JsonDict) -> ErrorTrace:
    """Validate a dict (e.g. a decoded JSON log field) as an ErrorTrace."""
    return _ErrorTraceAdapter.validate_python(data)


def try_fn(
    f: Callable[..., T],
    *args: Any,
    operation: str = "",
    code: str | None = None,
    catch: tuple[type[BaseException], ...] = (Exception,),
    **kwargs: Any,
) -> Result[T, ErrorTrace]:
    """Call f at an exception boundary: Ok(return value) or Fail(ErrorTrace).

    Only exceptions listed in ``catch`` are converted; anything else propagates.

    Example:
        >>> try_fn(int, "42")
        Ok(42)
        >>> try_fn(int, "x", operation="parse").unwrap_fail().root_operation
        'parse'
    """
    try:
        return Ok(f(*args, **kwargs))
    except catch as exc:
        return Fail(trace_from_exc(exc, operation=operation, code=code))
