"""Result pattern: success/failure values instead of exception-based control flow.

Provides:
- Result/Ok/Fail: a two-variant sum type with map, flat_map, map_fails, flip,
  and_/or_, and_then/or_else, unwrap*, expect and match
- combine: fold many Results into one, collecting every failure
- sequence/traverse/partition: fail-fast and non-failing collection helpers
- ErrorTrace/ErrorContext and try_fn: structured failure payloads and an
  exception boundary

Example:
    >>> from result_pattern import Fail, Ok, Result, combine
    >>>
    >>> def divide(a: int, b: int) -> Result[float, str]:
    ...     if b == 0:
    ...         return Fail("division by zero")
    ...     return Ok(a / b)
    >>>
    >>> result = (
    ...     divide(10, 2)
    ...     .map(lambda x: x * 2)
    ...     .flat_map(lambda x: Ok(x + 1))
    ... )
    >>> assert result.unwrap() == 11.0
    >>> combine(divide(1, 0), divide(2, 0))
    Fail(['division by zero', 'division by zero'])
"""

from __future__ import annotations

__version__ = "0.1.0"

from .aggregate import combine, partition, sequence, traverse
from .config import ResultSettings, clear_settings_cache, get_settings
from .errors import UnwrapError, UnwrapOnFailError, UnwrapOnOkError
from .logger import configure_from_settings, configure_logging, get_logger, log_result
from .result import Fail, Ok, Result
from .types import ErrorContext, ErrorTrace, context, trace, trace_from_exc, try_fn

__all__ = [
    # Core types
    "Result", "Ok", "Fail",
    # Aggregation
    "combine", "partition", "sequence", "traverse",
    # Programmer errors
    "UnwrapError", "UnwrapOnFailError", "UnwrapOnOkError",
    # Structured failures
    "ErrorContext", "ErrorTrace", "context", "trace", "trace_from_exc", "try_fn",
    # Logging
    "configure_logging", "configure_from_settings", "get_logger", "log_result",
    # Settings
    "ResultSettings", "get_settings", "clear_settings_cache",
]
