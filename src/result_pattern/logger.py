"""Structured logging with bound context.

Loggers are immutable: ``bind()`` returns a new logger with merged context.
Output goes through a renderer: human-readable console lines for development,
JSON lines for log aggregation.

Quick Start:
    >>> from result_pattern.logger import configure_logging, get_logger, log_result
    >>> from result_pattern import Fail
    >>> renderer = configure_logging(format="console", level="DEBUG")
    >>> log = get_logger("signup")
    >>> log.info("validating form", fields=2)

    Tap a Result into the log without changing it:
    >>> log_result(Fail("user.not-found"), log, event="lookup")
    Fail('user.not-found')
"""

from __future__ import annotations

import logging
import sys
import time
import traceback
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Protocol, TextIO, TypeVar, runtime_checkable

from .config import ResultSettings, get_settings
from .errors import set_panic_payload

if TYPE_CHECKING:
    from types import TracebackType

    from .result import Result

T = TypeVar("T")
E = TypeVar("E")

JsonDict = dict[str, Any]

# Context bound by log_context(), merged into every entry within the scope
_log_context: ContextVar[JsonDict] = ContextVar("result_pattern_log_context", default={})


@dataclass(slots=True)
class LogEntry:
    """A single rendered log event."""

    timestamp: float
    level: str
    event: str
    context: JsonDict

    @property
    def ts_iso(self) -> str:
        return datetime.fromtimestamp(self.timestamp, tz=UTC).isoformat()

    @property
    def ts_human(self) -> str:
        """HH:MM:SS.mmm"""
        return datetime.fromtimestamp(self.timestamp, tz=UTC).strftime("%H:%M:%S.%f")[:-3]


@dataclass(slots=True)
class BoundLogger:
    """Structured logger with bound context.

    ``level`` of None follows the globally configured level at log time, so
    module-level loggers pick up configure_logging() calls made later.

    Example:
        >>> log = BoundLogger(context={"component": "aggregate"})
        >>> log.debug("results combined", total=3, failures=1)
        # => 10:30:45.123 [debug] results combined component="aggregate" failures=1 total=3
    """

    context: JsonDict = field(default_factory=dict)
    renderer: LogRenderer | None = None
    level: int | None = None

    def bind(self, **kw: Any) -> BoundLogger:
        """New logger with additional bound context."""
        return BoundLogger(context={**self.context, **kw}, renderer=self.renderer, level=self.level)

    def unbind(self, *keys: str) -> BoundLogger:
        """New logger without the given keys."""
        return BoundLogger(context={k: v for k, v in self.context.items() if k not in keys},
                           renderer=self.renderer, level=self.level)

    def is_enabled_for(self, level: int) -> bool:
        return level >= (self.level if self.level is not None else _default_level.get())

    def _log(self, level: int, event: str, **kw: Any) -> None:
        if not self.is_enabled_for(level):
            return
        merged = {**_log_context.get(), **self.context, **kw}
        (self.renderer or _get_renderer()).render(LogEntry(time.time(), _level_name(level), event, merged))

    def debug(self, event: str, **kw: Any) -> None: self._log(logging.DEBUG, event, **kw)
    def info(self, event: str, **kw: Any) -> None: self._log(logging.INFO, event, **kw)
    def warning(self, event: str, **kw: Any) -> None: self._log(logging.WARNING, event, **kw)
    def error(self, event: str, **kw: Any) -> None: self._log(logging.ERROR, event, **kw)

    def exception(self, event: str, **kw: Any) -> None:
        """Log at error level with the current exception's traceback."""
        self._log(logging.ERROR, event, exc_info=traceback.format_exc(), **kw)


# ─────────────────────────────────────────────────────────────────────────────
# Renderers
# ─────────────────────────────────────────────────────────────────────────────


@runtime_checkable
class LogRenderer(Protocol):
    """Anything that can write a LogEntry somewhere."""

    def render(self, entry: LogEntry) -> None: ...


@dataclass(slots=True)
class ConsoleRenderer:
    """Human-readable output. Format: timestamp [level] event key=value ..."""

    output: TextIO = field(default_factory=lambda: sys.stderr)
    colors: bool | None = None  # None = auto-detect
    show_timestamp: bool = True

    def __post_init__(self) -> None:
        if self.colors is None:
            self.colors = getattr(self.output, "isatty", lambda: False)()

    def render(self, entry: LogEntry) -> None:
        c = _COLORS if self.colors else _NO_COLORS
        parts = [f"{c['dim']}{entry.ts_human}{c['reset']}"] if self.show_timestamp else []
        parts.append(f"{_LEVEL_COLORS.get(entry.level, c['dim']) if self.colors else ''}[{entry.level}]{c['reset']}")
        parts.append(f"{c['bold']}{entry.event}{c['reset']}")
        parts += [f"{c['cyan']}{k}{c['reset']}={_format_value(v, c)}"
                  for k, v in sorted(entry.context.items()) if k != "exc_info"]
        print(" ".join(parts), file=self.output)
        if "exc_info" in entry.context:
            print(f"{c['red']}{entry.context['exc_info']}{c['reset']}", file=self.output)


@dataclass(slots=True)
class JsonRenderer:
    """JSON Lines output. Payloads orjson cannot encode fall back to repr()."""

    output: TextIO = field(default_factory=lambda: sys.stdout)

    def render(self, entry: LogEntry) -> None:
        import orjson
        line = orjson.dumps({"timestamp": entry.ts_iso, "level": entry.level, "event": entry.event, **entry.context},
                            default=repr, option=orjson.OPT_NON_STR_KEYS)
        print(line.decode(), file=self.output)


@dataclass(slots=True)
class NoOpRenderer:
    """Discards everything."""

    def render(self, entry: LogEntry) -> None:
        pass


# ─────────────────────────────────────────────────────────────────────────────
# Global Configuration
# ─────────────────────────────────────────────────────────────────────────────


_renderer: ContextVar[LogRenderer | None] = ContextVar("result_pattern_log_renderer", default=None)
_default_level: ContextVar[int] = ContextVar("result_pattern_log_level", default=logging.WARNING)


def configure_logging(
    format: str = "console",  # noqa: A002
    level: str = "WARNING",
    *,
    output: TextIO | None = None,
    colors: bool | None = None,
) -> LogRenderer:
    """Configure global logging. Format: "console" (human), "json" (machine), "none"."""
    _default_level.set(getattr(logging, level.upper(), logging.WARNING))
    match format:
        case "console": renderer: LogRenderer = ConsoleRenderer(output=output or sys.stderr, colors=colors)
        case "json": renderer = JsonRenderer(output=output or sys.stdout)
        case "none": renderer = NoOpRenderer()
        case _: raise ValueError(f"Unknown format: {format}. Use 'console', 'json', or 'none'")
    _renderer.set(renderer)
    return renderer


def configure_from_settings(settings: ResultSettings | None = None, *, output: TextIO | None = None) -> LogRenderer:
    """Apply ResultSettings: logging section, panic_payload redaction, and debug (forces DEBUG level).

    This is the only place settings reach the rest of the package; Result
    extraction never reads the environment itself.
    """
    settings = settings or get_settings()
    cfg = settings.logging
    set_panic_payload(settings.panic_payload)
    return configure_logging(cfg.format, "DEBUG" if settings.debug else cfg.level, output=output, colors=cfg.colors)


def get_logger(name: str | None = None, **initial_context: Any) -> BoundLogger:
    """Logger with optional initial context. Name is added to context as 'logger'."""
    return BoundLogger(context={**initial_context, **({"logger": name} if name else {})})


def _get_renderer() -> LogRenderer:
    if (renderer := _renderer.get()) is None:
        _renderer.set(renderer := ConsoleRenderer())
    return renderer


class log_context:
    """Context manager adding key-value pairs to every entry logged within the scope."""

    __slots__ = ("_ctx", "_token")

    def __init__(self, **kw: Any) -> None:
        self._ctx: JsonDict = dict(kw)
        self._token: object | None = None

    def __enter__(self) -> log_context:
        self._token = _log_context.set({**_log_context.get(), **self._ctx})
        return self

    def __exit__(self, exc_type: type[BaseException] | None, exc_val: BaseException | None,
                 exc_tb: TracebackType | None) -> None:
        if self._token is not None:
            _log_context.reset(self._token)  # type: ignore[arg-type]
            self._token = None


# ─────────────────────────────────────────────────────────────────────────────
# Result Tap
# ─────────────────────────────────────────────────────────────────────────────


def log_result(result: Result[T, E], log: BoundLogger | None = None, *, event: str = "result") -> Result[T, E]:
    """Log the outcome of a Result and return it unchanged.

    Ok is logged at info with ``value``, Fail at warning with ``error``.
    """
    log = log or get_logger()
    if result.is_ok():
        log.info(event, ok=True, value=result.value_or_error())
    else:
        log.warning(event, ok=False, error=result.value_or_error())
    return result


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────


_COLORS = {"reset": "\033[0m", "bold": "\033[1m", "dim": "\033[2m", "red": "\033[31m",
           "green": "\033[32m", "yellow": "\033[33m", "blue": "\033[34m", "cyan": "\033[36m", "white": "\033[37m"}
_NO_COLORS = {k: "" for k in _COLORS}
_LEVEL_COLORS = {"debug": _COLORS["dim"], "info": _COLORS["green"], "warning": _COLORS["yellow"],
                 "error": _COLORS["red"], "critical": _COLORS["red"]}


def _level_name(level: int) -> str:
    return logging.getLevelName(level).lower()


def _format_value(v: object, c: dict[str, str]) -> str:
    match v:
        case str(): return f'{c["yellow"]}"{v}"{c["reset"]}'
        case bool(): return f'{c["blue"]}{str(v).lower()}{c["reset"]}'
        case int() | float(): return f'{c["blue"]}{v}{c["reset"]}'
        case _: return f'{c["white"]}{v!r}{c["reset"]}'
