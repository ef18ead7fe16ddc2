"""Programmer-error exceptions raised by Result extraction.

Domain failures are values (the ``Fail`` payload) and never raise. The only
raising paths are the extraction methods called on the wrong variant:
``unwrap``/``expect`` on a ``Fail`` and ``unwrap_fail``/``expect_fail`` on an
``Ok``.
"""

from __future__ import annotations

from typing import Self

_REDACTED = "<redacted>"

# Set from ResultSettings.panic_payload by logger.configure_from_settings()
_panic_payload = True


def set_panic_payload(enabled: bool) -> None:
    """Include (True) or redact (False) the payload repr in extraction error messages."""
    global _panic_payload
    _panic_payload = enabled


def _describe(payload: object) -> str:
    return repr(payload) if _panic_payload else _REDACTED


class UnwrapError(RuntimeError):
    """Extraction called on the variant that does not hold the requested payload."""

    __slots__ = ("payload",)

    method: str = ""
    variant: str = ""

    def __init__(self, payload: object, message: str | None = None) -> None:
        self.payload = payload
        super().__init__(message if message is not None else f"{self.method}() on {self.variant}: {_describe(payload)}")

    @classmethod
    def with_message(cls, msg: str, payload: object) -> Self:
        """Build from a caller-supplied diagnostic (expect/expect_fail)."""
        return cls(payload, f"{msg}: {_describe(payload)}")


class UnwrapOnFailError(UnwrapError):
    """unwrap()/expect() called on a Fail."""

    method = "unwrap"
    variant = "Fail"


class UnwrapOnOkError(UnwrapError):
    """unwrap_fail()/expect_fail() called on an Ok."""

    method = "unwrap_fail"
    variant = "Ok"
