"""Examples of Result-based error handling.

Demonstrates:
- Validators that return Results instead of raising
- Railway-oriented pipelines with map / flat_map
- Collecting every validation failure with combine
- Fallback chains with or_else / or_with
- Error context stacking with ErrorTrace
"""

from __future__ import annotations

import re
from typing import Self

from pydantic import BaseModel, ConfigDict

from .aggregate import combine
from .result import Fail, Ok, Result
from .types import ErrorTrace, trace

# ═════════════════════════════════════════════════════════════════════════════
# Example 1: Validators
# ═════════════════════════════════════════════════════════════════════════════


class PersonName(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str

    @classmethod
    def from_str(cls, name: str) -> Result[Self, str]:
        return Ok(cls(name=name.strip())) if name and name.strip() else Fail("person.name-invalid")


_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class Email(BaseModel):
    model_config = ConfigDict(frozen=True)

    address: str

    @classmethod
    def from_str(cls, address: str) -> Result[Self, str]:
        return Ok(cls(address=address.lower())) if _EMAIL_RE.match(address) else Fail("email.invalid")

    def __str__(self) -> str:
        return self.address


_PASSWORD_RULES: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("password.too-short", re.compile(r".{8,}")),
    ("password.missing-uppercase", re.compile(r"[A-Z]")),
    ("password.missing-lowercase", re.compile(r"[a-z]")),
    ("password.missing-digit", re.compile(r"\d")),
    ("password.missing-symbol", re.compile(r"[^A-Za-z0-9]")),
)


class StrongPassword(BaseModel):
    """Password passing every rule. Fails with the codes of ALL broken rules."""

    model_config = ConfigDict(frozen=True)

    secret: str

    @classmethod
    def from_str(cls, secret: str) -> Result[Self, list[str]]:
        checks = [Ok(code) if rule.search(secret) else Fail(code) for code, rule in _PASSWORD_RULES]
        return combine(*checks).map(lambda _: cls(secret=secret))

    def __str__(self) -> str:
        return "*" * len(self.secret)


# ═════════════════════════════════════════════════════════════════════════════
# Example 2: Collecting every failure
# ═════════════════════════════════════════════════════════════════════════════


class SignupForm(BaseModel):
    model_config = ConfigDict(frozen=True)

    email: Email
    password: StrongPassword


def validate_form(email: str, password: str) -> Result[SignupForm, list[str]]:
    """Validate both fields and report every problem at once."""
    return (
        combine(
            Email.from_str(email).map_fails(lambda code: [code]),
            StrongPassword.from_str(password),
        )
        .map_fails(lambda groups: [code for group in groups for code in group])
        .map(lambda fields: SignupForm(email=fields[0], password=fields[1]))
    )


# ═════════════════════════════════════════════════════════════════════════════
# Example 3: Railway pipelines
# ═════════════════════════════════════════════════════════════════════════════


def parse_int(s: str) -> Result[int, str]:
    try:
        return Ok(int(s))
    except ValueError:
        return Fail(f"Invalid integer: {s}")


def validate_positive(n: int) -> Result[int, str]:
    return Ok(n) if n > 0 else Fail(f"Must be positive, got {n}")


def double_positive(s: str) -> Result[int, str]:
    """Parse, validate, transform. Later steps are skipped after a failure."""
    return parse_int(s).flat_map(validate_positive).map(lambda n: n * 2)


def sanitize_username(username: str) -> Result[str, str]:
    return (
        (Ok(username.strip()) if username else Fail("Username is empty"))
        .map(str.lower)
        .flat_map(lambda name: Ok(name) if len(name) > 2 else Fail("Too short"))
    )


def describe(result: Result[object, object]) -> str:
    return result.match(ok=lambda v: f"success: {v}", fail=lambda e: f"failed: {e}")


# ═════════════════════════════════════════════════════════════════════════════
# Example 4: Fallback chains
# ═════════════════════════════════════════════════════════════════════════════


def fetch_config(sources: dict[str, str | None]) -> Result[str, str]:
    """First available of primary, backup, cache. Later sources are only read when needed."""

    def read(name: str) -> Result[str, str]:
        value = sources.get(name)
        return Ok(value) if value is not None else Fail(f"{name} unavailable")

    return (
        read("primary")
        .or_else(lambda _: read("backup"))
        .or_with(lambda: read("cache"))
    )


# ═════════════════════════════════════════════════════════════════════════════
# Example 5: Error context stacking
# ═════════════════════════════════════════════════════════════════════════════

_USERS = {1: {"id": 1, "name": "Alice", "age": 30}}


def fetch_user(user_id: int) -> Result[dict[str, object], ErrorTrace]:
    if user_id < 1:
        return Fail(trace("Invalid user ID", code="INVALID_PARAMS", recoverable=False))
    if (user := _USERS.get(user_id)) is None:
        return Fail(trace(f"User {user_id} not found", code="NOT_FOUND", recoverable=False))
    return Ok(user)


def get_user_name(user_id: int) -> Result[str, ErrorTrace]:
    return (
        fetch_user(user_id)
        .map_fails(lambda err: err.with_operation("fetch_user", location="user.service"))
        .map(lambda user: str(user["name"]))
        .map_fails(lambda err: err.with_operation("get_user_name", location="user.api"))
    )
