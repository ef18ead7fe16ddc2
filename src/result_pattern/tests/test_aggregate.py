"""Tests for collection operations: combine, partition, sequence, traverse."""

from __future__ import annotations

from io import StringIO

from result_pattern import Fail, Ok, Result, combine, partition, sequence, traverse


def parse_int(s: str) -> Result[int, str]:
    try:
        return Ok(int(s))
    except ValueError:
        return Fail(f"invalid: {s}")


# ═════════════════════════════════════════════════════════════════════════════
# combine
# ═════════════════════════════════════════════════════════════════════════════


def test_combine_all_ok() -> None:
    assert combine(Ok(1), Ok(2), Ok(3)) == Ok([1, 2, 3])


def test_combine_mixed_collects_every_failure_in_order() -> None:
    assert combine(Ok(1), Fail("a"), Fail("b"), Ok(4)) == Fail(["a", "b"])


def test_combine_empty() -> None:
    assert combine() == Ok([])


def test_combine_single_failure() -> None:
    results = [Ok(10), Fail("user.not-found")]
    assert combine(*results) == Fail(["user.not-found"])


def test_combine_keeps_heterogeneous_values_positionally() -> None:
    combined = combine(Ok("johndoe@example.com"), Ok(("Password@123",)))
    email, password = combined.unwrap()
    assert email == "johndoe@example.com"
    assert password == ("Password@123",)


def test_combine_accepts_nested_results_as_values() -> None:
    assert combine(Ok(Fail("inner")), Ok(Ok(1))) == Ok([Fail("inner"), Ok(1)])


def test_combine_logs_debug_event(log_output: StringIO) -> None:
    combine(Ok(1), Fail("a"), Fail("b"))

    line = log_output.getvalue()
    assert "[debug] results combined" in line
    assert "failures=2" in line
    assert "total=3" in line


def test_combine_silent_above_debug() -> None:
    from result_pattern.logger import configure_logging

    buf = StringIO()
    configure_logging("console", "INFO", output=buf, colors=False)
    try:
        combine(Ok(1))
    finally:
        configure_logging("none")
    assert buf.getvalue() == ""


# ═════════════════════════════════════════════════════════════════════════════
# partition
# ═════════════════════════════════════════════════════════════════════════════


def test_partition_preserves_order() -> None:
    values, errors = partition([Fail("x"), Ok(1), Fail("y"), Ok(2)])
    assert values == [1, 2]
    assert errors == ["x", "y"]


def test_partition_accepts_generators() -> None:
    values, errors = partition(parse_int(s) for s in ["1", "a", "3"])
    assert values == [1, 3]
    assert errors == ["invalid: a"]


# ═════════════════════════════════════════════════════════════════════════════
# sequence / traverse
# ═════════════════════════════════════════════════════════════════════════════


def test_sequence_all_ok() -> None:
    assert sequence([Ok(1), Ok(2), Ok(3)]) == Ok([1, 2, 3])


def test_sequence_returns_first_failure() -> None:
    assert sequence([Ok(1), Fail("first"), Fail("second")]) == Fail("first")


def test_sequence_empty() -> None:
    results: list[Result[int, str]] = []
    assert sequence(results) == Ok([])


def test_traverse_all_ok() -> None:
    assert traverse(["1", "2", "3"], parse_int) == Ok([1, 2, 3])


def test_traverse_stops_at_first_failure() -> None:
    seen: list[str] = []

    def tracked(s: str) -> Result[int, str]:
        seen.append(s)
        return parse_int(s)

    assert traverse(["1", "bad", "3"], tracked) == Fail("invalid: bad")
    assert seen == ["1", "bad"]
