"""Tests for the Result algebra.

Validates:
- Functor laws
- Monad laws
- Applicative tie-break rules
- Error pass-through and recovery
- Extraction, including the fatal unwrap_or_raise
"""

from __future__ import annotations

import io
from typing import Callable

import pytest

from lonely import Err, Nothing, Ok, Result, Some, UnwrapError
from lonely.foundation.errors import ErrorCode
from lonely.result import Tag
from lonely.runtime.observability import configure_logging


# ═════════════════════════════════════════════════════════════════════════════
# Property Tests - Functor Laws
# ═════════════════════════════════════════════════════════════════════════════


def test_functor_identity() -> None:
    """Functor law: fmap id = id"""
    result: Result[int, str] = Ok(42)
    assert result.map(lambda x: x) == result

    err_result: Result[int, str] = Err("fail")
    assert err_result.map(lambda x: x) == err_result


def test_functor_composition() -> None:
    """Functor law: fmap (f . g) = fmap f . fmap g"""
    f: Callable[[int], int] = lambda x: x + x
    g: Callable[[int], int] = lambda x: x - x

    for result in (Ok(1), Err("boom")):
        assert result.map(f).map(g) == result.map(lambda x: g(f(x)))

    assert Ok(1).map(f).map(g) == Ok(0)


# ═════════════════════════════════════════════════════════════════════════════
# Property Tests - Monad Laws
# ═════════════════════════════════════════════════════════════════════════════


def test_monad_left_identity() -> None:
    """Monad law: return a >>= f = f a"""
    a = 42
    f: Callable[[int], Result[int, str]] = lambda x: Ok(x * 2)

    assert Ok(a).flat_map(f) == f(a)


def test_monad_left_identity_with_failing_step() -> None:
    """Bind returns f's Err directly, never double-wrapped."""
    f: Callable[[int], Result[int, str]] = lambda _: Err("nope")

    assert Ok(1).flat_map(f) == Err("nope")


def test_monad_right_identity() -> None:
    """Monad law: m >>= return = m"""
    for m in (Ok(42), Err("fail")):
        assert m.flat_map(Ok) == m


def test_monad_associativity() -> None:
    """Monad law: (m >>= f) >>= g = m >>= (\\x -> f x >>= g)"""
    f: Callable[[int], Result[int, str]] = lambda x: Ok(x + 1)
    g: Callable[[int], Result[int, str]] = lambda x: Ok(x * 2) if x < 10 else Err("too big")

    for m in (Ok(5), Ok(9), Err("fail")):
        assert m.flat_map(f).flat_map(g) == m.flat_map(lambda x: f(x).flat_map(g))


def test_flat_map_on_err_is_skipped() -> None:
    """Test flat_map short-circuits on Err without calling f."""
    called = []
    result = Err("boom").flat_map(lambda x: called.append(x) or Ok(x))

    assert result == Err("boom")
    assert called == []


# ═════════════════════════════════════════════════════════════════════════════
# Applicative
# ═════════════════════════════════════════════════════════════════════════════


def test_apply_ok_function_to_ok_value() -> None:
    assert Ok(1).apply(Ok(lambda x: x + x)) == Ok(2)


def test_apply_err_value_with_ok_function() -> None:
    """Value's error wins when the function holder is Ok."""
    assert Err("boom").apply(Ok(lambda x: x + x)) == Err("boom")


def test_apply_err_function_holder_wins() -> None:
    """Function holder's error wins, even when both are Err."""
    assert Ok(1).apply(Err("no fn")) == Err("no fn")
    assert Err("no value").apply(Err("no fn")) == Err("no fn")


# ═════════════════════════════════════════════════════════════════════════════
# Error Branch
# ═════════════════════════════════════════════════════════════════════════════


def test_map_error_on_err() -> None:
    assert Err("boom").map_error(lambda e: e.upper()) == Err("BOOM")


def test_map_error_on_ok() -> None:
    """Test map_error on Ok variant (should not apply function)."""
    assert Ok(1).map_error(str) == Ok(1)


def test_flat_map_error_recovers() -> None:
    result = Err("invalid_format").flat_map_error(
        lambda e: Ok((0, 0, 0)) if e == "invalid_format" else Err((e, "10:11:61"))
    )
    assert result == Ok((0, 0, 0))


def test_flat_map_error_retags() -> None:
    result = Err("invalid_time").flat_map_error(
        lambda e: Ok((0, 0, 0)) if e == "invalid_format" else Err((e, "10:11:61"))
    )
    assert result == Err(("invalid_time", "10:11:61"))


def test_flat_map_error_on_ok() -> None:
    assert Ok(1).flat_map_error(lambda _: Ok(-1)) == Ok(1)


def test_or_else_alias() -> None:
    assert Err("x").or_else(lambda _: Ok(42)) == Err("x").flat_map_error(lambda _: Ok(42))


def test_bimap() -> None:
    """Test bimap on both variants."""
    assert Ok(5).bimap(ok_fn=lambda x: x * 2, err_fn=lambda e: f"Error: {e}") == Ok(10)
    assert Err("fail").bimap(ok_fn=lambda x: x * 2, err_fn=lambda e: f"Error: {e}") == Err("Error: fail")


# ═════════════════════════════════════════════════════════════════════════════
# filter_map
# ═════════════════════════════════════════════════════════════════════════════


def is_even(n: int) -> bool:
    return n % 2 == 0


def test_filter_map_predicate_holds() -> None:
    assert Ok(4).filter_map(is_even, lambda x: Ok(x // 2)) == Ok(2)


def test_filter_map_predicate_fails_keeps_ok() -> None:
    """A failing predicate is not promoted to an error."""
    assert Ok(3).filter_map(is_even, lambda x: Err("should not run")) == Ok(3)


def test_filter_map_step_may_fail() -> None:
    assert Ok(4).filter_map(is_even, lambda _: Err("odd half")) == Err("odd half")


def test_filter_map_plain_return_is_wrapped() -> None:
    assert Ok(4).filter_map(is_even, lambda x: x * 10) == Ok(40)


@pytest.mark.parametrize("error", ["boom", None, 0, ValueError("x")])
def test_filter_map_leaves_err_untouched(error: object) -> None:
    calls: list[object] = []

    def pred(x: object) -> bool:
        calls.append(x)
        return True

    result = Err(error).filter_map(pred, lambda x: Ok(x))
    assert result == Err(error)
    assert calls == []


# ═════════════════════════════════════════════════════════════════════════════
# Inspection & Extraction
# ═════════════════════════════════════════════════════════════════════════════


def test_is_ok_and_is_error_are_complements() -> None:
    for result in (Ok(1), Err(1), Ok(None), Err(None)):
        assert result.is_ok() is not result.is_error()

    assert Ok(1).is_ok()
    assert Err(1).is_error()


def test_unwrap_returns_either_payload() -> None:
    assert Ok(1).unwrap() == 1
    assert Err("boom").unwrap() == "boom"


def test_unwrap_or_raise_on_ok() -> None:
    assert Ok(1).unwrap_or_raise() == 1


def test_unwrap_or_raise_on_err_carries_payload() -> None:
    with pytest.raises(UnwrapError, match="^boom$") as exc_info:
        Err("boom").unwrap_or_raise()

    assert exc_info.value.error == "boom"
    assert exc_info.value.fault.code is ErrorCode.UNWRAP_ON_ERR
    assert isinstance(exc_info.value, RuntimeError)


def test_unwrap_or_raise_reraises_exception_payload() -> None:
    err = KeyError("missing")

    with pytest.raises(KeyError) as exc_info:
        Err(err).unwrap_or_raise()

    assert exc_info.value is err


def test_unwrap_or_raise_wraps_exception_when_native_disabled(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LONELY_RAISE_NATIVE_ERRORS", "false")
    err = KeyError("missing")

    with pytest.raises(UnwrapError) as exc_info:
        Err(err).unwrap_or_raise()

    assert exc_info.value.error is err


class _Unprintable:
    def __repr__(self) -> str:
        raise RuntimeError("no repr")

    def __str__(self) -> str:
        raise RuntimeError("no str")


@pytest.mark.parametrize("level", ["WARNING", "DEBUG"])
def test_unwrap_or_raise_survives_unprintable_payload(level: str) -> None:
    """Extraction raises UnwrapError whether or not the debug event is rendered."""
    configure_logging(format="console", level=level, output=io.StringIO(), colors=False)
    payload = _Unprintable()

    with pytest.raises(UnwrapError) as exc_info:
        Err(payload).unwrap_or_raise()
    assert exc_info.value.error is payload

    with pytest.raises(UnwrapError) as exc_info:
        Err(payload).expect("needed a value")
    assert exc_info.value.error is payload
    assert str(exc_info.value).startswith("needed a value: ")


def test_expect() -> None:
    assert Ok(1).expect("needed a value") == 1

    with pytest.raises(UnwrapError, match="needed a value: boom") as exc_info:
        Err("boom").expect("needed a value")
    assert exc_info.value.fault.code is ErrorCode.EXPECT_FAILED


def test_unwrap_or() -> None:
    assert Ok(5).unwrap_or(10) == 5
    assert Err("fail").unwrap_or(10) == 10


def test_unwrap_or_else() -> None:
    assert Ok(5).unwrap_or_else(len) == 5
    assert Err("fail").unwrap_or_else(len) == 4


def test_match() -> None:
    """Test pattern matching on both variants."""
    fmt = {"ok": lambda x: f"success: {x}", "err": lambda e: f"failed: {e}"}

    assert Ok(42).match(**fmt) == "success: 42"
    assert Err("fail").match(**fmt) == "failed: fail"


def test_inspect_runs_only_on_matching_branch() -> None:
    seen: list[object] = []

    ok = Ok(42)
    assert ok.inspect(seen.append) is ok
    assert ok.inspect_error(seen.append) is ok

    err = Err("fail")
    assert err.inspect(seen.append) is err
    assert err.inspect_error(seen.append) is err

    assert seen == [42, "fail"]


def test_projection_into_option() -> None:
    assert Ok(1).ok() == Some(1)
    assert Ok(1).error() is Nothing
    assert Err("boom").ok() is Nothing
    assert Err("boom").error() == Some("boom")


def test_to_tuple() -> None:
    assert Ok(42).to_tuple() == (Tag.OK, 42)
    assert Err("fail").to_tuple() == (Tag.ERROR, "fail")


def test_flatten() -> None:
    """Test flattening nested Result."""
    assert Ok(Ok(42)).flatten() == Ok(42)
    assert Ok(Err("fail")).flatten() == Err("fail")
    assert Err("outer").flatten() == Err("outer")


# ═════════════════════════════════════════════════════════════════════════════
# Value Semantics
# ═════════════════════════════════════════════════════════════════════════════


def test_equality_and_hash() -> None:
    """Test structural equality."""
    assert Ok(42) == Ok(42)
    assert Err("fail") == Err("fail")
    assert Ok(42) != Ok(43)
    assert Ok(42) != Err(42)
    assert len({Ok(1), Ok(1), Err(1)}) == 2


def test_truthiness_and_iteration() -> None:
    assert bool(Ok(None)) is True
    assert bool(Err("fail")) is False
    assert list(Ok(42)) == [42]
    assert list(Err("fail")) == []


def test_repr() -> None:
    assert repr(Ok(1)) == "Ok(1)"
    assert str(Err("boom")) == "Err('boom')"


def test_combinators_do_not_mutate() -> None:
    original = Ok([1, 2])
    original.map(lambda xs: [*xs, 3])

    assert original == Ok([1, 2])


# ═════════════════════════════════════════════════════════════════════════════
# Railway-Oriented Programming Patterns
# ═════════════════════════════════════════════════════════════════════════════


def parse_int(s: str) -> Result[int, str]:
    try:
        return Ok(int(s))
    except ValueError:
        return Err(f"invalid: {s}")


def validate_positive(n: int) -> Result[int, str]:
    return Ok(n) if n > 0 else Err("must be positive")


def test_railway_success_path() -> None:
    result = Ok("42").flat_map(parse_int).flat_map(validate_positive).map(lambda n: n * 2)

    assert result == Ok(84)


def test_railway_error_path() -> None:
    """Test railway-oriented error path (short-circuit)."""
    assert Ok("bad").flat_map(parse_int).flat_map(validate_positive).map(lambda n: n * 2) == Err("invalid: bad")
    assert Ok("-5").flat_map(parse_int).flat_map(validate_positive).map(lambda n: n * 2) == Err("must be positive")


def test_fallback_chain() -> None:
    """Test fallback pattern with flat_map_error."""
    result = (
        Err("primary unavailable")
        .flat_map_error(lambda _: Err("backup unavailable"))
        .flat_map_error(lambda _: Ok("cached data"))
    )

    assert result == Ok("cached data")
