"""Result monad for composing operations that may fail.

Implements a discriminated union for success/failure with full monadic operations:
- Functor: map, map_error
- Applicative: apply
- Monad: flat_map (bind), flat_map_error (recovery)
- Bifunctor: bimap
- Boundary normalizers: wrap, fit, try_call

Errors are plain values. Nothing in this module raises except the explicit
extractions `unwrap_or_raise` and `expect`.
"""

from __future__ import annotations

from enum import Enum
from typing import (
    TYPE_CHECKING,
    Callable,
    Generic,
    ParamSpec,
    TypeVar,
    cast,
)

from lonely.foundation.config import runtime_settings
from lonely.foundation.errors import ErrorCode, UnwrapError
from lonely.runtime.observability import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterator

    from lonely.option import Option

# Type variables for generic Result
T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type
U = TypeVar("U")  # Mapped success type
F = TypeVar("F")  # Mapped error type
P = ParamSpec("P")

log = get_logger("lonely.result")


class Tag(Enum):
    """Loose success/error markers produced by code outside the algebra.

    `wrap` and `fit` read these as tuple heads, e.g. `(Tag.OK, 1)` or
    `("error", reason)`. A bare `Tag.ERROR` is an error with no payload.
    """

    OK = "ok"
    ERROR = "error"

    @classmethod
    def parse(cls, head: object) -> Tag | None:
        """Read a tuple head as a tag. Accepts the member or its string value."""
        if isinstance(head, Tag):
            return head
        if isinstance(head, str):
            try:
                return cls(head)
            except ValueError:
                return None
        return None


class Result(Generic[T, E]):
    """Discriminated union representing success (Ok) or failure (Err).

    Exactly one variant is active. Every combinator returns a new Result (or
    this one, unchanged); nothing is mutated in place.

    Examples:
        >>> Ok(42).map(lambda x: x * 2).unwrap()
        84
        >>> Err("fail").map(lambda x: x * 2).unwrap()
        'fail'

        Railway-oriented programming:
        >>> def validate_positive(x: int) -> Result[int, str]:
        ...     return Ok(x) if x > 0 else Err("must be positive")
        >>>
        >>> result = (
        ...     Ok(5)
        ...     .flat_map(validate_positive)
        ...     .map(lambda x: x * 2)
        ... )
        >>> assert result.unwrap_or_raise() == 10
    """

    __slots__ = ("_value", "_is_ok")
    __match_args__ = ("_value",)

    def __init__(self, value: T | E, is_ok: bool) -> None:
        """Private constructor. Use Ok() or Err() instead."""
        self._value: T | E = value
        self._is_ok: bool = is_ok

    # ─────────────────────────────────────────────────────────────────
    # Type Checking
    # ─────────────────────────────────────────────────────────────────

    def is_ok(self) -> bool:
        """Check if Result is Ok variant."""
        return self._is_ok

    def is_error(self) -> bool:
        """Check if Result is Err variant."""
        return not self._is_ok

    # ─────────────────────────────────────────────────────────────────
    # Value Extraction
    # ─────────────────────────────────────────────────────────────────

    def unwrap(self) -> T | E:
        """Return whichever payload is present. Never raises.

        Does not tell you which variant it came from; pair it with
        is_ok()/is_error() or use match() when that matters.
        """
        return self._value

    def unwrap_or_raise(self) -> T:
        """Extract Ok value; an Err is a fatal fault.

        An exception payload is re-raised as-is (unless
        `raise_native_errors` is off); any other payload raises UnwrapError
        whose message is the payload's string form and whose `error`
        attribute is the payload itself.

        Raises:
            UnwrapError: If Result is Err with a non-exception payload
        """
        if self._is_ok:
            return cast(T, self._value)
        log.debug("unwrap on err", error=self._value)
        if isinstance(self._value, BaseException) and runtime_settings().raise_native_errors:
            raise self._value
        raise UnwrapError.from_error(self._value)

    def unwrap_or(self, default: T) -> T:
        """Extract Ok value or return default."""
        return cast(T, self._value) if self._is_ok else default

    def unwrap_or_else(self, f: Callable[[E], T]) -> T:
        """Extract Ok value or compute from error."""
        return cast(T, self._value) if self._is_ok else f(cast(E, self._value))

    def expect(self, msg: str) -> T:
        """Extract Ok value with custom fault message.

        Raises:
            UnwrapError: If Result is Err, with message "{msg}: {error}"
        """
        if self._is_ok:
            return cast(T, self._value)
        log.debug("expect on err", message=msg, error=self._value)
        raise UnwrapError.from_error(self._value, ErrorCode.EXPECT_FAILED, context=msg)

    # ─────────────────────────────────────────────────────────────────
    # Functor Operations
    # ─────────────────────────────────────────────────────────────────

    def map(self, f: Callable[[T], U]) -> Result[U, E]:
        """Map function over Ok value (Functor).

        Applies f only if Ok, preserves Err unchanged.

        Type signature: Result[T, E] -> (T -> U) -> Result[U, E]
        """
        if self._is_ok:
            return Ok(f(cast(T, self._value)))
        return cast(Result[U, E], self)

    def map_error(self, f: Callable[[E], F]) -> Result[T, F]:
        """Map function over Err value, preserving Ok values.

        Type signature: Result[T, E] -> (E -> F) -> Result[T, F]
        """
        if not self._is_ok:
            return Err(f(cast(E, self._value)))
        return cast(Result[T, F], self)

    def filter_map(self, predicate: Callable[[T], bool], f: Callable[[T], Result[T, E] | T]) -> Result[T, E]:
        """Transform the Ok value only when predicate holds.

        A failing predicate is not an error: the Ok passes through unchanged.
        When f returns a Result it is bound as in flat_map, any other return
        value is wrapped in Ok as in map. Err always passes through.

        Example:
            >>> Ok(4).filter_map(lambda x: x % 2 == 0, lambda x: Ok(x // 2))
            Ok(2)
            >>> Ok(3).filter_map(lambda x: x % 2 == 0, lambda x: Ok(x // 2))
            Ok(3)
        """
        if not self._is_ok or not predicate(cast(T, self._value)):
            return self
        out = f(cast(T, self._value))
        return out if isinstance(out, Result) else Ok(out)

    # ─────────────────────────────────────────────────────────────────
    # Bifunctor Operations
    # ─────────────────────────────────────────────────────────────────

    def bimap(self, ok_fn: Callable[[T], U], err_fn: Callable[[E], F]) -> Result[U, F]:
        """Map both Ok and Err values (Bifunctor)."""
        if self._is_ok:
            return Ok(ok_fn(cast(T, self._value)))
        return Err(err_fn(cast(E, self._value)))

    # ─────────────────────────────────────────────────────────────────
    # Monad Operations
    # ─────────────────────────────────────────────────────────────────

    def flat_map(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Monadic bind (>>=) - chain operations that can fail.

        f's Result is returned directly, never double-wrapped.

        Type signature: Result[T, E] -> (T -> Result[U, E]) -> Result[U, E]

        Example:
            >>> def parse_int(s: str) -> Result[int, str]:
            ...     try:
            ...         return Ok(int(s))
            ...     except ValueError:
            ...         return Err(f"invalid int: {s}")
            >>>
            >>> Ok("42").flat_map(parse_int)
            Ok(42)
        """
        if self._is_ok:
            return f(cast(T, self._value))
        return cast(Result[U, E], self)

    def and_then(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Alias for flat_map for better readability."""
        return self.flat_map(f)

    def flat_map_error(self, f: Callable[[E], Result[T, F]]) -> Result[T, F]:
        """Bind on the Err branch - recover or re-tag an error.

        Type signature: Result[T, E] -> (E -> Result[T, F]) -> Result[T, F]

        Example:
            >>> Err("timeout").flat_map_error(lambda e: Ok(0) if e == "timeout" else Err(e))
            Ok(0)
        """
        if not self._is_ok:
            return f(cast(E, self._value))
        return cast(Result[T, F], self)

    def or_else(self, f: Callable[[E], Result[T, F]]) -> Result[T, F]:
        """Alias for flat_map_error."""
        return self.flat_map_error(f)

    def flatten(self: Result[Result[T, E], E]) -> Result[T, E]:
        """Flatten nested Result (join in monad terms)."""
        if self._is_ok:
            return cast(Result[T, E], self._value)
        return cast(Result[T, E], self)

    # ─────────────────────────────────────────────────────────────────
    # Applicative Operations
    # ─────────────────────────────────────────────────────────────────

    def apply(self, f_result: Result[Callable[[T], U], E]) -> Result[U, E]:
        """Apply wrapped function to wrapped value (Applicative).

        The function holder is inspected first: if it is Err, its error wins
        even when this Result is Err too. Otherwise this Result's Err wins.

        Type signature: Result[T, E] -> Result[T -> U, E] -> Result[U, E]
        """
        if not f_result._is_ok:
            return cast(Result[U, E], f_result)
        if not self._is_ok:
            return cast(Result[U, E], self)
        return Ok(cast(Callable[[T], U], f_result._value)(cast(T, self._value)))

    # ─────────────────────────────────────────────────────────────────
    # Inspection & Utilities
    # ─────────────────────────────────────────────────────────────────

    def ok(self) -> Option[T]:
        """Project into Option: Some(value) if Ok, Nothing if Err."""
        from lonely.option import Nothing, Some
        return Some(cast(T, self._value)) if self._is_ok else Nothing

    def error(self) -> Option[E]:
        """Project into Option: Some(error) if Err, Nothing if Ok."""
        from lonely.option import Nothing, Some
        return Some(cast(E, self._value)) if not self._is_ok else Nothing

    def inspect(self, f: Callable[[T], object]) -> Result[T, E]:
        """Call function with Ok value for side effects, return self."""
        if self._is_ok:
            f(cast(T, self._value))
        return self

    def inspect_error(self, f: Callable[[E], object]) -> Result[T, E]:
        """Call function with Err value for side effects, return self."""
        if not self._is_ok:
            f(cast(E, self._value))
        return self

    def match(
        self,
        *,
        ok: Callable[[T], U],
        err: Callable[[E], U],
    ) -> U:
        """Pattern match on Result variants.

        Example:
            >>> Ok(42).match(ok=lambda x: f"success: {x}", err=lambda e: f"failed: {e}")
            'success: 42'
        """
        if self._is_ok:
            return ok(cast(T, self._value))
        return err(cast(E, self._value))

    def to_tuple(self) -> tuple[Tag, T | E]:
        """Convert to a tagged pair, the shape wrap() reads back."""
        return (Tag.OK if self._is_ok else Tag.ERROR, self._value)

    # ─────────────────────────────────────────────────────────────────
    # Dunder Methods
    # ─────────────────────────────────────────────────────────────────

    def __bool__(self) -> bool:
        return self._is_ok

    def __repr__(self) -> str:
        variant = "Ok" if self._is_ok else "Err"
        return f"{variant}({self._value!r})"

    __str__ = __repr__

    def __eq__(self, other: object) -> bool:
        """Structural equality."""
        if not isinstance(other, Result):
            return NotImplemented
        return self._is_ok == other._is_ok and self._value == other._value

    def __hash__(self) -> int:
        return hash((self._is_ok, self._value))

    def __iter__(self) -> Iterator[T]:
        """Iterate over Ok value (yields 0 or 1 element)."""
        if self._is_ok:
            yield cast(T, self._value)


# ═════════════════════════════════════════════════════════════════════════════
# Constructor Functions
# ═════════════════════════════════════════════════════════════════════════════


def Ok(value: T) -> Result[T, E]:  # noqa: N802
    """Construct Ok variant (success).

    Type signature: T -> Result[T, E]
    """
    return Result(value, is_ok=True)


def Err(error: E) -> Result[T, E]:  # noqa: N802
    """Construct Err variant (failure).

    Type signature: E -> Result[T, E]
    """
    return Result(error, is_ok=False)


# ═════════════════════════════════════════════════════════════════════════════
# Boundary Normalizers
# ═════════════════════════════════════════════════════════════════════════════


_MAX_FIT_ARITY = 5


def wrap(value: object, default: object = None) -> Result:
    """Normalize a raw value into a Result.

    - None, a bare Tag.ERROR, or Nothing -> Err(default)
    - a Result -> passed through unchanged
    - Some(x) -> Ok(x)
    - a tagged pair `(Tag.OK, x)` / `(Tag.ERROR, e)` (string heads accepted) -> Ok(x) / Err(e)
    - anything else -> Ok(value)

    Example:
        >>> wrap(None)
        Err(None)
        >>> wrap(None, default="missing")
        Err('missing')
        >>> wrap(5)
        Ok(5)
    """
    from lonely.option import Option

    if isinstance(value, Result):
        return value
    if value is None or value is Tag.ERROR:
        return Err(default)
    if isinstance(value, Option):
        return Ok(value.to_nullable()) if value.is_some() else Err(default)
    if isinstance(value, tuple) and len(value) == 2 and (tag := Tag.parse(value[0])) is not None:
        return Ok(value[1]) if tag is Tag.OK else Err(value[1])
    return Ok(value)


def fit(raw: object, arity: int | None = None) -> Result:
    """Collapse a loosely-tagged success marker into a canonical Result.

    - bare Tag.OK -> Ok(None)
    - (Tag.OK, a) -> Ok(a)
    - (Tag.OK, a, b, ...) with 2 to 5 payload values -> Ok((a, b, ...))
    - anything else, including error markers and None -> wrap(raw)

    Pass `arity` to accept only that many payload values; any other shape
    falls back to wrap().

    Example:
        >>> fit(Tag.OK)
        Ok(None)
        >>> fit(("ok", 1, 2))
        Ok((1, 2))
        >>> fit(("ok", 1, 2), arity=3)
        Ok(('ok', 1, 2))
    """
    if arity is not None and not 0 <= arity <= _MAX_FIT_ARITY:
        raise ValueError(f"arity must be between 0 and {_MAX_FIT_ARITY}, got {arity}")

    if raw is Tag.OK:
        payload: tuple[object, ...] | None = ()
    elif isinstance(raw, tuple) and raw and Tag.parse(raw[0]) is Tag.OK and len(raw) - 1 <= _MAX_FIT_ARITY:
        payload = raw[1:]
    else:
        payload = None

    if payload is None or (arity is not None and len(payload) != arity):
        log.debug("fit fallback to wrap", shape=type(raw).__name__, arity=arity)
        return wrap(raw)
    match len(payload):
        case 0: return Ok(None)
        case 1: return Ok(payload[0])
        case _: return Ok(payload)


def try_call(
    fn: Callable[P, T],
    *args: P.args,
    **kwargs: P.kwargs,
) -> Result[T, Exception]:
    """Call fn and capture a raised Exception as Err(exc).

    This is the on-ramp for code that signals failure by raising.

    Example:
        >>> try_call(int, "42")
        Ok(42)
        >>> try_call(int, "x").is_error()
        True
    """
    try:
        return Ok(fn(*args, **kwargs))
    except Exception as exc:  # noqa: BLE001 - boundary converts any failure into Err
        return Err(exc)
