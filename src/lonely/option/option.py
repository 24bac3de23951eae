"""Option type: a value that is present (Some) or absent (Nothing).

Absence is an explicit variant rather than Python's None, so `Some(None)`
is a real, present value. Use `Option.of()` at the boundary to lift a
nullable into an Option.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Generic, TypeVar, cast

from lonely.foundation.errors import ErrorCode, UnwrapError
from lonely.result import Err, Ok, Result

if TYPE_CHECKING:
    from collections.abc import Iterator

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


class Option(Generic[T]):
    """Discriminated union of Some(value) and Nothing.

    Examples:
        >>> Some(2).map(lambda x: x * 10)
        Some(20)
        >>> Nothing.map(lambda x: x * 10)
        Nothing
        >>> Option.of(None).with_default(0)
        0
    """

    __slots__ = ("_value", "_is_some")
    __match_args__ = ("_value",)

    def __init__(self, value: T | None, is_some: bool) -> None:
        """Private constructor. Use Some(), Nothing or Option.of() instead."""
        self._value = value
        self._is_some = is_some

    @classmethod
    def of(cls, value: T | None) -> Option[T]:
        """Lift a nullable: None becomes Nothing, anything else Some(value)."""
        return Nothing if value is None else Some(value)

    def is_some(self) -> bool:
        return self._is_some

    def is_none(self) -> bool:
        return not self._is_some

    # ─── Transformations ───────────────────────────────────────────────

    def map(self, f: Callable[[T], U]) -> Option[U]:
        """Apply f if present, pass Nothing through."""
        if self._is_some:
            return Some(f(cast(T, self._value)))
        return Nothing

    def map_or(self, f: Callable[[T], U], default: U) -> U:
        """Apply f if present, else return default. Always returns a bare value."""
        if self._is_some:
            return f(cast(T, self._value))
        return default

    def filter_map(self, predicate: Callable[[T], bool], f: Callable[[T], U]) -> Option[U] | Option[T]:
        """Apply f only when present and predicate holds.

        A failing predicate returns this Some unchanged rather than Nothing.

        Example:
            >>> Some(1).filter_map(lambda x: x > 0, lambda x: x + x)
            Some(2)
            >>> Some(-1).filter_map(lambda x: x > 0, lambda x: x + x)
            Some(-1)
        """
        if not self._is_some or not predicate(cast(T, self._value)):
            return self
        return Some(f(cast(T, self._value)))

    def flat_map(self, f: Callable[[T], Option[U]]) -> Option[U]:
        """Chain a lookup that may itself be absent."""
        if self._is_some:
            return f(cast(T, self._value))
        return Nothing

    # ─── Extraction ────────────────────────────────────────────────────

    def with_default(self, default: T) -> T:
        """Return the value if present, else default."""
        return cast(T, self._value) if self._is_some else default

    def to_nullable(self) -> T | None:
        """Drop back to a plain nullable value."""
        return self._value if self._is_some else None

    def unwrap_or_raise(self) -> T:
        """Extract the value; Nothing is a fatal fault.

        Raises:
            UnwrapError: If Option is Nothing
        """
        if self._is_some:
            return cast(T, self._value)
        raise UnwrapError.from_error(None, ErrorCode.UNWRAP_ON_NOTHING, "unwrap_or_raise() on Nothing")

    # ─── Bridge ────────────────────────────────────────────────────────

    def to_result(self, error: E) -> Result[T, E]:
        """Some(x) becomes Ok(x), Nothing becomes Err(error).

        This is the on-ramp from Option into Result chains.
        """
        if self._is_some:
            return Ok(cast(T, self._value))
        return Err(error)

    # ─── Dunder Methods ────────────────────────────────────────────────

    def __bool__(self) -> bool:
        return self._is_some

    def __repr__(self) -> str:
        return f"Some({self._value!r})" if self._is_some else "Nothing"

    __str__ = __repr__

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Option):
            return NotImplemented
        return self._is_some == other._is_some and self._value == other._value

    def __hash__(self) -> int:
        return hash((self._is_some, self._value))

    def __iter__(self) -> Iterator[T]:
        if self._is_some:
            yield cast(T, self._value)


def Some(value: T) -> Option[T]:  # noqa: N802
    """Construct a present Option. `Some(None)` is allowed and is not Nothing."""
    return Option(value, is_some=True)


Nothing: Option = Option(None, is_some=False)
