"""Conversions between Result-of-list and list-of-Result.

`Result[list[T], E]` fails as a whole; `list[Result[T, E]]` tags each
element independently. combine/split move between the two, cons builds
the former one element at a time.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, TypeVar, cast

from lonely.foundation.errors import ShapeError
from lonely.runtime.observability import get_logger

from .result import Err, Ok, Result

if TYPE_CHECKING:
    from collections.abc import Iterable

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")

log = get_logger("lonely.result.lists")

# Ok payloads accepted as "the list" by cons and split
_LIST_PAYLOADS = (list, tuple)


def _require_result(item: object, where: str) -> Result:
    if not isinstance(item, Result):
        raise ShapeError.create(f"{where} expects Result values, got {type(item).__name__}", item)
    return item


def combine(results: Iterable[Result[T, E]]) -> Result[list[T], E]:
    """Convert list of Results to Result of list.

    Scans left to right and stops at the first Err, which is returned as-is;
    later elements are never inspected. Empty input gives Ok([]).

    Type signature: [Result[T, E]] -> Result[[T], E]

    Example:
        >>> combine([Ok(1), Ok(2), Ok(3)])
        Ok([1, 2, 3])
        >>> combine([Ok(1), Err(2), Err(3)])
        Err(2)
    """
    values: list[T] = []
    for index, result in enumerate(results):
        if _require_result(result, "combine").is_error():
            log.debug("combine short-circuit", index=index)
            return cast(Result[list[T], E], result)
        values.append(cast(T, result.unwrap()))
    return Ok(values)


def cons(head: Result[T, E], tail: Result[list[T], E]) -> Result[list[T], E]:
    """Prepend head's value onto tail's list.

    head's Err wins outright, then tail's Err, otherwise Ok([head, *tail]).

    Raises:
        ShapeError: If tail is Ok but does not hold a list or tuple

    Example:
        >>> cons(Ok(1), Ok([2, 3]))
        Ok([1, 2, 3])
        >>> cons(Err("boom"), Ok([]))
        Err('boom')
    """
    if _require_result(head, "cons").is_error():
        return cast(Result[list[T], E], head)
    if _require_result(tail, "cons").is_error():
        return tail
    if not isinstance(values := tail.unwrap(), _LIST_PAYLOADS):
        raise ShapeError.create(f"cons tail must hold a list or tuple, got {type(values).__name__}", values)
    return Ok([cast(T, head.unwrap()), *values])


def split(result: Result[list[T], E]) -> list[Result[T, E]] | Result[list[T], E]:
    """Split a Result of list into a list of Results.

    Each element of an Ok list becomes its own Ok, in order. An Err is
    returned unchanged, not inside a list, so split is not a strict inverse
    of combine.

    Raises:
        ShapeError: If result is Ok but does not hold a list or tuple

    Example:
        >>> split(Ok([1, 2]))
        [Ok(1), Ok(2)]
        >>> split(Err("boom"))
        Err('boom')
    """
    if _require_result(result, "split").is_error():
        return result
    if not isinstance(values := result.unwrap(), _LIST_PAYLOADS):
        raise ShapeError.create(f"split expects a list or tuple payload, got {type(values).__name__}", values)
    return [Ok(v) for v in values]


def traverse(
    items: Iterable[T],
    f: Callable[[T], Result[U, E]],
) -> Result[list[U], E]:
    """Map function returning Result over items, collect into Result of list.

    Fails fast: f is not called for items after the first Err.

    Type signature: [T] -> (T -> Result[U, E]) -> Result[[U], E]

    Example:
        >>> traverse(["1", "2"], lambda s: Ok(int(s)))
        Ok([1, 2])
    """
    return combine(f(item) for item in items)


def collect_results(results: Iterable[Result[T, E]]) -> Result[list[T], list[E]]:
    """Collect all Results, accumulating every error if any fail.

    Unlike combine, this inspects every element.

    Type signature: [Result[T, E]] -> Result[[T], [E]]

    Example:
        >>> collect_results([Ok(1), Err("e1"), Ok(3), Err("e2")])
        Err(['e1', 'e2'])
    """
    values, errors = partition(results)
    return Ok(values) if not errors else Err(errors)


def partition(results: Iterable[Result[T, E]]) -> tuple[list[T], list[E]]:
    """Split Results into (ok values, error values), keeping order within each."""
    values: list[T] = []
    errors: list[E] = []
    for result in results:
        if _require_result(result, "partition").is_ok():
            values.append(cast(T, result.unwrap()))
        else:
            errors.append(cast(E, result.unwrap()))
    return values, errors
