"""Crossing from Option space (or plain nullables) into Result space."""

from __future__ import annotations

from typing import TypeVar

from lonely.result import Err, Ok, Result

from .option import Option

T = TypeVar("T")
E = TypeVar("E")


def from_nullable(value: T | None) -> Option[T]:
    """Convert a Python nullable to Option. Alias of Option.of()."""
    return Option.of(value)


def to_result(value: Option[T] | T | None, error: E) -> Result[T, E]:
    """Absence becomes Err(error), presence becomes Ok(value).

    Accepts an Option or a raw nullable, where None means absent. Note that
    `Some(None)` is present and gives `Ok(None)`.

    Example:
        >>> from lonely.option import Some
        >>> to_result(None, "boom")
        Err('boom')
        >>> to_result(Some(1), "boom")
        Ok(1)
    """
    if isinstance(value, Option):
        return value.to_result(error)
    return Err(error) if value is None else Ok(value)
