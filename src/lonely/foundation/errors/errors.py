"""Faults raised when a tagged value is forced open.

The algebra itself never raises: errors travel as `Err` payloads. The only
exits are explicit extractions (`unwrap_or_raise`, `expect`) and shape
violations in list operations, which surface here as structured faults.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Self

from pydantic import BaseModel


class ErrorCode(StrEnum):
    """Codes for faults raised by extraction and shape checks."""
    UNWRAP_ON_ERR = "UNWRAP_ON_ERR"
    UNWRAP_ON_NOTHING = "UNWRAP_ON_NOTHING"
    EXPECT_FAILED = "EXPECT_FAILED"
    INVALID_SHAPE = "INVALID_SHAPE"


def _describe(payload: object, *, as_str: bool = False) -> str:
    """repr (or str) of a payload; a failing dunder falls back to object's repr."""
    try:
        return str(payload) if as_str else repr(payload)
    except Exception:  # noqa: BLE001 - the payload's own repr must not replace the fault
        return object.__repr__(payload)


class Fault(BaseModel):
    """Structured description of a fault."""

    model_config = {"frozen": True}

    code: ErrorCode
    message: str
    payload: str | None = None

    @classmethod
    def create(cls, code: ErrorCode, message: str, payload: object = None) -> Self:
        """Factory method; `payload` is stored as its repr."""
        return cls(code=code, message=message, payload=None if payload is None else _describe(payload))

    def render(self) -> str:
        """Format fault for humans."""
        tail = f" (payload: {self.payload})" if self.payload is not None else ""
        return f"[{self.code}] {self.message}{tail}"

    __str__ = render


class LonelyException(Exception):
    """Exception wrapping a Fault for raising."""

    def __init__(self, fault: Fault) -> None:
        self.fault = fault
        super().__init__(fault.message)

    def __reduce__(self) -> tuple[object, ...]:
        return (type(self), (self.fault,))


class UnwrapError(LonelyException, RuntimeError):
    """Raised when an Err or Nothing is forced open.

    `error` holds the original payload untouched; the exception message is
    its string form so `str(exc)` reads like the reason itself.
    """

    def __init__(self, fault: Fault, error: object = None) -> None:
        super().__init__(fault)
        self.error = error

    def __reduce__(self) -> tuple[object, ...]:
        return (type(self), (self.fault, self.error))

    @classmethod
    def from_error(
        cls,
        error: object,
        code: ErrorCode = ErrorCode.UNWRAP_ON_ERR,
        message: str | None = None,
        *,
        context: str | None = None,
    ) -> Self:
        """Build from an Err payload.

        The message defaults to `str(error)`, prefixed with "{context}: " when given.
        """
        if message is None:
            message = _describe(error, as_str=True)
            if context:
                message = f"{context}: {message}"
        return cls(Fault.create(code, message, error), error)


class ShapeError(LonelyException, TypeError):
    """Raised when a list operation receives a payload of the wrong shape."""

    @classmethod
    def create(cls, message: str, payload: object = None) -> Self:
        return cls(Fault.create(ErrorCode.INVALID_SHAPE, message, payload))
