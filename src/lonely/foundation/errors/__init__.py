"""Fault types for lonely.

- ErrorCode: Codes for extraction and shape faults
- Fault: Frozen pydantic description of a fault
- LonelyException/UnwrapError/ShapeError: Raisable wrappers around Fault
"""

from .errors import ErrorCode, Fault, LonelyException, ShapeError, UnwrapError

__all__ = ["ErrorCode", "Fault", "LonelyException", "ShapeError", "UnwrapError"]
