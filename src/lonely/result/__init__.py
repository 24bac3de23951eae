"""Result algebra: success/error values that compose without branching.

Example:
    >>> from lonely.result import Result, Ok, Err, wrap
    >>>
    >>> def divide(a: int, b: int) -> Result[float, str]:
    ...     if b == 0:
    ...         return Err("division by zero")
    ...     return Ok(a / b)
    >>>
    >>> (
    ...     divide(10, 2)
    ...     .map(lambda x: x * 2)
    ...     .flat_map(lambda x: Ok(x + 1))
    ... )
    Ok(11.0)
"""

from .lists import collect_results, combine, cons, partition, split, traverse
from .result import Err, Ok, Result, Tag, fit, try_call, wrap

__all__ = [
    # Core types
    "Result",
    "Ok",
    "Err",
    "Tag",
    # Boundary normalizers
    "wrap",
    "fit",
    "try_call",
    # List aggregation
    "combine",
    "cons",
    "split",
    "traverse",
    "collect_results",
    "partition",
]
