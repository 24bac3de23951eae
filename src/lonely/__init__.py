"""Lonely - pipe values through results and options.

Two small algebras for composing steps that may fail or may be absent:
Result (Ok/Err) and Option (Some/Nothing), plus the bridge between them.
Errors are values; a failed step short-circuits every later step until
something recovers it.

Quick Start:
    >>> from lonely import Option, Result, Ok, Err, wrap
    >>>
    >>> (
    ...     wrap(next((x for x in [1, 2, 3] if x == 2), None))
    ...     .map(lambda x: x * 10)
    ...     .unwrap()
    ... )
    20

Recovering from an error:
    >>> from datetime import time
    >>> from lonely import try_call
    >>>
    >>> (
    ...     try_call(time.fromisoformat, "not a time")
    ...     .map(lambda t: (t.hour, t.minute, t.second))
    ...     .flat_map_error(lambda e: Ok((0, 0, 0)) if isinstance(e, ValueError) else Err(e))
    ... )
    Ok((0, 0, 0))

Absent values without wrapping:
    >>> Option.of({"a": 1}.get("b")).map(lambda x: x * 10).with_default(0)
    0
"""

from __future__ import annotations

__version__ = "0.3.0"

# Foundation
from .foundation import (
    ErrorCode,
    Fault,
    LonelyException,
    LonelySettings,
    ShapeError,
    UnwrapError,
    clear_settings_cache,
    get_settings,
)

# Option algebra
from .option import Nothing, Option, Some, from_nullable, to_result

# Result algebra
from .result import (
    Err,
    Ok,
    Result,
    Tag,
    collect_results,
    combine,
    cons,
    fit,
    partition,
    split,
    traverse,
    try_call,
    wrap,
)

# Observability
from .runtime.observability import configure_logging, get_logger

__all__ = [
    "__version__",
    # Result
    "Result",
    "Ok",
    "Err",
    "Tag",
    "wrap",
    "fit",
    "try_call",
    # Lists
    "combine",
    "cons",
    "split",
    "traverse",
    "collect_results",
    "partition",
    # Option
    "Option",
    "Some",
    "Nothing",
    "from_nullable",
    "to_result",
    # Errors
    "ErrorCode",
    "Fault",
    "LonelyException",
    "UnwrapError",
    "ShapeError",
    # Config & logging
    "LonelySettings",
    "get_settings",
    "clear_settings_cache",
    "configure_logging",
    "get_logger",
]
