"""Option algebra: values that may be absent, with an explicit Nothing.

Example:
    >>> from lonely.option import Option, to_result
    >>>
    >>> ports = {"http": 80}
    >>> Option.of(ports.get("https")).map(str).with_default("unset")
    'unset'
    >>> to_result(ports.get("http"), "no port").map(lambda p: p + 1)
    Ok(81)
"""

from .bridge import from_nullable, to_result
from .option import Nothing, Option, Some

__all__ = [
    "Option",
    "Some",
    "Nothing",
    "from_nullable",
    "to_result",
]
