"""
Symbol-to-string conversion.

Recovers the run-time string of a tag literal or a binder name, which
encoders emit for tag properties and diagnostics use for readable names.
"""

from __future__ import annotations

from typing import Any

from ..specification.nodes import JsonRef, JsonTag
from .types import RecursionWrapper, TagType
from .values import Field, Tag


def sym(symbol: Any) -> str:
    """
    Return the string a tag or binder stands for.

    Examples:
        sym(Tag("foo")) -> "foo"
        sym(JsonTag("foo")) -> "foo"
        sym(JsonRef("Tree")) -> "Tree"
        sym(Field("label", "x")) -> "label"

    Args:
        symbol: A Tag, JsonTag, TagType, JsonRef, RecursionWrapper, Field or str

    Returns:
        The literal or name as a plain string
    """
    if isinstance(symbol, str):
        return symbol
    if isinstance(symbol, (Tag, JsonTag, TagType)):
        return str(symbol.literal)
    if isinstance(symbol, (JsonRef, RecursionWrapper)):
        return symbol.name
    if isinstance(symbol, Field):
        return str(symbol.key)
    raise TypeError(f"No symbol for {type(symbol).__name__}")
