"""
Specification module.

Contains the specification node definitions and the document parser.
"""

from __future__ import annotations

from .nodes import (
    JsonArray,
    JsonBool,
    JsonDateTime,
    JsonEither,
    JsonInt,
    JsonLet,
    JsonNullable,
    JsonNum,
    JsonObject,
    JsonRef,
    JsonString,
    JsonTag,
    Specification,
    one_of,
    tagged,
)
from .parser import SpecificationParser

__all__ = [
    "Specification",
    "JsonObject",
    "JsonString",
    "JsonNum",
    "JsonInt",
    "JsonBool",
    "JsonDateTime",
    "JsonArray",
    "JsonNullable",
    "JsonEither",
    "JsonTag",
    "JsonLet",
    "JsonRef",
    "one_of",
    "tagged",
    "SpecificationParser",
]
