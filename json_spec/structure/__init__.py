"""
Structure module.

Derives structure descriptors from specifications and defines the
run-time values those structures describe.
"""

from __future__ import annotations

from .derive import derive, json_structure
from .environment import Environment, extend
from .symbols import sym
from .types import (
    BoolType,
    DecimalType,
    EitherType,
    FieldsType,
    IntType,
    ListType,
    MaybeType,
    RecursionWrapper,
    StructureType,
    TagType,
    TextType,
    TimestampType,
    UnitType,
)
from .values import Field, Left, Rec, Right, Tag

__all__ = [
    "derive",
    "json_structure",
    "Environment",
    "extend",
    "sym",
    "StructureType",
    "UnitType",
    "FieldsType",
    "TextType",
    "DecimalType",
    "IntType",
    "BoolType",
    "TimestampType",
    "ListType",
    "MaybeType",
    "EitherType",
    "TagType",
    "RecursionWrapper",
    "Field",
    "Tag",
    "Rec",
    "Left",
    "Right",
]
