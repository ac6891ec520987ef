"""json_spec

Type-level style specifications for JSON data. A specification is built
from a small closed set of nodes; the structure derived from it describes
exactly the values that are shaped correctly for it, and can be rendered
as Python type aliases.
"""

__version__ = "0.1.0"

from .errors import (
    DuplicateBinderError,
    DuplicatePropertyError,
    SpecificationError,
    SpecificationParseError,
    StructureError,
    UnboundReferenceError,
)
from .specification import (
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
    SpecificationParser,
    one_of,
    tagged,
)
from .structure import (
    Environment,
    Field,
    Left,
    Rec,
    RecursionWrapper,
    Right,
    StructureType,
    Tag,
    derive,
    json_structure,
    sym,
)
from .codegen import GeneratorConfig, PythonGenerator

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
    "Environment",
    "StructureType",
    "RecursionWrapper",
    "derive",
    "json_structure",
    "sym",
    "Field",
    "Tag",
    "Rec",
    "Left",
    "Right",
    "GeneratorConfig",
    "PythonGenerator",
    "SpecificationError",
    "DuplicatePropertyError",
    "DuplicateBinderError",
    "UnboundReferenceError",
    "SpecificationParseError",
    "StructureError",
]
