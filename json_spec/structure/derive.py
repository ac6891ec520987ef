"""
Structural derivation.

Maps a specification and an environment to the structure descriptor of
its representation, by structural recursion on the specification.
References are answered from the environment without re-deriving the
referenced binder, so recursive specifications yield finite structures.
"""

from __future__ import annotations

import functools
import logging

from ..errors import DuplicatePropertyError
from ..specification.nodes import (
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
)
from .environment import Environment, extend
from .types import (
    BoolType,
    DecimalType,
    EitherType,
    FieldsType,
    IntType,
    ListType,
    MaybeType,
    StructureType,
    TagType,
    TextType,
    TimestampType,
    UnitType,
)

logger = logging.getLogger(__name__)

ATOMS: dict[type[Specification], StructureType] = {
    JsonString: TextType(),
    JsonNum: DecimalType(),
    JsonInt: IntType(),
    JsonBool: BoolType(),
    JsonDateTime: TimestampType(),
}


def derive(env: Environment, spec: Specification, source_path: str = "#") -> StructureType:
    """
    Derive the structure of a specification.

    Args:
        env: Environment used to resolve references
        spec: The specification node
        source_path: Location of the node (for error messages)

    Returns:
        The structure descriptor

    Raises:
        DuplicatePropertyError: If an object declares a property twice
        DuplicateBinderError: If a let binds a name twice
        UnboundReferenceError: If a reference has no enclosing binder
    """
    atom = ATOMS.get(type(spec))
    if atom is not None:
        return atom

    if isinstance(spec, JsonObject):
        return _derive_object(env, spec, f"{source_path}/object")

    if isinstance(spec, JsonArray):
        return ListType(derive(env, spec.element, f"{source_path}/array"))

    if isinstance(spec, JsonNullable):
        return MaybeType(derive(env, spec.inner, f"{source_path}/nullable"))

    if isinstance(spec, JsonEither):
        return EitherType(
            derive(env, spec.left, f"{source_path}/either/0"),
            derive(env, spec.right, f"{source_path}/either/1"),
        )

    if isinstance(spec, JsonTag):
        return TagType(spec.literal)

    if isinstance(spec, JsonLet):
        scope = extend(env, spec.bindings, derive, f"{source_path}/let")
        return derive(scope, spec.body, f"{source_path}/in")

    if isinstance(spec, JsonRef):
        return env.lookup(spec.name, f"{source_path}/ref")

    raise TypeError(f"Not a specification node: {spec!r}")


def _derive_object(env: Environment, spec: JsonObject, source_path: str) -> StructureType:
    """Derive an object as right-nested fields ending in the unit structure."""
    seen: set[str] = set()
    for name, _ in spec.properties:
        if name in seen:
            raise DuplicatePropertyError(f"Property '{name}' is declared more than once", source_path)
        seen.add(name)

    # Fold from the last property so declaration order is preserved
    structure: StructureType = UnitType()
    for name, property_spec in reversed(spec.properties):
        structure = FieldsType(name, derive(env, property_spec, f"{source_path}/{name}"), structure)
    return structure


@functools.lru_cache(maxsize=256)
def json_structure(spec: Specification) -> StructureType:
    """Derive the structure of a closed specification (empty environment).

    Results are cached per specification, so repeated derivations of the
    same specification share one structure.
    """
    logger.debug("Deriving structure for %s", type(spec).__name__)
    return derive(Environment(), spec)
