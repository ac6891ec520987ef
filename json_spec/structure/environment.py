"""
Name environment for reference resolution.

An environment is an immutable sequence of (name, structure) entries.
Binding prepends a new entry and returns a new environment; lookup scans
from the most recent entry, so inner binders shadow outer ones.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence

from ..errors import DuplicateBinderError, UnboundReferenceError
from ..specification.nodes import Specification
from .types import RecursionWrapper, StructureType

logger = logging.getLogger(__name__)


class Environment:
    """Ordered, shadowing association from binder names to structures."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Sequence[tuple[str, StructureType]] = ()):
        """
        Initialize the environment.

        Args:
            entries: (name, structure) pairs, most recent first
        """
        self._entries: tuple[tuple[str, StructureType], ...] = tuple(entries)

    def bind(self, name: str, structure: StructureType) -> Environment:
        """Return a new environment with `name` bound ahead of every existing entry."""
        return Environment(((name, structure),) + self._entries)

    def lookup(self, name: str, source_path: str = "") -> StructureType:
        """
        Resolve a name to its structure.

        Args:
            name: The binder name
            source_path: Location of the reference (for error messages)

        Returns:
            The structure of the most recently bound entry named `name`

        Raises:
            UnboundReferenceError: If no entry has that name
        """
        for entry_name, structure in self._entries:
            if entry_name == name:
                return structure
        raise UnboundReferenceError(name, source_path)

    def names(self) -> list[str]:
        """Entry names, most recent first (shadowed names included)."""
        return [name for name, _ in self._entries]

    def __contains__(self, name: object) -> bool:
        return any(entry_name == name for entry_name, _ in self._entries)

    def __iter__(self) -> Iterator[tuple[str, StructureType]]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Environment({self.names()!r})"


Deriver = Callable[[Environment, Specification, str], StructureType]


def extend(
    env: Environment,
    bindings: Sequence[tuple[str, Specification]],
    derive: Deriver,
    source_path: str = "#",
) -> Environment:
    """
    Extend an environment with the binders of one let.

    Every binder gets an unresolved RecursionWrapper bound ahead of `env`,
    so all sibling names are known before any of them is derived. Binders
    are then derived left to right, each with its own wrapper in front;
    the wrapper is resolved with the derived structure, and the name is
    rebound to that structure for the following siblings and the body.

    Args:
        env: The enclosing environment
        bindings: The let's (name, spec) pairs, in declaration order
        derive: The derivation function used for each binder
        source_path: Location of the let's bindings (for error messages)

    Returns:
        The environment the let's body is derived in

    Raises:
        DuplicateBinderError: If a name is bound twice by this let
    """
    seen: set[str] = set()
    for name, _ in bindings:
        if name in seen:
            raise DuplicateBinderError(f"Binder '{name}' is declared more than once", source_path)
        seen.add(name)

    wrappers = [(name, RecursionWrapper(name, spec)) for name, spec in bindings]

    scope = env
    for name, wrapper in wrappers:
        scope = scope.bind(name, wrapper)

    for (name, spec), (_, wrapper) in zip(bindings, wrappers):
        local = scope.bind(name, wrapper)
        logger.debug("Deriving binder %r with scope %r", name, local.names())
        structure = derive(local, spec, f"{source_path}/{name}")
        wrapper.resolve(local, structure)
        scope = scope.bind(name, structure)

    return scope
