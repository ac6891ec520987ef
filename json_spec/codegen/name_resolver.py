"""
Name resolver for generated type aliases.

Converts binder names to PascalCase alias names and keeps them unique
within one generated module. Nested lets may bind the same name more
than once; later binders get a numbered suffix.
"""

from __future__ import annotations

from ..structure.types import RecursionWrapper
from ..utils import to_identifier

# Names the generated module imports or relies on
RESERVED_NAMES = {
    "Field",
    "Tag",
    "Rec",
    "Left",
    "Right",
    "Literal",
    "TypeAlias",
    "datetime",
    "decimal",
    "annotations",
}


class NameResolver:
    """Assigns unique alias names to recursive binders."""

    def __init__(self, suffix: str = "", reserved: set[str] | None = None):
        """
        Initialize the resolver.

        Args:
            suffix: Appended to every alias name (e.g. "Structure")
            reserved: Extra names that must not be used (e.g. the root alias)
        """
        self.suffix = suffix
        self._taken: set[str] = set(RESERVED_NAMES) | set(reserved or ())
        # id(wrapper) -> (wrapper, alias name)
        self._names: dict[int, tuple[RecursionWrapper, str]] = {}

    def name_for(self, wrapper: RecursionWrapper) -> str:
        """Return the alias name of a wrapper, assigning one on first use."""
        key = id(wrapper)
        if key not in self._names:
            self._names[key] = (wrapper, self._unique(to_identifier(wrapper.name) + self.suffix))
        return self._names[key][1]

    def reserve(self, name: str) -> str:
        """Reserve a name outright, making it unique if already taken."""
        return self._unique(name)

    def _unique(self, base: str) -> str:
        candidate = base
        counter = 2
        while candidate in self._taken:
            candidate = f"{base}{counter}"
            counter += 1
        self._taken.add(candidate)
        return candidate
