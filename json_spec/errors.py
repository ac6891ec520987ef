"""
Exceptions raised by json_spec.

Every schema problem is reported at definition time, before any
representation exists. Value checks against a derived structure raise
StructureError.
"""

from __future__ import annotations


class SpecificationError(Exception):
    """Raised when a specification is ill-formed.

    This can happen when:
    - An object declares the same property twice
    - A let declares the same binder twice
    - A reference names no enclosing binder
    - A specification document cannot be parsed

    Attributes:
        source_path: Location of the offending node (e.g. "#/object/children")
    """

    def __init__(self, message: str, source_path: str = ""):
        self.source_path = source_path
        if source_path:
            message = f"{message} (at {source_path})"
        super().__init__(message)


class DuplicatePropertyError(SpecificationError):
    """Raised when one object declares a property name more than once."""

    pass


class DuplicateBinderError(SpecificationError):
    """Raised when one let binds the same name more than once."""

    pass


class UnboundReferenceError(SpecificationError):
    """Raised when a reference has no enclosing binder of that name."""

    def __init__(self, name: str, source_path: str = ""):
        self.name = name
        super().__init__(f"Unbound reference '{name}'", source_path)


class SpecificationParseError(SpecificationError):
    """Raised when a specification document is malformed."""

    pass


class StructureError(Exception):
    """Raised when a value is not an instance of a derived structure.

    Attributes:
        path: Location of the offending value (e.g. "$.children[0]")
    """

    def __init__(self, message: str, path: str = "$"):
        self.path = path
        super().__init__(f"{path}: {message}")
