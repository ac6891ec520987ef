"""
Code generation module.

Renders derived structures as Python type aliases.
"""

from __future__ import annotations

from .config import GeneratorConfig
from .generator import AliasDef, PythonGenerator
from .name_resolver import NameResolver

__all__ = [
    "GeneratorConfig",
    "PythonGenerator",
    "AliasDef",
    "NameResolver",
]
