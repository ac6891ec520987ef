"""
Configuration for the Python code generator.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class GeneratorConfig:
    """Configuration options for code generation."""

    # Alias name for the root structure (empty = derived from the generator name)
    root_name: str = ""

    # Add generation comment at top of file
    add_generation_comment: bool = True

    # Module the generated code imports Field, Tag, Rec, Left and Right from
    runtime_module: str = "json_spec"

    # Suffix appended to the alias of every recursive binder
    alias_suffix: str = ""

    @staticmethod
    def from_dict(d: dict) -> GeneratorConfig:
        """Create a config from a dictionary. Unknown keys are ignored."""
        config = GeneratorConfig()
        for k, v in d.items():
            if hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "root_name": self.root_name,
            "add_generation_comment": self.add_generation_comment,
            "runtime_module": self.runtime_module,
            "alias_suffix": self.alias_suffix,
        }
