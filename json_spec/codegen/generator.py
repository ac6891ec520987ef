"""
Python code generator.

Renders the structure derived from a specification as a Python module of
type aliases, so static type checkers enforce the shape of every value
built for it. Each recursive binder becomes a named alias and is referred
to through a quoted Rec["Alias"] forward reference.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

import jinja2

from .. import __version__
from ..specification.nodes import Specification
from ..structure.derive import json_structure
from ..structure.types import (
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
from ..utils import snake_to_pascal_case, to_identifier
from .config import GeneratorConfig
from .name_resolver import NameResolver

logger = logging.getLogger(__name__)

CURRENT_DIR = Path(__file__).parent.parent.resolve().absolute()


@dataclass
class AliasDef:
    """A generated type alias."""

    name: str = ""
    annotation: str = ""
    # Binder name the alias was generated for
    binder: str = ""


class PythonGenerator:
    """Generates a Python module of type aliases from a specification."""

    TYPE_MAP = {
        TextType: "str",
        DecimalType: "decimal.Decimal",
        IntType: "int",
        BoolType: "bool",
        TimestampType: "datetime.datetime",
    }

    def __init__(self, name: str, spec: Specification, config: GeneratorConfig | None = None):
        """
        Initialize the generator.

        Args:
            name: Name of the specification (used for the root alias)
            spec: The specification to generate code for
            config: Code generation configuration
        """
        self.name = name
        self.spec = spec
        self.config = config or GeneratorConfig()

        self.jinja_env = jinja2.Environment(lstrip_blocks=True, trim_blocks=True)
        self.jinja_env.filters["snake_to_pascal"] = snake_to_pascal_case
        self.module_template = self.jinja_env.from_string(
            (CURRENT_DIR / "templates" / "python" / "module.py.jinja2").read_text(encoding="utf-8")
        )

        # Reset on every generate() call
        self.names: NameResolver | None = None
        self.runtime_imports: set[str] = set()
        self.module_imports: set[str] = set()
        self.typing_imports: set[str] = set()
        self._pending: list[RecursionWrapper] = []

    def generate(self, command_line: str = "") -> str:
        """
        Generate the Python module.

        Args:
            command_line: Command line shown in the generation comment

        Returns:
            Python source code

        Raises:
            SpecificationError: If the specification is ill-formed
        """
        structure = json_structure(self.spec)

        self.runtime_imports = set()
        self.module_imports = set()
        self.typing_imports = {"TypeAlias"}
        self._pending = []
        self.names = NameResolver(self.config.alias_suffix)

        wanted_root_name = to_identifier(self.config.root_name or self.name)
        root_annotation = self.translate_type(structure)

        # Every wrapper reached so far may reach further wrappers through its payload
        aliases: list[AliasDef] = []
        seen: set[int] = set()
        root_alias = None
        while self._pending:
            wrapper = self._pending.pop(0)
            if id(wrapper) in seen:
                continue
            seen.add(id(wrapper))
            alias = AliasDef(
                name=self.names.name_for(wrapper),
                annotation=self.translate_type(wrapper.payload),
                binder=wrapper.name,
            )
            aliases.append(alias)
            if wrapper.payload is structure and alias.name == wanted_root_name:
                root_alias = alias

        if root_alias is not None:
            # The root is a recursive binder of the same name: its alias is the root
            root_name = root_alias.name
            root_annotation = ""
        else:
            root_name = self.names.reserve(wanted_root_name)

        logger.debug("Generated %d recursive aliases for %s", len(aliases), root_name)

        return self.module_template.render(
            generation_comment=self._generation_comment(command_line),
            spec_name=self.name,
            root_name=root_name,
            root_annotation=root_annotation,
            aliases=aliases,
            module_imports=sorted(self.module_imports),
            typing_imports=sorted(self.typing_imports),
            runtime_module=self.config.runtime_module,
            runtime_imports=sorted(self.runtime_imports),
        )

    def translate_type(self, structure: StructureType) -> str:
        """
        Translate a structure to a Python type expression.

        Args:
            structure: The structure descriptor

        Returns:
            Python type expression string
        """
        atom = self.TYPE_MAP.get(type(structure))
        if atom is not None:
            if "." in atom:
                self.module_imports.add(atom.split(".")[0])
            return atom

        if isinstance(structure, UnitType):
            return "tuple[()]"

        if isinstance(structure, FieldsType):
            self.runtime_imports.add("Field")
            self.typing_imports.add("Literal")
            key = json.dumps(structure.key)
            value = self.translate_type(structure.value_type)
            rest = self.translate_type(structure.rest)
            return f"tuple[Field[Literal[{key}], {value}], {rest}]"

        if isinstance(structure, ListType):
            return f"list[{self.translate_type(structure.element)}]"

        if isinstance(structure, MaybeType):
            return f"{self.translate_type(structure.inner)} | None"

        if isinstance(structure, EitherType):
            self.runtime_imports.update({"Left", "Right"})
            left = self.translate_type(structure.left)
            right = self.translate_type(structure.right)
            return f"Left[{left}] | Right[{right}]"

        if isinstance(structure, TagType):
            self.runtime_imports.add("Tag")
            self.typing_imports.add("Literal")
            return f"Tag[Literal[{json.dumps(structure.literal)}]]"

        if isinstance(structure, RecursionWrapper):
            self.runtime_imports.add("Rec")
            self._pending.append(structure)
            return f'Rec["{self.names.name_for(structure)}"]'

        raise TypeError(f"Unsupported structure: {structure!r}")

    def _generation_comment(self, command_line: str) -> str:
        if not self.config.add_generation_comment:
            return ""
        return f"Generated by json_spec v{__version__} : {command_line or 'json_spec generate'}"
