"""
Specification document parser.

Reads the JSON document form of a specification into Specification
nodes, and writes nodes back to that form:

    "string" | "number" | "integer" | "boolean" | "date-time"
    {"object": [[name, spec], ...]}
    {"array": spec}
    {"nullable": spec}
    {"either": [left, right]}
    {"tag": "literal"}
    {"ref": "Name"}
    {"let": [[name, spec], ...], "in": spec}
"""

from __future__ import annotations

from typing import Any

from ..errors import SpecificationParseError
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
)


class SpecificationParser:
    """Parses specification documents into Specification nodes."""

    ATOMS = {
        "string": JsonString,
        "number": JsonNum,
        "integer": JsonInt,
        "boolean": JsonBool,
        "date-time": JsonDateTime,
    }

    # Keys allowed in each compound form
    FORMS = {
        "object": {"object"},
        "array": {"array"},
        "nullable": {"nullable"},
        "either": {"either"},
        "tag": {"tag"},
        "ref": {"ref"},
        "let": {"let", "in"},
    }

    def parse(self, document: Any, path: str = "#") -> Specification:
        """
        Parse a specification document recursively.

        Args:
            document: The decoded JSON document
            path: Current path in the document (for error messages)

        Returns:
            The Specification node

        Raises:
            SpecificationParseError: If the document is malformed
        """
        if isinstance(document, str):
            return self._parse_atom(document, path)

        if not isinstance(document, dict):
            raise SpecificationParseError(
                f"Expected a string or an object, got {type(document).__name__}",
                path,
            )

        form = self._detect_form(document, path)

        if form == "object":
            return JsonObject(self._parse_pairs(document["object"], f"{path}/object", self._parse_key))
        if form == "array":
            return JsonArray(self.parse(document["array"], f"{path}/array"))
        if form == "nullable":
            return JsonNullable(self.parse(document["nullable"], f"{path}/nullable"))
        if form == "either":
            return self._parse_either(document["either"], f"{path}/either")
        if form == "tag":
            return JsonTag(self._parse_key(document["tag"], f"{path}/tag"))
        if form == "ref":
            return JsonRef(self._parse_name(document["ref"], f"{path}/ref"))

        # let
        bindings = self._parse_pairs(document["let"], f"{path}/let", self._parse_name)
        body = self.parse(document["in"], f"{path}/in")
        return JsonLet(bindings, body)

    def _parse_atom(self, name: str, path: str) -> Specification:
        """Parse one of the atomic type names."""
        atom = self.ATOMS.get(name)
        if atom is None:
            expected = ", ".join(sorted(self.ATOMS))
            raise SpecificationParseError(f"Unknown type '{name}' (expected one of {expected})", path)
        return atom()

    def _detect_form(self, document: dict[str, Any], path: str) -> str:
        """Find which compound form a dict document uses."""
        for form, keys in self.FORMS.items():
            if form in document:
                if set(document) != keys:
                    unexpected = sorted(set(document) - keys)
                    missing = sorted(keys - set(document))
                    details = []
                    if unexpected:
                        details.append(f"unexpected keys {unexpected}")
                    if missing:
                        details.append(f"missing keys {missing}")
                    raise SpecificationParseError(f"Malformed '{form}' form: {', '.join(details)}", path)
                return form
        raise SpecificationParseError(f"Unrecognized specification keys {sorted(document)}", path)

    def _parse_pairs(self, pairs: Any, path: str, parse_name) -> list[tuple[str, Specification]]:
        """Parse an ordered list of [name, spec] pairs, checking names with `parse_name`."""
        if not isinstance(pairs, list):
            raise SpecificationParseError("Expected a list of [name, spec] pairs", path)

        result = []
        for index, pair in enumerate(pairs):
            pair_path = f"{path}/{index}"
            if not isinstance(pair, list) or len(pair) != 2:
                raise SpecificationParseError("Expected a [name, spec] pair", pair_path)
            name = parse_name(pair[0], f"{pair_path}/0")
            result.append((name, self.parse(pair[1], f"{path}/{name}")))
        return result

    def _parse_either(self, alternatives: Any, path: str) -> JsonEither:
        """Parse the two alternatives of an either form."""
        if not isinstance(alternatives, list) or len(alternatives) != 2:
            raise SpecificationParseError("Expected exactly two alternatives", path)
        return JsonEither(
            self.parse(alternatives[0], f"{path}/0"),
            self.parse(alternatives[1], f"{path}/1"),
        )

    def _parse_key(self, value: Any, path: str) -> str:
        # Property names and tag literals may be any JSON string, including ""
        if not isinstance(value, str):
            raise SpecificationParseError("Expected a string", path)
        return value

    def _parse_name(self, value: Any, path: str) -> str:
        if not isinstance(value, str) or not value:
            raise SpecificationParseError("Expected a non-empty string", path)
        return value

    def dump(self, spec: Specification) -> Any:
        """
        Convert a Specification back to its document form.

        Args:
            spec: The specification node

        Returns:
            A JSON-serializable document
        """
        for name, atom in self.ATOMS.items():
            if type(spec) is atom:
                return name

        if isinstance(spec, JsonObject):
            return {"object": [[name, self.dump(s)] for name, s in spec.properties]}
        if isinstance(spec, JsonArray):
            return {"array": self.dump(spec.element)}
        if isinstance(spec, JsonNullable):
            return {"nullable": self.dump(spec.inner)}
        if isinstance(spec, JsonEither):
            return {"either": [self.dump(spec.left), self.dump(spec.right)]}
        if isinstance(spec, JsonTag):
            return {"tag": spec.literal}
        if isinstance(spec, JsonRef):
            return {"ref": spec.name}
        if isinstance(spec, JsonLet):
            return {
                "let": [[name, self.dump(s)] for name, s in spec.bindings],
                "in": self.dump(spec.body),
            }

        raise TypeError(f"Not a specification node: {spec!r}")
