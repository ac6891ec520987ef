"""
Utility functions for json_spec.
"""

import keyword
import re

# Regex pattern to split text into words, handling camelCase boundaries
_WORD_PATTERN = re.compile(r"[a-z]+|[A-Z][a-z]*|[0-9]+")


def _normalize_separators(text: str) -> str:
    """Normalize separators (underscores, hyphens, dots) to spaces."""
    return text.replace("_", " ").replace("-", " ").replace(".", " ")


def _split_into_words(text: str) -> list[str]:
    """Split text into words, handling camelCase boundaries."""
    return _WORD_PATTERN.findall(text)


def snake_to_pascal_case(text: str) -> str:
    """Convert snake_case, camelCase, or space-separated text to PascalCase.

    Examples:
        "labelled_tree" -> "LabelledTree"
        "LabelledTree" -> "LabelledTree"
        "vertex-3d" -> "Vertex3D"
        "HTTPCode" -> "HTTPCode"

    Args:
        text: The text to convert

    Returns:
        PascalCase string
    """
    if not text:
        return ""
    words = _split_into_words(_normalize_separators(text))
    return "".join(word.capitalize() for word in words if word)


def to_identifier(text: str, fallback: str = "Structure") -> str:
    """Convert arbitrary text to a PascalCase Python identifier.

    Names that start with a digit or are empty get the fallback as prefix.
    """
    name = snake_to_pascal_case(text)
    if not name or name[0].isdigit():
        name = fallback + name
    if keyword.iskeyword(name):
        name = name + "_"
    return name
