"""Definition loader for the font set JSON file.

This module provides load_definition for reading the font set definition
into a FontSetDefinition.
"""

from pathlib import Path

from pydantic import ValidationError

from fontpatch.domain.definition import FontSetDefinition
from fontpatch.exceptions import DefinitionNotFoundError, DefinitionParseError


def load_definition(path: Path) -> FontSetDefinition:
    """Load a font set definition.

    Unknown fields are ignored. Reading is the only side effect.

    Args:
        path: Path to the definition JSON file

    Returns:
        The parsed definition

    Raises:
        DefinitionNotFoundError: If no definition file exists
        DefinitionParseError: If the file cannot be read or decoded
    """
    if not path.is_file():
        raise DefinitionNotFoundError(str(path))

    try:
        raw = path.read_bytes()
    except FileNotFoundError:
        raise DefinitionNotFoundError(str(path)) from None
    except OSError as e:
        raise DefinitionParseError(str(path), str(e)) from e

    try:
        return FontSetDefinition.model_validate_json(raw)
    except ValidationError as e:
        raise DefinitionParseError(str(path), _summarize(e)) from e


def _summarize(error: ValidationError) -> str:
    """Condense a validation error into one line."""
    parts = []
    for item in error.errors():
        location = ".".join(str(p) for p in item["loc"]) or "<root>"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)
