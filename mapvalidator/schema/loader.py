"""YAML/JSON loading and parsing for map and requirements documents."""

import json
from pathlib import Path
from typing import TypeVar

import yaml
from loguru import logger
from pydantic import BaseModel, ValidationError

from .errors import SchemaLoadError, SchemaValidationError
from .models import LaneletMapDocument, RequirementsDocument

ModelT = TypeVar("ModelT", bound=BaseModel)


def load_document(path: str | Path) -> dict:
    """Load a YAML or JSON file and return the raw data.

    JSON is a subset of YAML, but ``.json`` files go through the json module
    so that error messages point at JSON syntax.

    Args:
        path: Path to the document.

    Returns:
        The parsed data as a dictionary.

    Raises:
        SchemaLoadError: If the file cannot be read or parsed.
    """
    path = Path(path)

    if not path.exists():
        raise SchemaLoadError(f"File not found: {path}", str(path))

    if not path.is_file():
        raise SchemaLoadError(f"Not a file: {path}", str(path))

    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except json.JSONDecodeError as e:
        raise SchemaLoadError(f"Invalid JSON: {e}", str(path)) from e
    except yaml.YAMLError as e:
        raise SchemaLoadError(f"Invalid YAML: {e}", str(path)) from e
    except OSError as e:
        raise SchemaLoadError(f"Cannot read file: {e}", str(path)) from e

    logger.debug("Loaded document {}", path)
    return _ensure_mapping(data, str(path))


def parse_map(path: str | Path) -> LaneletMapDocument:
    """Load and parse a map document.

    Raises:
        SchemaLoadError: If the file cannot be read or parsed.
        SchemaValidationError: If the data fails validation.
    """
    return validate_data(LaneletMapDocument, load_document(path))


def parse_map_from_string(text: str) -> LaneletMapDocument:
    """Parse a YAML (or JSON) string into a LaneletMapDocument."""
    return validate_data(LaneletMapDocument, _load_string(text))


def parse_requirements(path: str | Path) -> RequirementsDocument:
    """Load and parse a requirements document.

    Raises:
        SchemaLoadError: If the file cannot be read or parsed.
        SchemaValidationError: If the data fails validation.
    """
    return validate_data(RequirementsDocument, load_document(path))


def parse_requirements_from_string(text: str) -> RequirementsDocument:
    """Parse a YAML (or JSON) string into a RequirementsDocument."""
    return validate_data(RequirementsDocument, _load_string(text))


def _load_string(text: str) -> dict:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise SchemaLoadError(f"Invalid YAML: {e}") from e

    return _ensure_mapping(data)


def _ensure_mapping(data: object, path: str | None = None) -> dict:
    if data is None:
        return {}

    if not isinstance(data, dict):
        raise SchemaLoadError(
            f"Expected mapping at root, got {type(data).__name__}", path
        )

    return data


def validate_data(model: type[ModelT], data: dict) -> ModelT:
    """Validate raw data against a model.

    Raises:
        SchemaValidationError: If the data fails validation.
    """
    try:
        return model.model_validate(data)
    except ValidationError as e:
        errors = [
            {
                "loc": ".".join(str(x) for x in err["loc"]),
                "msg": err["msg"],
                "type": err["type"],
            }
            for err in e.errors()
        ]
        raise SchemaValidationError(
            f"Schema validation failed with {len(errors)} error(s)", errors
        ) from e
