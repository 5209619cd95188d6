"""Schema layer for parsing map and requirements documents."""

from .errors import InputError, SchemaLoadError, SchemaValidationError
from .models import (
    IssueRecord,
    Lanelet,
    LaneletMapDocument,
    LineString,
    Point,
    Polygon,
    Prerequisite,
    RegulatoryElement,
    Requirement,
    RequirementsDocument,
    ValidatorEntry,
)
from .loader import (
    load_document,
    parse_map,
    parse_map_from_string,
    parse_requirements,
    parse_requirements_from_string,
    validate_data,
)

__all__ = [
    "InputError",
    "SchemaLoadError",
    "SchemaValidationError",
    "IssueRecord",
    "Lanelet",
    "LaneletMapDocument",
    "LineString",
    "Point",
    "Polygon",
    "Prerequisite",
    "RegulatoryElement",
    "Requirement",
    "RequirementsDocument",
    "ValidatorEntry",
    "load_document",
    "parse_map",
    "parse_map_from_string",
    "parse_requirements",
    "parse_requirements_from_string",
    "validate_data",
]
