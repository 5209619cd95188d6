"""Validation runner that ties loading, validators and output together."""

import json
from pathlib import Path

from loguru import logger

from ..config import RESULTS_FILENAME, ValidatorParameters
from ..map.builder import build_map_graph
from ..map.map_graph import LaneletMapGraph
from ..schema.loader import parse_map, parse_requirements
from .base import ValidationResult
from .registry import validate_map
from .scheduler import RequirementsReport, process_requirements


def load_map(path: str | Path) -> LaneletMapGraph:
    """Load a map document and build its graph.

    Raises:
        SchemaLoadError: If the file cannot be loaded.
        SchemaValidationError: If the map fails schema or reference validation.
    """
    lanelet_map = build_map_graph(parse_map(path))
    logger.info("Loaded map {}: {}", path, lanelet_map.summary())
    return lanelet_map


def validate_map_file(
    path: str | Path,
    checks_filter: str = "",
    parameters: ValidatorParameters | None = None,
) -> dict[str, ValidationResult]:
    """Load a map file and run the validators selected by a filter.

    Raises:
        SchemaLoadError: If the file cannot be loaded.
        SchemaValidationError: If the map fails validation.
    """
    return validate_map(load_map(path), checks_filter, parameters)


def process_requirements_file(
    requirements_path: str | Path,
    lanelet_map: LaneletMapGraph,
    parameters: ValidatorParameters | None = None,
    output_dir: str | Path | None = None,
) -> RequirementsReport:
    """Load a requirements file and run its validators against a map.

    The requirements file is read before anything is scheduled, so an
    unreadable file aborts without running any validator.

    Args:
        requirements_path: Path to the requirements document.
        lanelet_map: The map to validate.
        parameters: Validator parameters.
        output_dir: If given, the annotated results are written there.

    Raises:
        SchemaLoadError: If the requirements file cannot be loaded.
        SchemaValidationError: If it fails schema validation.
    """
    document = parse_requirements(requirements_path)
    report = process_requirements(document, lanelet_map, parameters)

    if output_dir is not None:
        write_results(report, output_dir)

    return report


def results_to_dict(report: RequirementsReport) -> dict:
    """Build the results file content.

    The annotated requirements document plus a flat ``issues`` stream in
    which every issue names its validator.
    """
    data = report.document.model_dump(mode="json", exclude_none=True)
    data["issues"] = [
        {"validator": name, **issue.to_dict()} for name, issue in report.issues
    ]
    return data


def write_results(report: RequirementsReport, output_dir: str | Path) -> Path:
    """Write the results file into a directory, creating it if needed.

    Returns:
        Path of the written file.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / RESULTS_FILENAME

    with open(path, "w", encoding="utf-8") as f:
        json.dump(results_to_dict(report), f, indent=2)

    logger.info("Results written to {}", path)
    return path
