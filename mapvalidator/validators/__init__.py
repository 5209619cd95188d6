"""Map validators and the requirement scheduler.

Importing this package registers every bundled validator.
"""

from .base import (
    Primitive,
    Severity,
    ValidationIssue,
    ValidationResult,
    combine,
    issue_code,
    more_severe,
)
from .registry import (
    available_checks,
    get_validator,
    register_validator,
    run_validator,
    validate_map,
)
from .intersection import check_turn_direction_tagging
from .stop_line import check_missing_regulatory_elements_for_stop_lines
from .traffic_light import (
    check_missing_referrers,
    check_regulatory_element_details,
    check_traffic_light_facing,
)
from .scheduler import RequirementsReport, process_requirements, topological_order
from .runner import load_map, process_requirements_file, validate_map_file

__all__ = [
    "Primitive",
    "Severity",
    "ValidationIssue",
    "ValidationResult",
    "combine",
    "issue_code",
    "more_severe",
    "available_checks",
    "get_validator",
    "register_validator",
    "run_validator",
    "validate_map",
    "check_turn_direction_tagging",
    "check_missing_regulatory_elements_for_stop_lines",
    "check_missing_referrers",
    "check_regulatory_element_details",
    "check_traffic_light_facing",
    "RequirementsReport",
    "process_requirements",
    "topological_order",
    "load_map",
    "process_requirements_file",
    "validate_map_file",
]
