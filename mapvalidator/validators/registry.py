"""Registry of map validators.

Validators are plain functions taking the map graph and the validator
parameters and returning a ValidationResult. They register themselves under a
dotted name (``mapping.traffic_light.correct_facing``) with the
``register_validator`` decorator when their module is imported.

Checks are selected with a filter: a comma-separated list of shell-style
patterns such as ``mapping.traffic_light.*``. An empty filter selects every
registered check.
"""

from collections.abc import Callable
from fnmatch import fnmatchcase

from loguru import logger

from ..config import ValidatorParameters
from ..geometry import GeometryError
from ..map.map_graph import LaneletMapGraph
from .base import Primitive, ValidationResult

ValidatorFunc = Callable[[LaneletMapGraph, ValidatorParameters], ValidationResult]

_VALIDATOR_REGISTRY: dict[str, ValidatorFunc] = {}


def register_validator(name: str) -> Callable[[ValidatorFunc], ValidatorFunc]:
    """Register a validator function under a name.

    Raises:
        ValueError: If the name is already registered.
    """

    def decorator(func: ValidatorFunc) -> ValidatorFunc:
        if name in _VALIDATOR_REGISTRY:
            raise ValueError(f"Validator '{name}' is already registered.")
        _VALIDATOR_REGISTRY[name] = func
        logger.debug("Registered validator '{}'", name)
        return func

    return decorator


def get_validator(name: str) -> ValidatorFunc:
    """Retrieve a validator by name.

    Raises:
        KeyError: If the name is not registered.
    """
    if name not in _VALIDATOR_REGISTRY:
        known = ", ".join(sorted(_VALIDATOR_REGISTRY))
        raise KeyError(f"Unknown validator '{name}'. Available validators: {known}")
    return _VALIDATOR_REGISTRY[name]


def matches_filter(name: str, checks_filter: str) -> bool:
    """Check if a validator name is selected by a filter."""
    patterns = [p.strip() for p in checks_filter.split(",") if p.strip()]
    if not patterns:
        return True
    return any(fnmatchcase(name, pattern) for pattern in patterns)


def available_checks(checks_filter: str = "") -> list[str]:
    """Get the registered validator names selected by a filter, sorted."""
    return sorted(
        name for name in _VALIDATOR_REGISTRY if matches_filter(name, checks_filter)
    )


def run_validator(
    name: str,
    lanelet_map: LaneletMapGraph,
    parameters: ValidatorParameters | None = None,
) -> ValidationResult:
    """Run a single validator.

    A GeometryError escaping the validator becomes one Error issue on the
    offending primitive. Any other exception becomes one Error issue on the
    validator as a whole. Neither aborts the pass.
    """
    func = get_validator(name)
    parameters = parameters or ValidatorParameters()

    logger.info("Running validator '{}'", name)
    try:
        result = func(lanelet_map, parameters)
    except GeometryError as e:
        logger.warning("Validator '{}' hit degenerate geometry: {}", name, e)
        result = ValidationResult()
        result.add_error(
            Primitive.PRIMITIVE if e.primitive_id is None else Primitive.LINESTRING,
            e.primitive_id or 0,
            str(e),
        )
    except Exception as e:
        logger.exception("Validator '{}' failed", name)
        result = ValidationResult()
        result.add_error(
            Primitive.PRIMITIVE,
            0,
            f"Validator failed with {type(e).__name__}: {e}",
        )

    logger.debug("Validator '{}' produced {} issue(s)", name, len(result.issues))
    return result


def validate_map(
    lanelet_map: LaneletMapGraph,
    checks_filter: str = "",
    parameters: ValidatorParameters | None = None,
) -> dict[str, ValidationResult]:
    """Run every validator selected by a filter.

    Returns:
        Validator name to its result, in sorted name order.
    """
    return {
        name: run_validator(name, lanelet_map, parameters)
        for name in available_checks(checks_filter)
    }
