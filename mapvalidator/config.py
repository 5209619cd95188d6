"""Run configuration and validator parameters."""

import math
from pathlib import Path

from pydantic import BaseModel, Field

from .map.node_types import AttributeValue
from .schema.errors import SchemaLoadError
from .schema.loader import load_document, validate_data

# Name of the results file written next to the annotated requirements.
RESULTS_FILENAME = "lanelet2_validation_results.json"


class ValidatorParameters(BaseModel):
    """Tunable parameters shared by the validators."""

    facing_angle_tolerance_deg: float = Field(default=10.0, gt=0.0, lt=90.0)
    intersection_area_type: str = AttributeValue.INTERSECTION_AREA

    @property
    def facing_sine_tolerance(self) -> float:
        """The facing tolerance as a distance on the sine axis."""
        return math.sin(math.radians(self.facing_angle_tolerance_deg))


class MetaConfig(BaseModel):
    """Everything a validation run needs, as given on the command line."""

    map_file: Path
    requirements_file: Path | None = None
    output_dir: Path | None = None
    checks_filter: str = ""
    parameters: ValidatorParameters = Field(default_factory=ValidatorParameters)


def load_parameters(path: str | Path) -> ValidatorParameters:
    """Load validator parameters from a YAML file.

    Both a flat mapping and the ROS-style ``/**: ros__parameters:`` wrapper
    are accepted.

    Raises:
        SchemaLoadError: If the file cannot be read or parsed.
        SchemaValidationError: If a parameter is out of range.
    """
    data = load_document(path)

    if "/**" in data:
        wrapper = data["/**"]
        if not isinstance(wrapper, dict) or not isinstance(
            wrapper.get("ros__parameters"), dict
        ):
            raise SchemaLoadError("Expected '/**: ros__parameters:' mapping", str(path))
        data = wrapper["ros__parameters"]

    return validate_data(ValidatorParameters, data)
