"""Shared fixtures for tests."""

from pathlib import Path

import pytest

from mapvalidator.config import ValidatorParameters
from mapvalidator.map.builder import build_map_graph
from mapvalidator.schema.loader import parse_map_from_string
from mapvalidator.validators import registry


def build_map(yaml: str):
    """Parse a map document string and build its graph."""
    return build_map_graph(parse_map_from_string(yaml))


@pytest.fixture
def examples_dir() -> Path:
    """Return the path to the examples directory."""
    return Path(__file__).parent.parent / "examples"


@pytest.fixture
def parameters() -> ValidatorParameters:
    """Return default validator parameters."""
    return ValidatorParameters()


@pytest.fixture
def traffic_light_map_yaml() -> str:
    """Return a lane approaching a stop line with a correctly drawn light."""
    return """
points:
  - {id: 1, x: 0.0, y: 2.0}
  - {id: 2, x: 20.0, y: 2.0}
  - {id: 3, x: 0.0, y: -2.0}
  - {id: 4, x: 20.0, y: -2.0}
  - {id: 5, x: 20.0, y: -2.0}
  - {id: 6, x: 20.0, y: 2.0}
  - {id: 7, x: 40.0, y: 2.0, z: 5.0}
  - {id: 8, x: 40.0, y: -2.0, z: 5.0}

linestrings:
  - {id: 11, points: [1, 2], attributes: {type: line_thin}}
  - {id: 12, points: [3, 4], attributes: {type: line_thin}}
  - {id: 13, points: [5, 6], attributes: {type: stop_line}}
  - {id: 14, points: [7, 8], attributes: {type: traffic_light, subtype: red_yellow_green}}

lanelets:
  - {id: 100, left: 11, right: 12, regulatory_elements: [200]}

regulatory_elements:
  - id: 200
    attributes: {type: regulatory_element, subtype: traffic_light}
    parameters:
      refers: [14]
      ref_line: [13]
"""


@pytest.fixture
def traffic_light_map(traffic_light_map_yaml):
    """Return the graph of the correctly drawn traffic light map."""
    return build_map(traffic_light_map_yaml)


@pytest.fixture
def fake_validators(monkeypatch):
    """Register throwaway validators for the duration of a test.

    Usage: ``fake_validators({"name": [issue, ...]})``. Each validator returns
    the given issues; the registry is restored afterwards. Returns the list
    of names in the order they ran.
    """
    from mapvalidator.validators.base import ValidationResult

    calls: list[str] = []

    def register(outcomes: dict):
        for name, issues in outcomes.items():

            def func(lanelet_map, parameters, name=name, issues=issues):
                calls.append(name)
                return ValidationResult(issues=list(issues))

            monkeypatch.setitem(registry._VALIDATOR_REGISTRY, name, func)
        return calls

    return register
