"""Tests for input error reporting."""

import pytest

from mapvalidator.schema.errors import InputError, SchemaLoadError, SchemaValidationError
from mapvalidator.schema.loader import parse_map_from_string


class TestDescribe:
    def test_load_error(self):
        error = SchemaLoadError("File not found: map.yaml", "map.yaml")

        assert error.path == "map.yaml"
        assert error.describe() == ["Error loading file: File not found: map.yaml"]

    def test_validation_error_lists_each_problem(self):
        error = SchemaValidationError(
            "Map references failed with 2 error(s)",
            [
                {"loc": "lanelets.100.left", "msg": "unknown linestring 9", "type": "reference"},
                {"loc": "points", "msg": "duplicate id 1", "type": "duplicate"},
            ],
        )

        assert error.describe() == [
            "Schema validation error: Map references failed with 2 error(s)",
            "  - lanelets.100.left: unknown linestring 9",
            "  - points: duplicate id 1",
        ]

    def test_validation_error_without_details(self):
        error = SchemaValidationError("bad")

        assert error.errors == []
        assert error.describe() == ["Schema validation error: bad"]

    def test_loader_errors_share_a_base(self):
        with pytest.raises(InputError) as exc_info:
            parse_map_from_string("lanelets: [{id: 1}]")

        assert isinstance(exc_info.value, SchemaValidationError)
        assert exc_info.value.describe()[0].startswith("Schema validation error")
