"""Tests for map and requirements document models."""

from mapvalidator.schema.models import (
    LaneletMapDocument,
    RegulatoryElement,
    RequirementsDocument,
    ValidatorEntry,
)


class TestMapModels:
    def test_attributes_are_stringified(self):
        doc = LaneletMapDocument.model_validate(
            {
                "linestrings": [
                    {"id": 1, "points": [], "attributes": {"type": "traffic_light", "height": 0.5}}
                ]
            }
        )

        assert doc.linestrings[0].attributes["height"] == "0.5"

    def test_single_parameter_normalized_to_list(self):
        reg_elem = RegulatoryElement.model_validate(
            {"id": 5, "parameters": {"refers": 3, "ref_line": [4, 6]}}
        )

        assert reg_elem.parameters == {"refers": [3], "ref_line": [4, 6]}

    def test_point_default_height(self):
        doc = LaneletMapDocument.model_validate({"points": [{"id": 1, "x": 1, "y": 2}]})

        assert doc.points[0].z == 0.0


class TestRequirementsModels:
    def test_bare_prerequisite_names(self):
        entry = ValidatorEntry.model_validate(
            {"name": "a", "prerequisites": ["b", {"name": "c", "forgive_warnings": True}]}
        )

        assert [p.name for p in entry.prerequisites] == ["b", "c"]
        assert entry.prerequisites[0].forgive_warnings is False
        assert entry.prerequisites[1].forgive_warnings is True

    def test_unknown_keys_are_preserved(self):
        doc = RequirementsDocument.model_validate(
            {
                "version": "1.0",
                "requirements": [
                    {"id": "r1", "description": "text", "validators": []}
                ],
            }
        )

        dumped = doc.model_dump(exclude_none=True)
        assert dumped["version"] == "1.0"
        assert dumped["requirements"][0]["description"] == "text"
