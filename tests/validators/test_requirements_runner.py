"""Tests for running requirements files and writing results."""

import json

import pytest

from mapvalidator.config import RESULTS_FILENAME
from mapvalidator.schema.errors import SchemaLoadError
from mapvalidator.validators.runner import (
    load_map,
    process_requirements_file,
    results_to_dict,
    validate_map_file,
)


@pytest.fixture
def requirements_file(examples_dir):
    return examples_dir / "requirements" / "autoware_requirements_set.json"


class TestValidateMapFile:
    def test_correct_map(self, examples_dir):
        results = validate_map_file(examples_dir / "maps" / "traffic_light_correct.yaml")

        assert len(results) == 5
        assert all(r.is_valid for r in results.values())

    def test_wrong_map(self, examples_dir):
        results = validate_map_file(
            examples_dir / "maps" / "traffic_light_wrong.yaml", "*.correct_facing"
        )

        issues = results["mapping.traffic_light.correct_facing"].issues
        assert [i.code for i in issues] == ["CorrectFacing-004"]


class TestProcessRequirementsFile:
    def test_all_requirements_pass(self, examples_dir, requirements_file, tmp_path):
        lanelet_map = load_map(examples_dir / "maps" / "traffic_light_correct.yaml")

        report = process_requirements_file(requirements_file, lanelet_map, output_dir=tmp_path)

        assert report.passed
        assert report.issue_count == 0
        assert (tmp_path / RESULTS_FILENAME).exists()

    def test_results_file_content(self, examples_dir, requirements_file, tmp_path):
        lanelet_map = load_map(examples_dir / "maps" / "traffic_light_wrong.yaml")
        output_dir = tmp_path / "nested" / "out"

        process_requirements_file(requirements_file, lanelet_map, output_dir=output_dir)

        data = json.loads((output_dir / RESULTS_FILENAME).read_text())
        passed = {r["id"]: r["passed"] for r in data["requirements"]}
        assert passed == {"vm-02-02": True, "vm-04-01": False, "vm-05-01": True}

        facing = data["requirements"][1]["validators"][2]
        assert facing["name"] == "mapping.traffic_light.correct_facing"
        assert facing["passed"] is False
        assert facing["issues"] == [
            {
                "severity": "Error",
                "primitive": "linestring",
                "id": 14,
                "issue_code": "CorrectFacing-004",
                "message": "The linestring direction of this traffic light facing "
                "seems to be opposite.",
            }
        ]
        assert facing["prerequisites"][1]["forgive_warnings"] is True
        assert data["requirements"][1]["issues"] == facing["issues"]

        assert [i["validator"] for i in data["issues"]] == [
            "mapping.traffic_light.correct_facing"
        ]

    def test_no_output_dir(self, examples_dir, requirements_file, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        lanelet_map = load_map(examples_dir / "maps" / "traffic_light_correct.yaml")

        report = process_requirements_file(requirements_file, lanelet_map)

        assert report.passed
        assert list(tmp_path.iterdir()) == []

    def test_missing_requirements_file(self, traffic_light_map, tmp_path):
        with pytest.raises(SchemaLoadError):
            process_requirements_file(tmp_path / "missing.json", traffic_light_map)

    def test_results_keep_unknown_fields(self, traffic_light_map, tmp_path):
        path = tmp_path / "requirements.yaml"
        path.write_text("""
version: 2
requirements:
  - id: r1
    description: Stop lines are used
    validators:
      - name: mapping.stop_line.missing_regulatory_elements
""")

        report = process_requirements_file(path, traffic_light_map)
        data = results_to_dict(report)

        assert data["version"] == 2
        assert data["requirements"][0]["description"] == "Stop lines are used"
        assert data["requirements"][0]["passed"] is True
        assert data["issues"] == []
