"""Pydantic models for map and requirements documents."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class TaggedPrimitive(BaseModel):
    """A primitive carrying string-keyed attributes."""

    id: int
    attributes: dict[str, str] = Field(default_factory=dict)

    @field_validator("attributes", mode="before")
    @classmethod
    def stringify_attributes(cls, value: Any) -> Any:
        """Coerce attribute values to strings, the way lanelet2 stores them."""
        if not isinstance(value, dict):
            return value
        return {str(key): str(val) for key, val in value.items()}


class Point(BaseModel):
    """A 3D point."""

    id: int
    x: float
    y: float
    z: float = 0.0


class LineString(TaggedPrimitive):
    """An ordered sequence of point ids."""

    points: list[int] = Field(default_factory=list)


class Polygon(TaggedPrimitive):
    """A closed ring of point ids."""

    points: list[int] = Field(default_factory=list)


class Lanelet(TaggedPrimitive):
    """A lane segment bounded by a left and a right linestring."""

    left: int
    right: int
    regulatory_elements: list[int] = Field(default_factory=list)


class RegulatoryElement(TaggedPrimitive):
    """A regulatory element linking lanelets to stop lines, lights and signs."""

    parameters: dict[str, list[int]] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def normalize_parameters(cls, data: Any) -> Any:
        """Normalize single-id roles to lists."""
        if not isinstance(data, dict):
            return data

        parameters = data.get("parameters")
        if isinstance(parameters, dict):
            data["parameters"] = {
                role: ids if isinstance(ids, list) else [ids]
                for role, ids in parameters.items()
            }
        return data


class LaneletMapDocument(BaseModel):
    """Root model for a map document."""

    points: list[Point] = Field(default_factory=list)
    linestrings: list[LineString] = Field(default_factory=list)
    polygons: list[Polygon] = Field(default_factory=list)
    lanelets: list[Lanelet] = Field(default_factory=list)
    regulatory_elements: list[RegulatoryElement] = Field(default_factory=list)


class IssueRecord(BaseModel):
    """Serialized form of a validation issue."""

    severity: str
    primitive: str
    id: int
    issue_code: str | None = None
    message: str


class Prerequisite(BaseModel):
    """A validator that has to pass before another one may run."""

    model_config = ConfigDict(extra="allow")

    name: str
    forgive_warnings: bool = False


class ValidatorEntry(BaseModel):
    """A validator declared inside a requirement."""

    model_config = ConfigDict(extra="allow")

    name: str
    prerequisites: list[Prerequisite] = Field(default_factory=list)
    passed: bool | None = None
    issues: list[IssueRecord] | None = None

    @model_validator(mode="before")
    @classmethod
    def normalize_prerequisites(cls, data: Any) -> Any:
        """Allow prerequisites to be given as bare names."""
        if not isinstance(data, dict):
            return data

        prerequisites = data.get("prerequisites")
        if isinstance(prerequisites, list):
            data["prerequisites"] = [
                {"name": prereq} if isinstance(prereq, str) else prereq
                for prereq in prerequisites
            ]
        return data


class Requirement(BaseModel):
    """A named group of validators that passes when all of them pass."""

    model_config = ConfigDict(extra="allow")

    id: str
    validators: list[ValidatorEntry] = Field(default_factory=list)
    passed: bool | None = None
    issues: list[IssueRecord] | None = None


class RequirementsDocument(BaseModel):
    """Root model for a requirements document."""

    model_config = ConfigDict(extra="allow")

    requirements: list[Requirement] = Field(default_factory=list)
