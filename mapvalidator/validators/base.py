"""Base classes for validation results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable


class Severity(str, Enum):
    """Severity level of a validation issue."""

    NONE = "none"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def rank(self) -> int:
        """Position in the total order NONE < INFO < WARNING < ERROR."""
        return _SEVERITY_RANK[self]

    @property
    def label(self) -> str:
        """Capitalized name used in reports ("Error", "Warning", ...)."""
        return self.value.capitalize()


_SEVERITY_RANK = {
    Severity.NONE: 0,
    Severity.INFO: 1,
    Severity.WARNING: 2,
    Severity.ERROR: 3,
}


def more_severe(a: Severity, b: Severity) -> Severity:
    """Return whichever of two severities is more severe."""
    return a if a.rank >= b.rank else b


def combine(severities: Iterable[Severity]) -> Severity:
    """Fold severities into the most severe one (NONE for no input)."""
    result = Severity.NONE
    for severity in severities:
        result = more_severe(result, severity)
    return result


class Primitive(str, Enum):
    """Kind of map element an issue points at."""

    POINT = "point"
    LINESTRING = "linestring"
    POLYGON = "polygon"
    LANELET = "lanelet"
    AREA = "area"
    REGULATORY_ELEMENT = "regulatory_element"
    PRIMITIVE = "primitive"


def issue_code(validator_name: str, number: int) -> str:
    """Build an issue code like ``CorrectFacing-004``.

    The prefix is the last dotted segment of the validator name in upper
    camel case.
    """
    last = validator_name.rsplit(".", 1)[-1]
    camel = "".join(part[:1].upper() + part[1:] for part in last.split("_") if part)
    return f"{camel}-{number:03d}"


@dataclass(frozen=True)
class ValidationIssue:
    """A single validation issue."""

    severity: Severity
    primitive: Primitive
    id: int
    message: str
    code: str | None = None

    def __str__(self) -> str:
        code = f"[{self.code}] " if self.code else ""
        return (
            f"{self.severity.label} - {self.primitive.value} {self.id}: "
            f"{code}{self.message}"
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize in the layout of the results file."""
        return {
            "severity": self.severity.label,
            "primitive": self.primitive.value,
            "id": self.id,
            "issue_code": self.code,
            "message": self.message,
        }


@dataclass
class ValidationResult:
    """Issues produced by one or more validators."""

    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def errors(self) -> list[ValidationIssue]:
        """Get all error-level issues."""
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        """Get all warning-level issues."""
        return [i for i in self.issues if i.severity == Severity.WARNING]

    @property
    def is_valid(self) -> bool:
        """Check if no issue at all was found."""
        return not self.issues

    @property
    def max_severity(self) -> Severity:
        """The most severe issue severity, NONE when there are no issues."""
        return combine(issue.severity for issue in self.issues)

    def add_error(
        self,
        primitive: Primitive,
        primitive_id: int,
        message: str,
        code: str | None = None,
    ) -> None:
        """Add an error issue."""
        self.issues.append(
            ValidationIssue(Severity.ERROR, primitive, primitive_id, message, code)
        )

    def add_warning(
        self,
        primitive: Primitive,
        primitive_id: int,
        message: str,
        code: str | None = None,
    ) -> None:
        """Add a warning issue."""
        self.issues.append(
            ValidationIssue(Severity.WARNING, primitive, primitive_id, message, code)
        )
