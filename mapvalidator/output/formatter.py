"""Output formatting for validation results."""

import json
from typing import Literal

from ..validators.base import Severity, ValidationIssue, ValidationResult
from ..validators.runner import results_to_dict
from ..validators.scheduler import RequirementsReport


def format_validation_results(
    results: dict[str, ValidationResult],
    format: Literal["text", "json"] = "text",
) -> str:
    """Format single-pass results for output.

    Args:
        results: Validator name to its result.
        format: Output format ("text" or "json").

    Returns:
        Formatted string representation.
    """
    if format == "json":
        return _format_json(results)
    return _format_text(results)


def _format_text(results: dict[str, ValidationResult]) -> str:
    """Format results as human-readable text, grouped by validator."""
    lines: list[str] = []

    for name, result in results.items():
        lines.append(f"{name}:")
        if result.issues:
            for issue in result.issues:
                lines.append(f"  {_format_issue_text(issue)}")
        else:
            lines.append("  (no issues)")
        lines.append("")

    errors = sum(len(r.errors) for r in results.values())
    warnings = sum(len(r.warnings) for r in results.values())
    total = sum(len(r.issues) for r in results.values())

    if total == 0:
        lines.append(f"Validation passed ({len(results)} check(s))")
    else:
        lines.append(
            f"Validation failed: {errors} error(s), {warnings} warning(s)"
        )

    return "\n".join(lines)


def _format_issue_text(issue: ValidationIssue) -> str:
    """Format a single issue as text."""
    if issue.severity == Severity.ERROR:
        symbol = "✘"
    elif issue.severity == Severity.WARNING:
        symbol = "⚠"
    else:
        symbol = "ℹ"

    return f"{symbol} {issue}"


def _format_json(results: dict[str, ValidationResult]) -> str:
    """Format results as JSON."""
    data = {
        "valid": all(r.is_valid for r in results.values()),
        "error_count": sum(len(r.errors) for r in results.values()),
        "warning_count": sum(len(r.warnings) for r in results.values()),
        "validators": [
            {
                "name": name,
                "passed": result.is_valid,
                "issues": [issue.to_dict() for issue in result.issues],
            }
            for name, result in results.items()
        ],
    }
    return json.dumps(data, indent=2)


def format_requirements_report(
    report: RequirementsReport,
    format: Literal["text", "json"] = "text",
) -> str:
    """Format the outcome of a requirements run.

    The text form lists every requirement as passed or failed, the issues of
    its failing validators, and a summary with the global counts.
    """
    if format == "json":
        return json.dumps(results_to_dict(report), indent=2)

    lines: list[str] = []
    for requirement in report.document.requirements:
        status = "Passed" if requirement.passed else "Failed"
        lines.append(f"{requirement.id}: {status}")
        for entry in requirement.validators:
            state = report.validators[entry.name]
            if state.passed:
                continue
            lines.append(f"  {entry.name}:")
            for issue in state.issues:
                lines.append(f"    {_format_issue_text(issue)}")

    lines.append("")
    lines.append(
        f"{report.error_count} error(s), {report.warning_count} warning(s) "
        f"in {len(report.validators)} validator(s)"
    )
    lines.append("All requirements passed" if report.passed else "Some requirements failed")

    return "\n".join(lines)
