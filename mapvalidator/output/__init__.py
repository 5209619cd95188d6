"""Output formatting."""

from .formatter import format_requirements_report, format_validation_results

__all__ = ["format_requirements_report", "format_validation_results"]
