"""Stop line validators."""

from .missing_regulatory_elements import check_missing_regulatory_elements_for_stop_lines

__all__ = ["check_missing_regulatory_elements_for_stop_lines"]
