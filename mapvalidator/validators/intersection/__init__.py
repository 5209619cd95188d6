"""Intersection validators."""

from .turn_direction_tagging import check_turn_direction_tagging

__all__ = ["check_turn_direction_tagging"]
