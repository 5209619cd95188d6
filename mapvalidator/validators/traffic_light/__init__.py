"""Traffic light validators."""

from .facing import check_traffic_light_facing
from .missing_referrers import check_missing_referrers
from .regulatory_element_details import check_regulatory_element_details

__all__ = [
    "check_traffic_light_facing",
    "check_missing_referrers",
    "check_regulatory_element_details",
]
