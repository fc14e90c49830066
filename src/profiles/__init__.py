"""
Marker profiles: ROI rectangles and HSV bounds per game layout.
"""

from .registry import (
    FAMILY_BOUNDS,
    PROFILES,
    ProfileNotFound,
    bounds_for,
    get_profile,
    list_profiles,
)

__all__ = [
    "FAMILY_BOUNDS",
    "PROFILES",
    "ProfileNotFound",
    "bounds_for",
    "get_profile",
    "list_profiles",
]
