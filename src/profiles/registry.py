"""
Profile registry.

Static table of supported marker profiles and the fixed HSV bounds for each
detection family. OpenCV HSV scale: H 0-180, S 0-255, V 0-255.
"""

from __future__ import annotations

from typing import Dict, List

from models.profile import DetectionFamily, HsvBounds, Profile, Roi


class ProfileNotFound(LookupError):
    """Raised when a profile id is not in the registry."""

    def __init__(self, profile_id: str):
        super().__init__(f"Profile not found: {profile_id}")
        self.profile_id = profile_id


FAMILY_BOUNDS: Dict[DetectionFamily, HsvBounds] = {
    # Purple header, broad S/V to tolerate different screen brightness
    DetectionFamily.HUE_BAND: HsvBounds(
        lower=(125, 40, 40),
        upper=(165, 255, 255),
    ),
    # Red button, hue wraps around 0/180
    DetectionFamily.HUE_BAND_WRAP: HsvBounds(
        lower=(0, 100, 100),
        upper=(10, 255, 255),
        lower2=(170, 100, 100),
        upper2=(180, 255, 255),
    ),
}


PROFILES: List[Profile] = [
    Profile(
        id="c6a-4-3",
        label="C6a Standard (4:3)",
        family=DetectionFamily.HUE_BAND,
        roi=Roi(x=0.15, y=0.10, w=0.70, h=0.25),  # top center
    ),
    Profile(
        id="c6a-16-9",
        label="C6a Widescreen (16:9)",
        family=DetectionFamily.HUE_BAND,
        roi=Roi(x=0.20, y=0.10, w=0.60, h=0.25),  # top center
    ),
    Profile(
        id="vlt-dual",
        label="VLT Dual Screen",
        family=DetectionFamily.HUE_BAND_WRAP,
        roi=Roi(x=0.01, y=0.82, w=0.20, h=0.16),  # bottom left corner
    ),
]

_PROFILES_BY_ID: Dict[str, Profile] = {p.id: p for p in PROFILES}


def list_profiles() -> List[Profile]:
    """Return all profiles in declaration order."""
    return list(PROFILES)


def get_profile(profile_id: str) -> Profile:
    """
    Look up a profile by id.

    Raises:
        ProfileNotFound: If the id is unknown.
    """
    try:
        return _PROFILES_BY_ID[profile_id]
    except KeyError:
        raise ProfileNotFound(profile_id) from None


def bounds_for(family: DetectionFamily) -> HsvBounds:
    """Return the fixed HSV bounds for a detection family."""
    return FAMILY_BOUNDS[family]
