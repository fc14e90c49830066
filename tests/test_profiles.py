"""
Tests for the profile registry.
"""

import pytest

from models.profile import DetectionFamily, Roi
from profiles.registry import (
    FAMILY_BOUNDS,
    ProfileNotFound,
    bounds_for,
    get_profile,
    list_profiles,
)


class TestProfileRegistry:
    """Profile lookup and listing."""

    def test_list_profiles_order(self):
        ids = [p.id for p in list_profiles()]
        assert ids == ["c6a-4-3", "c6a-16-9", "vlt-dual"]

    def test_list_returns_copy(self):
        profiles = list_profiles()
        profiles.clear()
        assert len(list_profiles()) == 3

    def test_get_profile(self):
        profile = get_profile("c6a-4-3")
        assert profile.family == DetectionFamily.HUE_BAND
        assert profile.roi == Roi(x=0.15, y=0.10, w=0.70, h=0.25)

    def test_vlt_uses_wrap_family(self):
        profile = get_profile("vlt-dual")
        assert profile.family == DetectionFamily.HUE_BAND_WRAP
        assert profile.roi == Roi(x=0.01, y=0.82, w=0.20, h=0.16)

    def test_unknown_profile(self):
        with pytest.raises(ProfileNotFound) as exc:
            get_profile("does-not-exist")
        assert exc.value.profile_id == "does-not-exist"
        assert isinstance(exc.value, LookupError)

    def test_rois_are_normalized(self):
        for profile in list_profiles():
            roi = profile.roi
            assert 0 <= roi.x and roi.x + roi.w <= 1
            assert 0 <= roi.y and roi.y + roi.h <= 1


class TestFamilyBounds:
    """Fixed HSV bounds per family."""

    def test_every_family_has_bounds(self):
        for family in DetectionFamily:
            assert family in FAMILY_BOUNDS

    def test_purple_band(self):
        bounds = bounds_for(DetectionFamily.HUE_BAND)
        assert bounds.lower == (125, 40, 40)
        assert bounds.upper == (165, 255, 255)
        assert not bounds.is_split

    def test_red_band_wraps(self):
        bounds = bounds_for(DetectionFamily.HUE_BAND_WRAP)
        assert bounds.is_split
        assert bounds.lower == (0, 100, 100)
        assert bounds.upper == (10, 255, 255)
        assert bounds.lower2 == (170, 100, 100)
        assert bounds.upper2 == (180, 255, 255)


class TestRoi:
    """Normalized to pixel conversion."""

    def test_to_pixels_floors(self):
        roi = Roi(x=0.25, y=0.5, w=0.5, h=0.25)
        assert roi.to_pixels(101, 99) == (25, 49, 50, 24)
