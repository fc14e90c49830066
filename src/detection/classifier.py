"""
Frame classifier.

Crops a frame to the profile's region of interest, masks it with the
family's HSV bounds and reports a binary confidence:

1. Strict crop to the normalized ROI.
2. Convert the crop to HSV.
3. Mask pixels inside the bounds (two bands OR-ed for the wrap family).
4. Confidence is 1.0 when the matched density exceeds 30%, else 0.0.
"""

from __future__ import annotations

import logging
from typing import Tuple

import numpy as np

from inference.backend import VisionBackend
from models.profile import HsvBounds, Profile
from profiles.registry import bounds_for

# Fraction of ROI pixels that must match the color band
DENSITY_THRESHOLD = 0.30


class RoiOutOfBounds(ValueError):
    """The profile's ROI does not fit inside the frame."""


def compute_roi_rect(profile: Profile, frame_w: int, frame_h: int) -> Tuple[int, int, int, int]:
    """
    Pixel rectangle (x, y, w, h) for the profile ROI on a frame.

    Raises:
        RoiOutOfBounds: If the rectangle is empty or leaves the frame.
    """
    x, y, w, h = profile.roi.to_pixels(frame_w, frame_h)
    if x < 0 or y < 0 or x + w > frame_w or y + h > frame_h:
        raise RoiOutOfBounds(
            f"ROI ({x}, {y}, {w}, {h}) outside frame {frame_w}x{frame_h}"
        )
    if w <= 0 or h <= 0:
        raise RoiOutOfBounds(f"ROI ({x}, {y}, {w}, {h}) is empty on frame {frame_w}x{frame_h}")
    return x, y, w, h


class FrameClassifier:
    """
    Binary marker classifier for a single frame.

    Example:
        classifier = FrameClassifier(create_vision_backend())
        confidence = classifier.classify(frame, get_profile("c6a-4-3"))
    """

    def __init__(self, backend: VisionBackend):
        self._backend = backend

    @property
    def backend(self) -> VisionBackend:
        return self._backend

    def density(self, frame: np.ndarray, profile: Profile) -> float:
        """
        Fraction of ROI pixels matching the profile's color bounds.

        Raises:
            RoiOutOfBounds: If the ROI does not fit the frame.
        """
        frame_h, frame_w = frame.shape[:2]
        x, y, w, h = compute_roi_rect(profile, frame_w, frame_h)
        crop = frame[y:y + h, x:x + w]

        hsv = self._backend.to_hsv(crop)
        mask = self._mask(hsv, bounds_for(profile.family))

        return self._backend.count_nonzero(mask) / float(w * h)

    def classify(self, frame: np.ndarray, profile: Profile) -> float:
        """Return 1.0 if the marker is visible in the ROI, else 0.0."""
        try:
            density = self.density(frame, profile)
        except RoiOutOfBounds as e:
            logging.warning(f"[Vision] {e}")
            return 0.0

        if density > DENSITY_THRESHOLD:
            logging.debug(f"[Vision] Match {profile.family.value}: {density:.2f}")
            return 1.0
        return 0.0

    def _mask(self, hsv: np.ndarray, bounds: HsvBounds) -> np.ndarray:
        mask = self._backend.in_range(hsv, bounds.lower, bounds.upper)
        if bounds.is_split:
            mask2 = self._backend.in_range(hsv, bounds.lower2, bounds.upper2)
            mask = self._backend.bitwise_or(mask, mask2)
        return mask
