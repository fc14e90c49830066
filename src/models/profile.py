"""
Detection profile models.

A profile pairs a normalized region of interest with a detection family.
Each family maps to a fixed table of HSV bounds.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


HsvTriple = Tuple[int, int, int]


class DetectionFamily(str, Enum):
    """Color families the classifier knows how to mask."""
    HUE_BAND = "hue_band"
    HUE_BAND_WRAP = "hue_band_wrap"


@dataclass(frozen=True)
class Roi:
    """
    Region of interest, normalized to frame dimensions.
    
    Attributes:
        x: Left edge as a fraction of frame width.
        y: Top edge as a fraction of frame height.
        w: Width as a fraction of frame width.
        h: Height as a fraction of frame height.
    """
    x: float
    y: float
    w: float
    h: float

    def to_pixels(self, frame_w: int, frame_h: int) -> Tuple[int, int, int, int]:
        """Return (x, y, w, h) in pixels, floored."""
        return (
            int(frame_w * self.x),
            int(frame_h * self.y),
            int(frame_w * self.w),
            int(frame_h * self.h),
        )


@dataclass(frozen=True)
class HsvBounds:
    """
    Inclusive HSV bounds on the OpenCV scale (H 0-180, S/V 0-255).

    ``lower2``/``upper2`` carry a second band for hues that wrap across 0.
    """
    lower: HsvTriple
    upper: HsvTriple
    lower2: Optional[HsvTriple] = None
    upper2: Optional[HsvTriple] = None

    @property
    def is_split(self) -> bool:
        return self.lower2 is not None and self.upper2 is not None


@dataclass(frozen=True)
class Profile:
    """
    A marker profile for one game layout.
    
    Attributes:
        id: Lookup key (e.g., "c6a-4-3").
        label: Human readable name.
        family: Detection family, selects the HSV bounds.
        roi: Normalized region where the marker appears.
    """
    id: str
    label: str
    family: DetectionFamily
    roi: Roi
