"""
Marker detection.

This module classifies single frames for the presence of a profile's marker.
"""

from .classifier import DENSITY_THRESHOLD, FrameClassifier, RoiOutOfBounds, compute_roi_rect

__all__ = ["DENSITY_THRESHOLD", "FrameClassifier", "RoiOutOfBounds", "compute_roi_rect"]
