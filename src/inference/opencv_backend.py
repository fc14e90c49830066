"""
OpenCV vision backend.

Imports cv2 on construction so a missing or broken OpenCV install surfaces
as BackendUnavailableError at startup rather than on the first frame.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from .backend import BackendUnavailableError, VisionBackend


class OpenCVVisionBackend(VisionBackend):
    def __init__(self):
        try:
            import cv2  # type: ignore
        except Exception as e:  # pragma: no cover
            raise BackendUnavailableError(
                "OpenCV is not available. Install with `pip install opencv-python`."
            ) from e

        self._cv2 = cv2

    def to_hsv(self, image: np.ndarray) -> np.ndarray:
        return self._cv2.cvtColor(image, self._cv2.COLOR_BGR2HSV)

    def in_range(self, hsv: np.ndarray, lower: Sequence[int], upper: Sequence[int]) -> np.ndarray:
        return self._cv2.inRange(
            hsv,
            np.array(lower, dtype=np.uint8),
            np.array(upper, dtype=np.uint8),
        )

    def bitwise_or(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        return self._cv2.bitwise_or(a, b)

    def count_nonzero(self, mask: np.ndarray) -> int:
        return int(self._cv2.countNonZero(mask))

    def resize(self, image: np.ndarray, width: int, height: int) -> np.ndarray:
        return self._cv2.resize(image, (width, height), interpolation=self._cv2.INTER_AREA)


def create_vision_backend() -> VisionBackend:
    """Build the default backend; raises BackendUnavailableError if OpenCV is missing."""
    return OpenCVVisionBackend()
