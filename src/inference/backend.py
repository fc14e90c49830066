"""
Vision backend interface.

The frame classifier receives its color operations through this capability
object instead of reaching for a global vision library, so tests can pass a
double that returns deterministic masks.
"""

from __future__ import annotations

from typing import Protocol, Sequence

import numpy as np


class BackendUnavailableError(RuntimeError):
    """The vision backend cannot be constructed; nothing can be analyzed."""


class VisionBackend(Protocol):
    def to_hsv(self, image: np.ndarray) -> np.ndarray:
        """Convert a BGR crop to HSV."""
        ...

    def in_range(self, hsv: np.ndarray, lower: Sequence[int], upper: Sequence[int]) -> np.ndarray:
        """Binary mask of pixels inside [lower, upper] (inclusive)."""
        ...

    def bitwise_or(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        ...

    def count_nonzero(self, mask: np.ndarray) -> int:
        ...

    def resize(self, image: np.ndarray, width: int, height: int) -> np.ndarray:
        ...
