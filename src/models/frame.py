"""
Decoded frame model.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np


@dataclass(frozen=True)
class FrameData:
    """
    One decoded frame and where it sits in the video.

    Attributes:
        frame: Pixel data, BGR, shape (height, width, 3).
        timestamp: Media time in seconds.
        frame_index: 1-based decode position within the video.
        source: Id of the source that produced the frame.
    """
    frame: np.ndarray
    timestamp: float
    frame_index: int = 0
    source: Optional[str] = None

    @classmethod
    def from_numpy(
        cls,
        frame: np.ndarray,
        timestamp: float,
        frame_index: int = 0,
        source: Optional[str] = None,
    ) -> "FrameData":
        return cls(frame=frame, timestamp=float(timestamp), frame_index=frame_index, source=source)

    @property
    def width(self) -> int:
        return int(self.frame.shape[1])

    @property
    def height(self) -> int:
        return int(self.frame.shape[0])

    @property
    def shape(self) -> Tuple[int, ...]:
        return self.frame.shape

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height)"""
        return (self.width, self.height)
