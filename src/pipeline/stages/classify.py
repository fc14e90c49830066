"""
Classify stage.

Downscales a decoded frame to the processing width and runs the frame
classifier against the active profile. Shared by the coarse sampling pass
and the precision refiner so both see frames the same way.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from detection.classifier import FrameClassifier
from models.frame import FrameData
from models.profile import Profile


class ClassifyStage:
    """
    Example:
        stage = ClassifyStage(classifier, profile, process_width=640)
        confidence = stage.confidence(frame_data)
    """

    def __init__(
        self,
        classifier: FrameClassifier,
        profile: Profile,
        process_width: Optional[int] = 640,
    ):
        self._classifier = classifier
        self._profile = profile
        self._process_width = process_width or None

    @property
    def profile(self) -> Profile:
        return self._profile

    def prepare(self, frame: np.ndarray) -> np.ndarray:
        """Resize to the processing width, keeping the aspect ratio."""
        if self._process_width is None:
            return frame
        h, w = frame.shape[:2]
        if w == self._process_width or w == 0:
            return frame
        height = int(h * self._process_width / w)
        return self._classifier.backend.resize(frame, self._process_width, height)

    def confidence(self, frame_data: FrameData) -> float:
        return self._classifier.classify(self.prepare(frame_data.frame), self._profile)
