"""
Analysis engine for one video.

Runs the sampling loop over a VideoSource: decode frames in order, accept a
sample whenever media time has advanced SAMPLE_INTERVAL since the last one,
classify it, feed the hysteresis tracker, refine on edges, and collect raw
detection timestamps. The raw timestamps are merged into detection ranges
when the stream ends.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from algorithms.ranges.merge import assemble_detection_ranges
from detection.classifier import FrameClassifier
from models.profile import Profile
from models.ranges import DetectionRange
from observation.base import VideoSource
from pipeline.cancellation import CancellationToken
from pipeline.stages.classify import ClassifyStage
from pipeline.stages.refine import PrecisionEdgeRefiner
from tracking.hysteresis import HysteresisTracker

# Minimum media time (seconds) between two classified samples
SAMPLE_INTERVAL = 0.1


@dataclass
class AnalyzerConfig:
    """
    Configuration for the video analyzer.

    Attributes:
        process_width: Width frames are downscaled to before classification.
        progress_every: Accepted samples between progress reports.
    """
    process_width: Optional[int] = 640
    progress_every: int = 30


@dataclass
class AnalysisStats:
    """Counters for one video's analysis."""
    frames_decoded: int = 0
    samples: int = 0
    edges: int = 0
    raw_timestamps: List[float] = field(default_factory=list)


def compute_progress(media_time: float, duration: float) -> int:
    """Progress percentage, halves rounded up, 0 when the duration is unknown."""
    if duration <= 0:
        return 0
    return max(0, min(100, math.floor(100 * media_time / duration + 0.5)))


class VideoAnalyzer:
    """
    Sampling loop for a single video.

    Stateless between videos: tracker state and raw timestamps are created
    per call to analyze().

    Example:
        analyzer = VideoAnalyzer(FrameClassifier(create_vision_backend()), AnalyzerConfig())
        with create_video_source(path) as source:
            ranges = analyzer.analyze(source, profile, duration, CancellationToken())
    """

    def __init__(self, classifier: FrameClassifier, config: Optional[AnalyzerConfig] = None):
        self._classifier = classifier
        self.config = config or AnalyzerConfig()
        self.stats = AnalysisStats()

    def analyze(
        self,
        source: VideoSource,
        profile: Profile,
        duration: float,
        token: CancellationToken,
        on_progress: Optional[Callable[[int], None]] = None,
    ) -> List[DetectionRange]:
        """
        Analyze an open source and return its detection ranges.

        Raises:
            AnalysisCancelled: If the token is cancelled at a suspension point.
        """
        stage = ClassifyStage(self._classifier, profile, self.config.process_width)
        refiner = PrecisionEdgeRefiner(stage)
        tracker = HysteresisTracker()
        self.stats = AnalysisStats()
        raw = self.stats.raw_timestamps
        last_sample: Optional[float] = None

        logging.info(f"Analysis started: source={source.source_id}, profile={profile.id}")

        while True:
            token.raise_if_cancelled()
            frame_data = source.read()
            if frame_data is None:
                break
            self.stats.frames_decoded += 1

            current_time = frame_data.timestamp
            if last_sample is not None and current_time - last_sample < SAMPLE_INTERVAL:
                continue
            last_sample = current_time

            confidence = stage.confidence(frame_data)
            edge = tracker.update(confidence)

            if edge is not None:
                self.stats.edges += 1
                logging.debug(f"[EDGE] {edge.value} at {current_time:.2f}s")
                raw.extend(refiner.refine(source, current_time, token))

            if tracker.is_tracking:
                raw.append(current_time)

            self.stats.samples += 1
            if on_progress is not None and self.stats.samples % self.config.progress_every == 0:
                on_progress(compute_progress(current_time, duration))

        token.raise_if_cancelled()
        ranges = assemble_detection_ranges(raw)

        logging.info(
            f"Analysis finished: source={source.source_id}, "
            f"frames={self.stats.frames_decoded}, samples={self.stats.samples}, "
            f"edges={self.stats.edges}, ranges={len(ranges)}"
        )
        return ranges
