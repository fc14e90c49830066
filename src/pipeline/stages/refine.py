"""
Precision edge refinement.

Coarse sampling runs every ~0.1s, which under-resolves the moment the
marker appears or disappears. On each edge this stage rewinds a short
window before the coarse timestamp and re-classifies every decoded frame up
to it, returning the media times where the marker was visible.

Refinement is best-effort: failures are logged and degrade precision only.
Cancellation is never absorbed here.
"""

from __future__ import annotations

import logging
from typing import List

from observation.base import VideoSource
from pipeline.cancellation import AnalysisCancelled, CancellationToken
from .classify import ClassifyStage

# Seconds rewound before the coarse edge timestamp
REFINE_WINDOW = 0.2
# Confidence above which a refined frame counts as a detection
REFINE_MATCH_THRESHOLD = 0.5


class PrecisionEdgeRefiner:
    """
    Example:
        refiner = PrecisionEdgeRefiner(stage)
        raw_timestamps.extend(refiner.refine(source, edge_time, token))
    """

    def __init__(self, stage: ClassifyStage, window: float = REFINE_WINDOW):
        self._stage = stage
        self._window = window

    def refine(self, source: VideoSource, target_time: float, token: CancellationToken) -> List[float]:
        """
        Scan [target_time - window, target_time) at native frame granularity.

        Skipped entirely when target_time is too close to the start to
        rewind. The source is left positioned just past target_time.
        """
        if target_time < self._window or token.cancelled:
            return []

        found: List[float] = []
        try:
            source.seek(target_time - self._window)
            token.raise_if_cancelled()

            while True:
                token.raise_if_cancelled()
                frame_data = source.read()
                if frame_data is None:
                    # Stalled or end of stream
                    break
                if frame_data.timestamp >= target_time:
                    break
                if self._stage.confidence(frame_data) > REFINE_MATCH_THRESHOLD:
                    found.append(frame_data.timestamp)
        except AnalysisCancelled:
            raise
        except Exception as e:
            logging.warning(f"Precision scan failed at {target_time:.2f}s: {e}")

        logging.debug(f"Precision scan at {target_time:.2f}s found {len(found)} frame(s)")
        return found
