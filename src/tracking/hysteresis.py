"""
Hysteresis tracker.

Two-threshold state machine that turns noisy per-sample confidence into a
stable "marker visible" signal. Confidence between the two thresholds
holds the current state.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple

ENTER_THRESHOLD = 0.9
EXIT_THRESHOLD = 0.5


class TrackingState(str, Enum):
    NOT_TRACKING = "not_tracking"
    TRACKING = "tracking"


class EdgeEvent(str, Enum):
    RISING = "rising"
    FALLING = "falling"


def step(state: TrackingState, confidence: float) -> Tuple[TrackingState, Optional[EdgeEvent]]:
    """
    Apply one sample to the state machine.

    Returns:
        (new_state, edge) where edge is None unless the state changed.
    """
    if state is TrackingState.NOT_TRACKING:
        if confidence >= ENTER_THRESHOLD:
            return TrackingState.TRACKING, EdgeEvent.RISING
        return state, None

    if confidence <= EXIT_THRESHOLD:
        return TrackingState.NOT_TRACKING, EdgeEvent.FALLING
    return state, None


class HysteresisTracker:
    """
    Stateful wrapper around step() for one video's analysis.

    Example:
        tracker = HysteresisTracker()
        edge = tracker.update(confidence)
        if tracker.is_tracking:
            ...
    """

    def __init__(self):
        self._state = TrackingState.NOT_TRACKING

    @property
    def state(self) -> TrackingState:
        return self._state

    @property
    def is_tracking(self) -> bool:
        return self._state is TrackingState.TRACKING

    def update(self, confidence: float) -> Optional[EdgeEvent]:
        """Feed one sample; return the edge it caused, if any."""
        self._state, edge = step(self._state, confidence)
        return edge

    def reset(self) -> None:
        self._state = TrackingState.NOT_TRACKING
