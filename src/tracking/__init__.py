"""
Tracking module.

Hysteresis state machine over per-sample classifier confidence.
"""

from .hysteresis import (
    ENTER_THRESHOLD,
    EXIT_THRESHOLD,
    EdgeEvent,
    HysteresisTracker,
    TrackingState,
    step,
)

__all__ = [
    "ENTER_THRESHOLD",
    "EXIT_THRESHOLD",
    "EdgeEvent",
    "HysteresisTracker",
    "TrackingState",
    "step",
]
