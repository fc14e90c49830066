"""
Tests for the hysteresis tracker.
"""

from tracking.hysteresis import (
    ENTER_THRESHOLD,
    EXIT_THRESHOLD,
    EdgeEvent,
    HysteresisTracker,
    TrackingState,
    step,
)


class TestStep:
    """Pure transition function."""

    def test_enter_at_threshold(self):
        assert step(TrackingState.NOT_TRACKING, ENTER_THRESHOLD) == (TrackingState.TRACKING, EdgeEvent.RISING)

    def test_no_enter_below_threshold(self):
        assert step(TrackingState.NOT_TRACKING, 0.89) == (TrackingState.NOT_TRACKING, None)

    def test_exit_at_threshold(self):
        assert step(TrackingState.TRACKING, EXIT_THRESHOLD) == (TrackingState.NOT_TRACKING, EdgeEvent.FALLING)

    def test_hold_between_thresholds(self):
        assert step(TrackingState.TRACKING, 0.7) == (TrackingState.TRACKING, None)
        assert step(TrackingState.NOT_TRACKING, 0.7) == (TrackingState.NOT_TRACKING, None)


class TestHysteresisTracker:
    """Stateful tracker over a confidence sequence."""

    def test_starts_not_tracking(self):
        tracker = HysteresisTracker()
        assert tracker.state == TrackingState.NOT_TRACKING
        assert not tracker.is_tracking

    def test_binary_sequence(self):
        tracker = HysteresisTracker()
        edges = [tracker.update(c) for c in [0.0, 1.0, 1.0, 0.0, 1.0]]

        assert edges == [None, EdgeEvent.RISING, None, EdgeEvent.FALLING, EdgeEvent.RISING]
        assert tracker.is_tracking

    def test_intermediate_confidence_holds(self):
        tracker = HysteresisTracker()
        edges = [tracker.update(c) for c in [0.6, 0.95, 0.6, 0.4]]

        assert edges == [None, EdgeEvent.RISING, None, EdgeEvent.FALLING]

    def test_edges_alternate(self):
        tracker = HysteresisTracker()
        confidences = [0.0, 1.0, 0.7, 1.0, 0.2, 0.6, 0.9, 0.5, 1.0]
        edges = [e for e in (tracker.update(c) for c in confidences) if e is not None]

        assert edges[0] == EdgeEvent.RISING
        for prev, curr in zip(edges, edges[1:]):
            assert prev != curr

    def test_low_confidence_never_rises(self):
        tracker = HysteresisTracker()
        edges = [tracker.update(c) for c in [0.0, 0.3, EXIT_THRESHOLD, 0.1, EXIT_THRESHOLD, 0.49]]

        assert edges == [None] * 6
        assert not tracker.is_tracking

    def test_mid_confidence_never_falls(self):
        tracker = HysteresisTracker()
        assert tracker.update(1.0) == EdgeEvent.RISING

        edges = [tracker.update(c) for c in [0.51, 0.89, 0.7, 0.51, 0.6, 0.89]]

        assert edges == [None] * 6
        assert tracker.is_tracking

    def test_reset(self):
        tracker = HysteresisTracker()
        tracker.update(1.0)
        tracker.reset()
        assert tracker.state == TrackingState.NOT_TRACKING
