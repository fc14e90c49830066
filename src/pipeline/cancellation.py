"""
Cooperative cancellation.

A CancellationToken is passed through every suspension point of an
analysis (next decoded frame, seek, refinement playback). Components call
raise_if_cancelled() there and unwind with AnalysisCancelled.
"""

from __future__ import annotations

import threading


class AnalysisCancelled(Exception):
    """Raised at a suspension point once the run's token is cancelled."""


class CancellationToken:
    """Thread-safe, one-shot cancellation flag."""

    def __init__(self):
        self._event = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise AnalysisCancelled()
