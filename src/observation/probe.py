"""
Duration probing with a bounded wait.

Metadata reads can stall on damaged or network-mounted files, so the read
runs in a daemon thread and an expired wait counts as a zero-length asset.
A stalled reader is abandoned and never holds up interpreter exit.
"""

from __future__ import annotations

import logging
import math
import threading
from typing import Callable, Dict

import cv2

DEFAULT_METADATA_TIMEOUT = 30.0


def read_duration(path: str) -> float:
    """Read duration (frame count / fps) from container metadata."""
    cap = cv2.VideoCapture(path)
    try:
        if not cap.isOpened():
            return 0.0
        fps = cap.get(cv2.CAP_PROP_FPS) or 0.0
        frame_count = cap.get(cv2.CAP_PROP_FRAME_COUNT) or 0.0
    finally:
        cap.release()

    if fps <= 0 or frame_count <= 0:
        return 0.0
    duration = frame_count / fps
    return duration if math.isfinite(duration) else 0.0


def probe_duration(
    path: str,
    timeout: float = DEFAULT_METADATA_TIMEOUT,
    reader: Callable[[str], float] = read_duration,
) -> float:
    """
    Duration of a video in seconds, waiting at most ``timeout`` seconds.

    Never raises: timeouts and read failures are logged and yield 0.0.
    """
    outcome: Dict[str, object] = {}

    def _worker():
        try:
            outcome["duration"] = reader(path)
        except Exception as e:
            outcome["error"] = e

    worker = threading.Thread(target=_worker, name="metadata-probe", daemon=True)
    worker.start()
    worker.join(timeout)

    if worker.is_alive():
        logging.warning(f"Metadata probe timed out after {timeout:.0f}s: {path}")
        return 0.0
    if "error" in outcome:
        logging.warning(f"Metadata probe failed for {path}: {outcome['error']}")
        return 0.0

    duration = outcome.get("duration")
    if duration is None or not math.isfinite(duration) or duration < 0:
        return 0.0
    return float(duration)
