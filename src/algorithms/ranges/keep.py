"""
Keep-range calculation.

Inverts detection ranges against the video duration. Each detection is
padded by SAFETY_BUFFER on both sides so the cut never clips into a
still-visible marker, and keep fragments shorter than MIN_SEGMENT are
dropped.
"""

from __future__ import annotations

from typing import Iterable, List

from models.ranges import DetectionRange, KeepRange

SAFETY_BUFFER = 0.1
MIN_SEGMENT = 0.1


def calculate_keep_ranges(
    detections: Iterable[DetectionRange],
    duration: float,
) -> List[KeepRange]:
    """
    Compute the segments to retain.

    Args:
        detections: Detection ranges in any order.
        duration: Total video duration in seconds.

    Returns:
        Keep ranges sorted ascending and pairwise non-overlapping. Empty for a
        zero-length video; the whole video when nothing was detected.
    """
    if duration == 0:
        return []

    ordered = sorted(detections, key=lambda d: d.start)
    if not ordered:
        return [KeepRange(start=0.0, end=duration)]

    keep: List[KeepRange] = []
    cursor = 0.0
    for det in ordered:
        safe_end = max(0.0, det.start - SAFETY_BUFFER)
        if safe_end > cursor + MIN_SEGMENT:
            keep.append(KeepRange(start=cursor, end=safe_end))
        cursor = max(cursor, min(duration, det.end + SAFETY_BUFFER))

    if cursor < duration - MIN_SEGMENT:
        keep.append(KeepRange(start=cursor, end=duration))

    return keep
