"""
Detection range assembly.

Raw detection timestamps are sorted and merged into contiguous ranges;
gaps up to GAP_TOLERANCE seconds are bridged.
"""

from __future__ import annotations

from typing import Iterable, List

from models.ranges import DetectionRange

# Gaps larger than this (seconds) split two detection ranges
GAP_TOLERANCE = 2.0


def assemble_detection_ranges(
    timestamps: Iterable[float],
    tolerance: float = GAP_TOLERANCE,
) -> List[DetectionRange]:
    """
    Merge raw detection timestamps into detection ranges.

    Input order does not matter; refinement appends out of order.

    Args:
        timestamps: Media times (seconds) at which the marker was seen.
        tolerance: Largest gap (seconds) bridged inside one range.

    Returns:
        Ranges sorted by start, non-overlapping, confidence 1.0.
    """
    ordered = sorted(timestamps)
    if not ordered:
        return []

    ranges: List[DetectionRange] = []
    start = prev = ordered[0]
    for curr in ordered[1:]:
        if curr - prev > tolerance:
            ranges.append(DetectionRange(start=start, end=prev, confidence=1.0))
            start = curr
        prev = curr
    ranges.append(DetectionRange(start=start, end=prev, confidence=1.0))

    return ranges


def merge_detection_ranges(
    ranges: Iterable[DetectionRange],
    tolerance: float = GAP_TOLERANCE,
) -> List[DetectionRange]:
    """
    Apply the same gap rule to a list of ranges.

    Ranges separated by at most ``tolerance`` seconds (or overlapping) are
    joined. Output of assemble_detection_ranges passes through unchanged.
    """
    ordered = sorted(ranges, key=lambda r: (r.start, r.end))
    if not ordered:
        return []

    merged: List[DetectionRange] = []
    start, end = ordered[0].start, ordered[0].end
    for r in ordered[1:]:
        if r.start - end > tolerance:
            merged.append(DetectionRange(start=start, end=end, confidence=1.0))
            start, end = r.start, r.end
        else:
            end = max(end, r.end)
    merged.append(DetectionRange(start=start, end=end, confidence=1.0))

    return merged
