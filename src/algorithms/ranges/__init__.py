"""
Range algebra for detection output.

- assemble_detection_ranges: raw timestamps -> detection ranges
- calculate_keep_ranges: detection ranges + duration -> keep ranges
"""

from .merge import GAP_TOLERANCE, assemble_detection_ranges, merge_detection_ranges
from .keep import MIN_SEGMENT, SAFETY_BUFFER, calculate_keep_ranges

__all__ = [
    "GAP_TOLERANCE",
    "assemble_detection_ranges",
    "merge_detection_ranges",
    "MIN_SEGMENT",
    "SAFETY_BUFFER",
    "calculate_keep_ranges",
]
