"""
Pipeline stages for marker analysis.

- classify: frame preparation + ROI color classification
- refine: precision re-scan around detection edges
"""

from .classify import ClassifyStage
from .refine import PrecisionEdgeRefiner, REFINE_MATCH_THRESHOLD, REFINE_WINDOW

__all__ = [
    "ClassifyStage",
    "PrecisionEdgeRefiner",
    "REFINE_MATCH_THRESHOLD",
    "REFINE_WINDOW",
]
