"""
Pipeline module for marker analysis.

The pipeline orchestrates the full processing flow:
- Frame sampling from a video source
- ROI classification and hysteresis tracking
- Precision refinement at detection edges
- Range assembly and keep-range calculation per queue item
"""

from .cancellation import AnalysisCancelled, CancellationToken
from .engine import AnalyzerConfig, SAMPLE_INTERVAL, VideoAnalyzer, compute_progress
from .batch import BatchOrchestrator, BatchReport, BatchStatus
from .stages import ClassifyStage, PrecisionEdgeRefiner

__all__ = [
    "AnalysisCancelled",
    "CancellationToken",
    "AnalyzerConfig",
    "SAMPLE_INTERVAL",
    "VideoAnalyzer",
    "compute_progress",
    "BatchOrchestrator",
    "BatchReport",
    "BatchStatus",
    "ClassifyStage",
    "PrecisionEdgeRefiner",
]
