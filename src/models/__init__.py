"""
Typed models for the marker-cut application.

These models are plain dataclasses with dict adapters for the YAML config
and the JSON manifest.
"""

from .frame import FrameData
from .profile import DetectionFamily, HsvBounds, Profile, Roi
from .ranges import DetectionRange, KeepRange
from .queue import ProcessingStatus, QueueItem, VideoAsset
from .config import (
    Config,
    AnalysisConfig,
    RenderConfig,
    OutputConfig,
)

__all__ = [
    # Frame
    "FrameData",
    # Profiles
    "DetectionFamily",
    "HsvBounds",
    "Profile",
    "Roi",
    # Ranges
    "DetectionRange",
    "KeepRange",
    # Queue
    "ProcessingStatus",
    "QueueItem",
    "VideoAsset",
    # Config
    "Config",
    "AnalysisConfig",
    "RenderConfig",
    "OutputConfig",
]
