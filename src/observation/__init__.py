"""
Observation layer for seekable video sources.

This layer abstracts decoding from the analysis pipeline. Each source
implements the VideoSource interface and returns FrameData objects stamped
with their media time.
"""

from .base import (
    DecodeUnavailableError,
    SeekError,
    SourceConfig,
    SourceOpenError,
    VideoSource,
)
from .opencv_source import (
    OpenCVSourceConfig,
    OpenCVVideoSource,
    create_video_source,
    ensure_decode_available,
)
from .probe import probe_duration

__all__ = [
    "DecodeUnavailableError",
    "SeekError",
    "SourceConfig",
    "SourceOpenError",
    "VideoSource",
    "OpenCVSourceConfig",
    "OpenCVVideoSource",
    "create_video_source",
    "ensure_decode_available",
    "probe_duration",
]
