"""
OpenCV-based video file source.

Wraps cv2.VideoCapture to deliver decoded frames with their media time and
to seek by media time for edge refinement.
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import cv2

from models.frame import FrameData
from .base import (
    DecodeUnavailableError,
    SeekError,
    SourceConfig,
    SourceOpenError,
    VideoSource,
)


@dataclass
class OpenCVSourceConfig(SourceConfig):
    """
    Configuration for OpenCV video file sources.

    Attributes:
        path: Path to the video file.
    """
    path: str = ""

    @classmethod
    def for_path(cls, path: str) -> "OpenCVSourceConfig":
        return cls(source_id=os.path.basename(path), path=path)


class OpenCVVideoSource(VideoSource):
    """
    Video file source backed by cv2.VideoCapture.

    Example:
        with OpenCVVideoSource(OpenCVSourceConfig.for_path("clip.mp4")) as source:
            for frame_data in source:
                process(frame_data.frame, frame_data.timestamp)
    """

    def __init__(self, config: OpenCVSourceConfig):
        super().__init__(config)
        self._opencv_config = config
        self._cap: Optional[cv2.VideoCapture] = None
        self._fps = 0.0
        self._duration = 0.0

    @property
    def path(self) -> str:
        return self._opencv_config.path

    @property
    def fps(self) -> float:
        return self._fps

    @property
    def duration(self) -> float:
        return self._duration

    def open(self) -> None:
        """Open the video file."""
        if self._is_open:
            return

        if not os.path.exists(self.path):
            raise SourceOpenError(f"Video file not found: {self.path}")

        self._cap = cv2.VideoCapture(self.path)
        if not self._cap.isOpened():
            self._cap.release()
            self._cap = None
            raise SourceOpenError(f"Failed to open video {self.path}")

        self._fps = self._cap.get(cv2.CAP_PROP_FPS) or 0.0
        frame_count = self._cap.get(cv2.CAP_PROP_FRAME_COUNT) or 0.0
        self._duration = _duration_from(frame_count, self._fps)
        self._is_open = True
        self._frame_index = 0

        logging.info(
            f"OpenCVVideoSource opened: source_id={self.source_id}, "
            f"fps={self._fps:.2f}, duration={self._duration:.2f}s"
        )

    def read(self) -> Optional[FrameData]:
        """Decode the next frame."""
        if not self._is_open or self._cap is None:
            return None

        ret, frame = self._cap.read()
        if not ret or frame is None:
            logging.debug(f"End of video reached: source_id={self.source_id}")
            return None

        self._frame_index += 1

        return FrameData.from_numpy(
            frame,
            timestamp=self._media_time(),
            frame_index=self._frame_index,
            source=self.source_id,
        )

    def _media_time(self) -> float:
        """Media time of the frame just decoded, in seconds."""
        msec = self._cap.get(cv2.CAP_PROP_POS_MSEC)
        if msec and msec > 0:
            return msec / 1000.0
        # Some containers report no position; fall back to frame counting
        if self._fps > 0:
            return (self._frame_index - 1) / self._fps
        return 0.0

    def seek(self, seconds: float) -> None:
        """Seek so the next read() starts at ``seconds``."""
        if not self._is_open or self._cap is None:
            raise SeekError("Source is not open")

        target = max(0.0, seconds)
        if not self._cap.set(cv2.CAP_PROP_POS_MSEC, target * 1000.0):
            raise SeekError(f"Seek to {target:.3f}s rejected by {self.source_id}")

        pos_frames = self._cap.get(cv2.CAP_PROP_POS_FRAMES)
        self._frame_index = int(pos_frames) if pos_frames and pos_frames > 0 else 0

    def close(self) -> None:
        """Close the video and release the decoder."""
        if self._cap is not None:
            self._cap.release()
            self._cap = None
        if self._is_open:
            logging.info(f"OpenCVVideoSource closed: source_id={self.source_id}")
        self._is_open = False

    def get_video_info(self) -> Dict[str, Any]:
        """Get information about the open video."""
        if self._cap is None or not self._cap.isOpened():
            return {}

        return {
            "width": int(self._cap.get(cv2.CAP_PROP_FRAME_WIDTH)),
            "height": int(self._cap.get(cv2.CAP_PROP_FRAME_HEIGHT)),
            "fps": self._fps,
            "frame_count": int(self._cap.get(cv2.CAP_PROP_FRAME_COUNT)),
            "duration": self._duration,
        }


def _duration_from(frame_count: float, fps: float) -> float:
    if fps <= 0 or frame_count <= 0:
        return 0.0
    duration = frame_count / fps
    return duration if math.isfinite(duration) else 0.0


def ensure_decode_available() -> None:
    """
    Raise DecodeUnavailableError if this OpenCV build cannot decode video.
    """
    try:
        backends = cv2.videoio_registry.getStreamBackends()
    except AttributeError:
        # Older builds without the registry; let open() report failures
        return
    if not backends:
        raise DecodeUnavailableError(
            "OpenCV was built without video decode support (no stream backends)"
        )


def create_video_source(path: str) -> OpenCVVideoSource:
    """
    Factory for the default video source.

    Raises:
        DecodeUnavailableError: If no decode backend is available.
    """
    ensure_decode_available()
    return OpenCVVideoSource(OpenCVSourceConfig.for_path(path))
