"""
Pytest configuration and shared fixtures.
"""

import os
import sys
from typing import List, Optional, Tuple

import numpy as np
import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from models.frame import FrameData  # noqa: E402
from observation.base import SeekError, SourceConfig, VideoSource  # noqa: E402

# HSV values (OpenCV scale) inside and outside the purple band
PURPLE_HSV = (145, 200, 200)
BLANK_HSV = (0, 0, 0)


class NumpyVisionBackend:
    """
    Deterministic vision backend for tests.

    Frames are treated as already being HSV, so a test can paint exact HSV
    values and know which pixels will match.
    """

    def __init__(self):
        self.calls = 0

    def to_hsv(self, image):
        self.calls += 1
        return image

    def in_range(self, hsv, lower, upper):
        lo = np.array(lower, dtype=np.int32)
        hi = np.array(upper, dtype=np.int32)
        pixels = hsv.astype(np.int32)
        inside = np.all((pixels >= lo) & (pixels <= hi), axis=-1)
        return inside.astype(np.uint8) * 255

    def bitwise_or(self, a, b):
        return np.bitwise_or(a, b)

    def count_nonzero(self, mask):
        return int(np.count_nonzero(mask))

    def resize(self, image, width, height):
        ys = (np.arange(height) * image.shape[0] // height).astype(int)
        xs = (np.arange(width) * image.shape[1] // width).astype(int)
        return image[ys][:, xs]


def hsv_frame(hsv=BLANK_HSV, width: int = 64, height: int = 48) -> np.ndarray:
    frame = np.zeros((height, width, 3), dtype=np.uint8)
    frame[:, :] = hsv
    return frame


class MockVideoSource(VideoSource):
    """
    In-memory video source: a list of (timestamp, frame) pairs.

    seek() positions at the first frame whose timestamp is >= the target.
    """

    def __init__(self, frames: List[Tuple[float, np.ndarray]], source_id: str = "mock",
                 duration: float = 0.0, fail_seek: bool = False):
        super().__init__(SourceConfig(source_id=source_id))
        self._frames = frames
        self._duration = duration
        self._fail_seek = fail_seek
        self._pos = 0
        self.seeks: List[float] = []
        self.open_count = 0
        self.close_count = 0

    @property
    def duration(self) -> float:
        return self._duration

    def open(self) -> None:
        self._is_open = True
        self._pos = 0
        self._frame_index = 0
        self.open_count += 1

    def read(self) -> Optional[FrameData]:
        if not self._is_open or self._pos >= len(self._frames):
            return None
        timestamp, frame = self._frames[self._pos]
        self._pos += 1
        self._frame_index = self._pos
        return FrameData.from_numpy(frame, timestamp=timestamp,
                                    frame_index=self._frame_index, source=self.source_id)

    def seek(self, seconds: float) -> None:
        self.seeks.append(seconds)
        if self._fail_seek:
            raise SeekError("seek disabled")
        target = max(0.0, seconds)
        self._pos = next(
            (i for i, (ts, _) in enumerate(self._frames) if ts >= target - 1e-9),
            len(self._frames),
        )

    def close(self) -> None:
        self._is_open = False
        self.close_count += 1


def marker_video(visible, fps: float = 25.0, n_frames: int = 150,
                 width: int = 64, height: int = 48) -> List[Tuple[float, np.ndarray]]:
    """
    Frames at ``fps`` where ``visible(t)`` decides whether the ROI is purple.
    """
    on = hsv_frame(PURPLE_HSV, width, height)
    off = hsv_frame(BLANK_HSV, width, height)
    frames = []
    for i in range(n_frames):
        t = i / fps
        frames.append((t, on if visible(t) else off))
    return frames


@pytest.fixture
def numpy_backend():
    return NumpyVisionBackend()


@pytest.fixture
def temp_config_dir(tmp_path):
    """Create a temporary config directory with default.yaml."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()

    default_yaml = config_dir / "default.yaml"
    default_yaml.write_text("""
analysis:
  profile: "c6a-4-3"
  process_width: 640
  progress_every: 30
  metadata_timeout: 30.0

render:
  source_dir: "game_elements/footage"
  output_dir: "game_elements/processed"
  crf: 12

log_path: "logs/test.log"
log_level: "INFO"
""")

    return config_dir


@pytest.fixture
def valid_config():
    """Return a valid configuration dictionary."""
    return {
        "analysis": {
            "profile": "c6a-4-3",
            "process_width": 640,
            "progress_every": 30,
            "metadata_timeout": 30.0,
        },
        "render": {
            "source_dir": "game_elements/footage",
            "output_dir": "game_elements/processed",
            "ffmpeg_path": "ffmpeg",
            "crf": 12,
            "gop": 1,
        },
        "log_path": "logs/test.log",
        "log_level": "INFO",
    }
