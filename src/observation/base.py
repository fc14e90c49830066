"""
VideoSource interface for seekable, frame-decodable video inputs.

This defines the contract the analysis pipeline needs from a video:
- sequential decode of frames with their media time
- seeking to a media time (used by edge refinement)
- a known duration
- explicit release of the underlying decoder
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional

from models.frame import FrameData


class DecodeUnavailableError(RuntimeError):
    """No video decode backend is available; no video can be analyzed."""


class SourceOpenError(RuntimeError):
    """A single video could not be opened."""


class SeekError(RuntimeError):
    """The source rejected a seek request."""


@dataclass
class SourceConfig:
    """
    Base configuration for video sources.

    Attributes:
        source_id: Identifier for this source (usually the file name).
        metadata: Additional source-specific configuration.
    """
    source_id: str = "default"
    metadata: Dict[str, Any] = field(default_factory=dict)


class VideoSource(ABC):
    """
    Abstract base class for video sources.

    Lifecycle:
        1. Create instance with config
        2. Call open() to initialize the decoder
        3. Call read() repeatedly to get frames, seek() to reposition
        4. Call close() to release resources

    Can also be used as a context manager, which guarantees release on
    every exit path:
        with OpenCVVideoSource(config) as source:
            for frame_data in source:
                process(frame_data)
    """

    def __init__(self, config: SourceConfig):
        self._config = config
        self._is_open = False
        self._frame_index = 0

    @property
    def source_id(self) -> str:
        """Identifier for this source."""
        return self._config.source_id

    @property
    def is_open(self) -> bool:
        """Whether the source is currently open and ready to read."""
        return self._is_open

    @property
    def frame_index(self) -> int:
        """Index of the last frame read."""
        return self._frame_index

    @property
    def duration(self) -> float:
        """Duration in seconds, 0.0 when unknown."""
        return 0.0

    @abstractmethod
    def open(self) -> None:
        """
        Open the video for decoding.

        Raises:
            SourceOpenError: If the video cannot be opened.
        """
        pass

    @abstractmethod
    def read(self) -> Optional[FrameData]:
        """
        Decode the next frame.

        Returns:
            FrameData with the frame and its media time, or None at end of
            stream (or when decoding stalls).
        """
        pass

    @abstractmethod
    def seek(self, seconds: float) -> None:
        """
        Reposition so the next read() returns the frame at ``seconds``.

        Raises:
            SeekError: If the source cannot seek there.
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """
        Release the decoder. Safe to call multiple times.
        """
        pass

    def __enter__(self) -> "VideoSource":
        """Context manager entry - opens the source."""
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - closes the source."""
        self.close()

    def __iter__(self) -> Iterator[FrameData]:
        """
        Iterate over frames until end of stream.

        The source must be open before iterating.
        """
        if not self._is_open:
            raise RuntimeError("Source must be open before iterating")

        while True:
            frame_data = self.read()
            if frame_data is None:
                break
            yield frame_data
