"""
Queue models for batch analysis.

A QueueItem wraps one video asset and carries its lifecycle status and the
ranges produced for it. Items convert to and from manifest entries.
"""

from __future__ import annotations

import os
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .ranges import DetectionRange, KeepRange


class ProcessingStatus(str, Enum):
    """Lifecycle status of a queue item."""
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


@dataclass
class VideoAsset:
    """
    A video file admitted to the queue.
    
    Attributes:
        path: Path to the video file.
        duration: Duration in seconds (0.0 when unknown).
    """
    path: str
    duration: float = 0.0

    @property
    def file_name(self) -> str:
        return os.path.basename(self.path)


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass
class QueueItem:
    """
    One entry in the batch queue.
    
    Attributes:
        asset: The video asset.
        id: Unique identifier.
        status: Current lifecycle status.
        progress: Analysis progress percentage (0-100).
        detections: Detection ranges for the asset.
        keep_ranges: Keep ranges derived from detections and duration.
        error: Error message when status is ERROR.
    """
    asset: VideoAsset
    id: str = field(default_factory=_new_id)
    status: ProcessingStatus = ProcessingStatus.PENDING
    progress: int = 0
    detections: List[DetectionRange] = field(default_factory=list)
    keep_ranges: List[KeepRange] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def file_name(self) -> str:
        return self.asset.file_name

    def reset(self) -> None:
        """Return the item to PENDING and drop any results."""
        self.status = ProcessingStatus.PENDING
        self.progress = 0
        self.detections = []
        self.keep_ranges = []
        self.error = None

    @classmethod
    def from_manifest_entry(cls, d: Dict[str, Any]) -> "QueueItem":
        """
        Adapter: Create a completed item from a manifest entry.

        Accepts both the current keys (fileName, durationSeconds, keepRanges)
        and the legacy ones (file, duration, ranges).
        """
        file_name = d.get("fileName") or d.get("file")
        if not file_name:
            raise ValueError("Manifest entry is missing a file name")
        duration = d.get("durationSeconds", d.get("duration", 0.0)) or 0.0
        keep = d.get("keepRanges")
        if keep is None:
            keep = d.get("ranges") or []
        return cls(
            asset=VideoAsset(path=file_name, duration=float(duration)),
            status=ProcessingStatus.COMPLETED,
            progress=100,
            detections=[DetectionRange.from_dict(r) for r in d.get("detections") or []],
            keep_ranges=[KeepRange.from_dict(r) for r in keep],
        )

    def to_manifest_entry(self) -> Dict[str, Any]:
        """Convert to the manifest entry exported to the renderer."""
        return {
            "fileName": self.file_name,
            "durationSeconds": self.asset.duration,
            "keepRanges": [r.to_dict() for r in self.keep_ranges],
            "detections": [r.to_dict() for r in self.detections],
        }
