"""
Time range models produced by the detection pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class DetectionRange:
    """
    Interval during which the marker was judged visible.
    
    Attributes:
        start: Start time in seconds.
        end: End time in seconds (>= start).
        confidence: Always 1.0 for the binary classifier.
    """
    start: float
    end: float
    confidence: float = 1.0

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "DetectionRange":
        return cls(
            start=float(d["start"]),
            end=float(d["end"]),
            confidence=float(d.get("confidence", 1.0)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"start": self.start, "end": self.end, "confidence": self.confidence}

    @property
    def duration(self) -> float:
        return self.end - self.start


@dataclass(frozen=True)
class KeepRange:
    """Interval of source footage to retain in the final cut."""
    start: float
    end: float

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "KeepRange":
        return cls(start=float(d["start"]), end=float(d["end"]))

    def to_dict(self) -> Dict[str, Any]:
        return {"start": self.start, "end": self.end}

    @property
    def duration(self) -> float:
        return self.end - self.start
