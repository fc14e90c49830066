"""
Typed configuration models matching the YAML config structure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class AnalysisConfig:
    """
    Analysis configuration.

    Detection thresholds and HSV bounds are fixed constants and are not
    part of the configuration.

    Attributes:
        profile: Default profile id used when none is given on the command line.
        process_width: Frames are downscaled to this width before classification
            (None or 0 keeps native resolution).
        progress_every: Accepted samples between progress updates.
        metadata_timeout: Seconds to wait for duration metadata before
            treating the asset as zero-length.
    """
    profile: str = "c6a-4-3"
    process_width: Optional[int] = 640
    progress_every: int = 30
    metadata_timeout: float = 30.0

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "AnalysisConfig":
        """Adapter: Create from config dictionary."""
        return cls(
            profile=d.get("profile", "c6a-4-3"),
            process_width=d.get("process_width", 640),
            progress_every=d.get("progress_every", 30),
            metadata_timeout=d.get("metadata_timeout", 30.0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "profile": self.profile,
            "process_width": self.process_width,
            "progress_every": self.progress_every,
            "metadata_timeout": self.metadata_timeout,
        }


@dataclass
class RenderConfig:
    """Transcoder configuration for the render runner."""
    source_dir: str = "game_elements/footage"
    output_dir: str = "game_elements/processed"
    ffmpeg_path: str = "ffmpeg"
    video_codec: str = "libx264"
    crf: int = 12
    gop: int = 1
    tune: Optional[str] = "animation"
    pix_fmt: str = "yuv420p"
    audio_codec: str = "aac"
    audio_bitrate: str = "320k"

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "RenderConfig":
        return cls(
            source_dir=d.get("source_dir", "game_elements/footage"),
            output_dir=d.get("output_dir", "game_elements/processed"),
            ffmpeg_path=d.get("ffmpeg_path", "ffmpeg"),
            video_codec=d.get("video_codec", "libx264"),
            crf=d.get("crf", 12),
            gop=d.get("gop", 1),
            tune=d.get("tune", "animation"),
            pix_fmt=d.get("pix_fmt", "yuv420p"),
            audio_codec=d.get("audio_codec", "aac"),
            audio_bitrate=d.get("audio_bitrate", "320k"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source_dir": self.source_dir,
            "output_dir": self.output_dir,
            "ffmpeg_path": self.ffmpeg_path,
            "video_codec": self.video_codec,
            "crf": self.crf,
            "gop": self.gop,
            "tune": self.tune,
            "pix_fmt": self.pix_fmt,
            "audio_codec": self.audio_codec,
            "audio_bitrate": self.audio_bitrate,
        }


@dataclass
class OutputConfig:
    """Where analysis manifests are written."""
    manifest_dir: str = "."

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "OutputConfig":
        return cls(manifest_dir=d.get("manifest_dir", "."))

    def to_dict(self) -> Dict[str, Any]:
        return {"manifest_dir": self.manifest_dir}


@dataclass
class Config:
    """
    Complete application configuration.

    This is a typed representation of the YAML config structure.
    """
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    log_path: str = "logs/marker_cut.log"
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Config":
        """Adapter: Create Config from raw dictionary (e.g., from load_config)."""
        return cls(
            analysis=AnalysisConfig.from_dict(d.get("analysis", {}) or {}),
            render=RenderConfig.from_dict(d.get("render", {}) or {}),
            output=OutputConfig.from_dict(d.get("output", {}) or {}),
            log_path=d.get("log_path", "logs/marker_cut.log"),
            log_level=d.get("log_level", "INFO"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to dictionary (for saving or passing to existing code)."""
        return {
            "analysis": self.analysis.to_dict(),
            "render": self.render.to_dict(),
            "output": self.output.to_dict(),
            "log_path": self.log_path,
            "log_level": self.log_level,
        }
