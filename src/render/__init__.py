"""
Render collaborator: turns manifest keep ranges into cut videos via ffmpeg.
"""

from .ffmpeg import (
    RenderError,
    build_ffmpeg_args,
    build_filter_complex,
    output_path_for,
    parse_ffmpeg_time,
    run_ffmpeg,
)
from .runner import RenderReport, RenderRunner, resolve_source_path

__all__ = [
    "RenderError",
    "build_ffmpeg_args",
    "build_filter_complex",
    "output_path_for",
    "parse_ffmpeg_time",
    "run_ffmpeg",
    "RenderReport",
    "RenderRunner",
    "resolve_source_path",
]
