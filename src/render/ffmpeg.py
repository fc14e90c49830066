"""
FFmpeg command construction and execution for cut rendering.

Each keep range becomes one trimmed, re-based video/audio pair; the pairs
are concatenated in range order.
"""

from __future__ import annotations

import logging
import os
import re
import subprocess
from typing import Callable, List, Optional, Sequence

from models.config import RenderConfig
from models.ranges import KeepRange

_DURATION_RE = re.compile(r"Duration: (\d{2}):(\d{2}):(\d{2}\.\d{2})")
_TIME_RE = re.compile(r"time=(\d{2}):(\d{2}):(\d{2}\.\d{2})")

# Progress is held below 100 until ffmpeg exits cleanly
PROGRESS_CAP = 99.9


class RenderError(RuntimeError):
    """FFmpeg could not be started or exited with an error."""


def parse_ffmpeg_time(value: str) -> float:
    """Parse ``HH:MM:SS.xx`` into seconds."""
    hours, minutes, seconds = value.split(":")
    return int(hours) * 3600 + int(minutes) * 60 + float(seconds)


def build_filter_complex(ranges: Sequence[KeepRange]) -> str:
    """Filter graph that trims every keep range and concatenates them."""
    parts = []
    concat_inputs = ""
    for i, r in enumerate(ranges):
        start = f"{r.start:.3f}"
        end = f"{r.end:.3f}"
        parts.append(f"[0:v]trim=start={start}:end={end},setpts=PTS-STARTPTS[v{i}];")
        parts.append(f"[0:a]atrim=start={start}:end={end},asetpts=PTS-STARTPTS[a{i}];")
        concat_inputs += f"[v{i}][a{i}]"
    parts.append(f"{concat_inputs}concat=n={len(ranges)}:v=1:a=1[outv][outa]")
    return "".join(parts)


def build_ffmpeg_args(
    input_path: str,
    ranges: Sequence[KeepRange],
    output_path: str,
    cfg: RenderConfig,
) -> List[str]:
    """Full ffmpeg argument list (program name first)."""
    args = [cfg.ffmpeg_path, "-i", input_path]
    args += ["-filter_complex", build_filter_complex(ranges)]
    args += ["-map", "[outv]", "-map", "[outa]"]
    args += ["-c:v", cfg.video_codec, "-g", str(cfg.gop), "-crf", str(cfg.crf)]
    if cfg.tune:
        args += ["-tune", cfg.tune]
    args += ["-pix_fmt", cfg.pix_fmt]
    args += ["-c:a", cfg.audio_codec, "-b:a", cfg.audio_bitrate]
    args += [output_path, "-y"]
    return args


def output_path_for(input_name: str, output_dir: str) -> str:
    """``<stem>_clean<ext>`` inside the output directory."""
    stem, ext = os.path.splitext(os.path.basename(input_name))
    return os.path.join(output_dir, f"{stem}_clean{ext}")


class ProgressParser:
    """Tracks transcode progress from ffmpeg's stderr lines."""

    def __init__(self):
        self.duration = 0.0
        self.percent = 0.0

    def feed(self, line: str) -> Optional[float]:
        """Consume one stderr line; return the new percentage if it moved."""
        if self.duration == 0:
            match = _DURATION_RE.search(line)
            if match:
                self.duration = parse_ffmpeg_time(":".join(match.groups()))

        match = _TIME_RE.search(line)
        if match and self.duration > 0:
            current = parse_ffmpeg_time(":".join(match.groups()))
            self.percent = min(PROGRESS_CAP, current / self.duration * 100)
            return self.percent
        return None


def run_ffmpeg(args: List[str], on_progress: Optional[Callable[[float], None]] = None) -> None:
    """
    Run ffmpeg, streaming progress from stderr.

    Raises:
        RenderError: If ffmpeg cannot start or exits non-zero.
    """
    logging.debug(f"Running: {' '.join(args)}")
    try:
        proc = subprocess.Popen(
            args,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.PIPE,
            text=True,
            errors="replace",
        )
    except OSError as e:
        raise RenderError(f"Failed to start FFmpeg: {e}") from e

    parser = ProgressParser()
    tail: List[str] = []
    # Text mode splits ffmpeg's carriage-return progress updates into lines
    for line in proc.stderr:
        tail = (tail + [line.rstrip()])[-20:]
        percent = parser.feed(line)
        if percent is not None and on_progress is not None:
            on_progress(percent)
    proc.stderr.close()

    code = proc.wait()
    if code != 0:
        raise RenderError(f"FFmpeg exited with code {code}:\n" + "\n".join(tail))
    if on_progress is not None:
        on_progress(100.0)
