"""
Render runner.

Walks manifest entries one at a time, resolves each source video, and
renders the keep ranges through ffmpeg. A bad entry is skipped or marked
failed and the run continues with the next one.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from tqdm import tqdm

from models.config import RenderConfig
from models.ranges import KeepRange
from .ffmpeg import RenderError, build_ffmpeg_args, output_path_for, run_ffmpeg


@dataclass
class RenderReport:
    """Outcome of a render run."""
    rendered: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)


def resolve_source_path(name: str, source_dir: str, cwd: str = ".") -> Optional[str]:
    """Find a source video in the source directory, then the working directory."""
    in_source_dir = os.path.join(source_dir, name)
    if os.path.exists(in_source_dir):
        return in_source_dir
    in_cwd = os.path.join(cwd, name)
    if os.path.exists(in_cwd):
        return in_cwd
    return None


def entry_ranges(entry: Dict[str, Any]) -> List[KeepRange]:
    raw = entry.get("keepRanges")
    if raw is None:
        raw = entry.get("ranges") or []
    return [KeepRange.from_dict(r) for r in raw]


class RenderRunner:
    """
    Example:
        runner = RenderRunner(RenderConfig())
        report = runner.run(load_entries(find_manifests(".")))
    """

    def __init__(
        self,
        config: RenderConfig,
        cwd: str = ".",
        ffmpeg: Callable[..., None] = run_ffmpeg,
        show_progress: bool = True,
    ):
        self.config = config
        self._cwd = cwd
        self._ffmpeg = ffmpeg
        self._show_progress = show_progress

    def run(self, entries: List[Dict[str, Any]]) -> RenderReport:
        report = RenderReport()
        if not os.path.exists(self.config.output_dir):
            logging.info(f"Creating output folder: {self.config.output_dir}")
            os.makedirs(self.config.output_dir)

        total = len(entries)
        for index, entry in enumerate(entries, start=1):
            name = entry.get("fileName") or entry.get("file")
            if not name:
                logging.error(f"[{index}/{total}] Job missing filename. Skipping.")
                report.skipped.append(f"#{index}")
                continue

            logging.info(f"[{index}/{total}] Processing: {name}")
            self._render_entry(name, entry, report)

        logging.info(
            f"Render finished: rendered={len(report.rendered)}, "
            f"skipped={len(report.skipped)}, failed={len(report.failed)}"
        )
        return report

    def _render_entry(self, name: str, entry: Dict[str, Any], report: RenderReport) -> None:
        input_path = resolve_source_path(name, self.config.source_dir, self._cwd)
        if input_path is None:
            logging.error(f"Skipped {name}: file not found in source or working directory")
            report.skipped.append(name)
            return

        try:
            ranges = entry_ranges(entry)
        except (KeyError, TypeError, ValueError) as e:
            logging.error(f"Skipped {name}: invalid keep ranges ({e})")
            report.skipped.append(name)
            return

        if not ranges:
            logging.info(f"No cuts needed for {name}. Skipped.")
            report.skipped.append(name)
            return

        output_path = output_path_for(name, self.config.output_dir)
        args = build_ffmpeg_args(input_path, ranges, output_path, self.config)
        logging.info(f"Rendering {len(ranges)} segment(s) to: {output_path}")

        bar = tqdm(total=100.0, desc=name, unit="%", disable=not self._show_progress)
        try:
            self._ffmpeg(args, on_progress=lambda pct: _advance(bar, pct))
        except RenderError as e:
            logging.error(f"Render failed for {name}: {e}")
            report.failed.append(name)
            return
        finally:
            bar.close()

        logging.info(f"Saved to: {output_path}")
        report.rendered.append(name)


def _advance(bar: tqdm, percent: float) -> None:
    bar.update(max(0.0, percent - bar.n))
