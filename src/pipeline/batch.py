"""
Batch orchestrator.

Drives the analysis engine across a queue of videos, strictly one at a
time. Each item owns the video source for the length of its turn and
releases it on every exit path. Item-level failures mark that item ERROR
and the batch moves on; engine-level failures (no vision backend, no
decoder) abort the run.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, List, Optional

from algorithms.ranges.keep import calculate_keep_ranges
from inference.backend import BackendUnavailableError
from models.queue import ProcessingStatus, QueueItem, VideoAsset
from observation.base import DecodeUnavailableError, VideoSource
from observation.opencv_source import create_video_source
from observation.probe import DEFAULT_METADATA_TIMEOUT, probe_duration
from pipeline.cancellation import AnalysisCancelled, CancellationToken
from pipeline.engine import VideoAnalyzer
from profiles.registry import get_profile

# Errors that make every item unanalyzable
FATAL_ERRORS = (BackendUnavailableError, DecodeUnavailableError)


class BatchStatus(str, Enum):
    """Terminal status of a batch run."""
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    ABORTED = "aborted"


@dataclass
class BatchReport:
    """Outcome of one batch run."""
    status: BatchStatus = BatchStatus.COMPLETED
    completed: int = 0
    failed: int = 0
    skipped: int = 0
    error: Optional[str] = None


class BatchOrchestrator:
    """
    Serial batch analysis over a queue of videos.

    Example:
        orchestrator = BatchOrchestrator(analyzer)
        orchestrator.add_videos(["a.mp4", "b.mp4"])
        report = orchestrator.run("c6a-4-3")
    """

    def __init__(
        self,
        analyzer: VideoAnalyzer,
        source_factory: Callable[[str], VideoSource] = create_video_source,
        duration_probe: Callable[..., float] = probe_duration,
        metadata_timeout: float = DEFAULT_METADATA_TIMEOUT,
    ):
        self._analyzer = analyzer
        self._source_factory = source_factory
        self._duration_probe = duration_probe
        self._metadata_timeout = metadata_timeout
        self.queue: List[QueueItem] = []
        self._callbacks: List[Callable[[QueueItem], None]] = []
        self._run_lock = threading.Lock()
        self._token_lock = threading.Lock()
        self._active_token: Optional[CancellationToken] = None
        self._stop_requested = threading.Event()

    def add_callback(self, callback: Callable[[QueueItem], None]) -> None:
        """
        Add a callback invoked whenever an item's status or progress changes.

        Args:
            callback: Function taking the updated QueueItem.
        """
        self._callbacks.append(callback)

    def add_videos(self, paths: Iterable[str]) -> List[QueueItem]:
        """Admit videos to the queue, probing each duration with a bounded wait."""
        items = []
        for path in paths:
            duration = self._duration_probe(path, timeout=self._metadata_timeout)
            item = QueueItem(asset=VideoAsset(path=path, duration=duration))
            items.append(item)
            logging.info(f"Queued {item.file_name} (duration={duration:.2f}s)")
        self.queue.extend(items)
        return items

    def remove(self, item_id: str) -> bool:
        """Remove an item that is not currently processing."""
        for item in self.queue:
            if item.id == item_id and item.status != ProcessingStatus.PROCESSING:
                self.queue.remove(item)
                return True
        return False

    def cancel(self) -> None:
        """Cancel the running analysis and stop the batch after it unwinds."""
        self._stop_requested.set()
        with self._token_lock:
            if self._active_token is not None:
                self._active_token.cancel()

    def run(self, profile_id: str) -> BatchReport:
        """
        Process every item that is not already COMPLETED, in queue order.

        Returns:
            BatchReport with the terminal status and per-status counts.
        """
        self._stop_requested.clear()
        report = BatchReport()
        logging.info(f"Batch started: items={len(self.queue)}, profile={profile_id}")

        for item in list(self.queue):
            if item.status == ProcessingStatus.COMPLETED:
                report.skipped += 1
                continue
            if self._stop_requested.is_set():
                report.status = BatchStatus.CANCELLED
                break

            try:
                self.process_video(item, profile_id)
            except AnalysisCancelled:
                report.status = BatchStatus.CANCELLED
                logging.info(f"Batch cancelled during {item.file_name}")
                break
            except FATAL_ERRORS as e:
                report.status = BatchStatus.ABORTED
                report.error = str(e)
                report.failed += 1
                logging.error(f"Batch aborted: {e}")
                break

            if item.status == ProcessingStatus.COMPLETED:
                report.completed += 1
            elif item.status == ProcessingStatus.ERROR:
                report.failed += 1

        logging.info(
            f"Batch {report.status.value}: completed={report.completed}, "
            f"failed={report.failed}, skipped={report.skipped}"
        )
        return report

    def process_video(self, item: QueueItem, profile_id: str) -> None:
        """
        Analyze one item and store its ranges.

        Starting a new run cancels any run still in progress; the new run
        waits until the previous one has released its source.

        Raises:
            AnalysisCancelled: The run was cancelled; the item is back to PENDING.
            BackendUnavailableError, DecodeUnavailableError: Fatal to the batch.
        """
        token = CancellationToken()
        with self._token_lock:
            if self._active_token is not None:
                self._active_token.cancel()
            self._active_token = token

        try:
            with self._run_lock:
                self._process_locked(item, profile_id, token)
        finally:
            with self._token_lock:
                if self._active_token is token:
                    self._active_token = None

    def _process_locked(self, item: QueueItem, profile_id: str, token: CancellationToken) -> None:
        item.reset()
        item.status = ProcessingStatus.PROCESSING
        self._notify(item)
        logging.info(f"Processing {item.file_name}")

        try:
            profile = get_profile(profile_id)
            source = self._source_factory(item.asset.path)
            with source:
                detections = self._analyzer.analyze(
                    source,
                    profile,
                    item.asset.duration,
                    token,
                    on_progress=lambda p: self._set_progress(item, p),
                )
        except (AnalysisCancelled, KeyboardInterrupt):
            item.reset()
            self._notify(item)
            raise
        except FATAL_ERRORS as e:
            self._mark_error(item, e)
            raise
        except Exception as e:
            self._mark_error(item, e)
            return

        item.detections = detections
        item.keep_ranges = calculate_keep_ranges(detections, item.asset.duration)
        item.status = ProcessingStatus.COMPLETED
        item.progress = 100
        self._notify(item)
        logging.info(
            f"Completed {item.file_name}: detections={len(item.detections)}, "
            f"keep_ranges={len(item.keep_ranges)}"
        )

    def _set_progress(self, item: QueueItem, progress: int) -> None:
        item.progress = progress
        self._notify(item)

    def _mark_error(self, item: QueueItem, error: Exception) -> None:
        item.status = ProcessingStatus.ERROR
        item.error = str(error)
        self._notify(item)
        logging.error(f"Failed to process {item.file_name}: {error}")

    def _notify(self, item: QueueItem) -> None:
        for callback in self._callbacks:
            try:
                callback(item)
            except Exception as e:
                logging.warning(f"Callback error: {e}")
