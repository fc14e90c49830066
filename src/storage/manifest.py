"""
Cut-list manifest export and import.

A manifest is a JSON array of entries (batch form) or a single entry
object (legacy single-item form):

    {
      "fileName": "clip.mp4",
      "durationSeconds": 20.0,
      "keepRanges": [{"start": 0.0, "end": 9.9}],
      "detections": [{"start": 10.0, "end": 12.0, "confidence": 1.0}]
    }
"""

from __future__ import annotations

import json
import logging
import os
import time
from typing import Any, Dict, Iterable, List, Optional

from models.queue import ProcessingStatus, QueueItem

BATCH_MANIFEST_PREFIX = "batch-cut-list"
LEGACY_MANIFEST_NAME = "cut-list.json"


class ManifestError(ValueError):
    """The manifest file is not valid JSON or has the wrong shape."""


def manifest_filename(now: Optional[float] = None) -> str:
    """Batch manifest name stamped with epoch milliseconds."""
    ts = int((time.time() if now is None else now) * 1000)
    return f"{BATCH_MANIFEST_PREFIX}-{ts}.json"


def build_manifest(items: Iterable[QueueItem]) -> List[Dict[str, Any]]:
    """Manifest entries for the COMPLETED items, in queue order."""
    return [
        item.to_manifest_entry()
        for item in items
        if item.status == ProcessingStatus.COMPLETED
    ]


def export_manifest(items: Iterable[QueueItem], directory: str = ".", now: Optional[float] = None) -> str:
    """
    Write a batch manifest for the completed items.

    Returns:
        Path of the written file.
    """
    entries = build_manifest(items)
    if directory and not os.path.exists(directory):
        os.makedirs(directory)

    path = os.path.join(directory, manifest_filename(now))
    with open(path, "w", encoding="utf-8") as f:
        json.dump(entries, f, indent=2)

    logging.info(f"Manifest written: {path} ({len(entries)} item(s))")
    return path


def parse_manifest(raw: Any) -> List[Dict[str, Any]]:
    """Normalize decoded JSON to a list of entry dicts."""
    entries = raw if isinstance(raw, list) else [raw]
    for entry in entries:
        if not isinstance(entry, dict):
            raise ManifestError(f"Manifest entry must be an object, got {type(entry).__name__}")
    return entries


def load_manifest(path: str) -> List[Dict[str, Any]]:
    """
    Read a manifest file in batch (array) or legacy (object) form.

    Raises:
        ManifestError: If the file is not valid JSON or entries are not objects.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise ManifestError(f"Failed to parse {path}: {e}") from e
    return parse_manifest(raw)


def find_manifests(directory: str = ".") -> List[str]:
    """
    Locate manifests in a directory.

    Every batch-cut-list*.json file (sorted by name), falling back to the
    legacy cut-list.json, else an empty list.
    """
    names = sorted(
        name for name in os.listdir(directory)
        if name.startswith(BATCH_MANIFEST_PREFIX) and name.endswith(".json")
    )
    if names:
        return [os.path.join(directory, name) for name in names]

    legacy = os.path.join(directory, LEGACY_MANIFEST_NAME)
    if os.path.exists(legacy):
        return [legacy]
    return []


def load_entries(paths: Iterable[str]) -> List[Dict[str, Any]]:
    """Concatenate entries from several manifests; unreadable files are skipped."""
    combined: List[Dict[str, Any]] = []
    for path in paths:
        try:
            entries = load_manifest(path)
        except (ManifestError, OSError) as e:
            logging.error(f"Skipping manifest {path}: {e}")
            continue
        logging.info(f"Loaded manifest {path} ({len(entries)} item(s))")
        combined.extend(entries)
    return combined


def load_queue(paths: Iterable[str]) -> List[QueueItem]:
    """Rebuild completed queue items from manifests."""
    return [QueueItem.from_manifest_entry(entry) for entry in load_entries(paths)]
