"""
Manifest storage for analysis results.
"""

from .manifest import (
    BATCH_MANIFEST_PREFIX,
    LEGACY_MANIFEST_NAME,
    ManifestError,
    build_manifest,
    export_manifest,
    find_manifests,
    load_entries,
    load_manifest,
    load_queue,
    manifest_filename,
)

__all__ = [
    "BATCH_MANIFEST_PREFIX",
    "LEGACY_MANIFEST_NAME",
    "ManifestError",
    "build_manifest",
    "export_manifest",
    "find_manifests",
    "load_entries",
    "load_manifest",
    "load_queue",
    "manifest_filename",
]
