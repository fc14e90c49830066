"""
Command-line entry point for marker-cut.

Finds the recurring on-screen marker in recorded footage, writes a cut-list
manifest of the segments to keep, and renders those segments with ffmpeg.

Usage:
    python src/main.py analyze clip1.mp4 clip2.mp4 --profile c6a-4-3
    python src/main.py render
    python src/main.py profiles

Arguments:
    --config: Path to configuration file
"""

import os
import sys
import argparse
import logging
import yaml
from typing import Dict, Any, List, Tuple, Optional

from detection.classifier import FrameClassifier
from inference.backend import BackendUnavailableError
from inference.opencv_backend import create_vision_backend
from models.config import Config
from models.queue import ProcessingStatus
from ops.logging import setup_logging
from pipeline.batch import BatchOrchestrator, BatchStatus
from pipeline.engine import AnalyzerConfig, VideoAnalyzer
from profiles.registry import PROFILES, list_profiles
from render.runner import RenderRunner
from storage.manifest import export_manifest, find_manifests, load_entries

VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into base and return base."""
    for k, v in (override or {}).items():
        if isinstance(v, dict) and isinstance(base.get(k), dict):
            _deep_merge(base[k], v)
        else:
            base[k] = v
    return base


def _read_yaml(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_config(config_path: str) -> Dict[str, Any]:
    """
    Load configuration with layering:
    - `config/default.yaml` (checked in)
    - `config/config.yaml` (local overrides)
    - plus any explicitly provided `--config` path (treated as overrides)
    """
    try:
        config_dir = os.path.dirname(config_path)
        base_path = os.path.join(config_dir, "default.yaml")
        merged: Dict[str, Any] = _read_yaml(base_path) if os.path.exists(base_path) else {}

        local_overrides_path = os.path.join(config_dir, "config.yaml")
        if os.path.exists(local_overrides_path):
            merged = _deep_merge(merged, _read_yaml(local_overrides_path))

        # Finally apply explicit config_path if it's not the local override file itself
        if os.path.exists(config_path) and os.path.abspath(config_path) != os.path.abspath(local_overrides_path):
            merged = _deep_merge(merged, _read_yaml(config_path))

        return merged
    except (OSError, yaml.YAMLError) as e:
        logging.error(f"Failed to load configuration: {e}")
        sys.exit(1)


def validate_config(config: Dict[str, Any]) -> Tuple[bool, Optional[str]]:
    """
    Validate configuration structure and values.

    Args:
        config: Configuration dictionary

    Returns:
        Tuple of (is_valid, error_message)
    """
    required_sections = ['analysis', 'render', 'log_path', 'log_level']
    for section in required_sections:
        if section not in config:
            return False, f"Missing required configuration section: {section}"

    # Analysis settings
    analysis = config.get('analysis') or {}
    if not isinstance(analysis, dict):
        return False, "analysis must be a mapping"
    profile = analysis.get('profile')
    if profile is not None and profile not in {p.id for p in PROFILES}:
        return False, f"analysis.profile must be one of: {', '.join(p.id for p in PROFILES)}"
    process_width = analysis.get('process_width')
    if process_width is not None:
        if not isinstance(process_width, int) or isinstance(process_width, bool) or process_width < 0:
            return False, "analysis.process_width must be a non-negative integer"
    if 'progress_every' in analysis:
        pe = analysis['progress_every']
        if not isinstance(pe, int) or isinstance(pe, bool) or pe <= 0:
            return False, "analysis.progress_every must be a positive integer"
    if 'metadata_timeout' in analysis:
        mt = analysis['metadata_timeout']
        if not isinstance(mt, (int, float)) or isinstance(mt, bool) or mt <= 0:
            return False, "analysis.metadata_timeout must be a positive number"

    # Render settings
    render = config.get('render') or {}
    if not isinstance(render, dict):
        return False, "render must be a mapping"
    for key in ('source_dir', 'output_dir', 'ffmpeg_path'):
        if key in render and not isinstance(render[key], str):
            return False, f"render.{key} must be a string"
    if 'crf' in render:
        crf = render['crf']
        if not isinstance(crf, int) or isinstance(crf, bool) or not (0 <= crf <= 63):
            return False, "render.crf must be an integer between 0 and 63"
    if 'gop' in render:
        gop = render['gop']
        if not isinstance(gop, int) or isinstance(gop, bool) or gop <= 0:
            return False, "render.gop must be a positive integer"

    # Log settings
    if not isinstance(config['log_path'], str):
        return False, "log_path must be a string"
    if config['log_level'] not in VALID_LOG_LEVELS:
        return False, f"log_level must be one of: {', '.join(VALID_LOG_LEVELS)}"

    return True, None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Marker Cut - find on-screen markers and cut them out')
    parser.add_argument('--config', type=str, default='config/config.yaml',
                        help='Path to configuration file')
    sub = parser.add_subparsers(dest='command', required=True)

    analyze = sub.add_parser('analyze', help='Analyze videos and write a cut-list manifest')
    analyze.add_argument('videos', nargs='+', help='Video files to analyze')
    analyze.add_argument('--profile', type=str, default=None,
                         help='Profile id (defaults to analysis.profile)')
    analyze.add_argument('--output-dir', type=str, default=None,
                         help='Directory for the manifest (defaults to output.manifest_dir)')

    render = sub.add_parser('render', help='Render keep ranges from manifests in the working directory')
    render.add_argument('--source-dir', type=str, default=None,
                        help='Directory holding source videos (defaults to render.source_dir)')
    render.add_argument('--output-dir', type=str, default=None,
                        help='Directory for rendered videos (defaults to render.output_dir)')

    sub.add_parser('profiles', help='List available profiles')
    return parser


def run_analyze(cfg: Config, videos: List[str], profile_id: str, output_dir: str) -> int:
    try:
        backend = create_vision_backend()
    except BackendUnavailableError as e:
        logging.error(str(e))
        return 1

    analyzer = VideoAnalyzer(
        FrameClassifier(backend),
        AnalyzerConfig(
            process_width=cfg.analysis.process_width,
            progress_every=cfg.analysis.progress_every,
        ),
    )
    orchestrator = BatchOrchestrator(analyzer, metadata_timeout=cfg.analysis.metadata_timeout)
    orchestrator.add_callback(
        lambda item: logging.debug(f"{item.file_name}: {item.status.value} {item.progress}%")
    )
    orchestrator.add_videos(videos)

    try:
        report = orchestrator.run(profile_id)
    except KeyboardInterrupt:
        orchestrator.cancel()
        logging.info("Analysis interrupted by user")
        if any(item.status == ProcessingStatus.COMPLETED for item in orchestrator.queue):
            export_manifest(orchestrator.queue, output_dir)
        return 130

    for item in orchestrator.queue:
        logging.info(
            f"{item.file_name}: {item.status.value}, "
            f"keep_ranges={len(item.keep_ranges)}"
            + (f", error={item.error}" if item.error else "")
        )

    if report.completed:
        export_manifest(orchestrator.queue, output_dir)

    return 1 if report.status == BatchStatus.ABORTED else 0


def run_render(cfg: Config) -> int:
    manifests = find_manifests(".")
    if not manifests:
        logging.error("No valid manifest files found")
        return 1

    entries = load_entries(manifests)
    if not entries:
        logging.error("Manifest files are empty")
        return 1

    logging.info(f"Total jobs queued: {len(entries)}")
    logging.info(f"Source: {cfg.render.source_dir}")
    logging.info(f"Output: {cfg.render.output_dir}")

    report = RenderRunner(cfg.render).run(entries)
    return 1 if report.failed else 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main application function."""
    args = build_parser().parse_args(argv)

    # Load configuration
    raw_config = load_config(args.config)
    is_valid, error_msg = validate_config(raw_config)
    if not is_valid:
        logging.error(f"Configuration validation failed: {error_msg}")
        return 1
    cfg = Config.from_dict(raw_config)

    # Setup logging
    setup_logging(cfg.log_path, cfg.log_level)

    if args.command == 'profiles':
        for profile in list_profiles():
            print(f"{profile.id:<12} {profile.label} ({profile.family.value})")
        return 0

    if args.command == 'analyze':
        profile_id = args.profile or cfg.analysis.profile
        output_dir = args.output_dir or cfg.output.manifest_dir
        return run_analyze(cfg, args.videos, profile_id, output_dir)

    if args.source_dir:
        cfg.render.source_dir = args.source_dir
    if args.output_dir:
        cfg.render.output_dir = args.output_dir
    return run_render(cfg)


if __name__ == "__main__":
    sys.exit(main())
