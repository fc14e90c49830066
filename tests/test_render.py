"""
Tests for ffmpeg command construction and the render runner.
"""

import io
import os

import pytest

from models.config import RenderConfig
from models.ranges import KeepRange
from render import ffmpeg as ffmpeg_module
from render.ffmpeg import (
    ProgressParser,
    RenderError,
    build_ffmpeg_args,
    build_filter_complex,
    output_path_for,
    parse_ffmpeg_time,
    run_ffmpeg,
)
from render.runner import RenderRunner, entry_ranges, resolve_source_path


class FakeProcess:
    """Stands in for subprocess.Popen."""

    def __init__(self, lines, code=0):
        self.stderr = io.StringIO("".join(lines))
        self._code = code

    def wait(self):
        return self._code


class TestFfmpegCommand:
    """Filter graph and argument list."""

    def test_filter_complex(self):
        graph = build_filter_complex([KeepRange(0.0, 1.5), KeepRange(3.0, 4.0)])
        assert graph == (
            "[0:v]trim=start=0.000:end=1.500,setpts=PTS-STARTPTS[v0];"
            "[0:a]atrim=start=0.000:end=1.500,asetpts=PTS-STARTPTS[a0];"
            "[0:v]trim=start=3.000:end=4.000,setpts=PTS-STARTPTS[v1];"
            "[0:a]atrim=start=3.000:end=4.000,asetpts=PTS-STARTPTS[a1];"
            "[v0][a0][v1][a1]concat=n=2:v=1:a=1[outv][outa]"
        )

    def test_args(self):
        args = build_ffmpeg_args("in.mp4", [KeepRange(0.0, 1.0)], "out.mp4", RenderConfig())

        assert args[:3] == ["ffmpeg", "-i", "in.mp4"]
        assert args[-2:] == ["out.mp4", "-y"]
        assert args[args.index("-crf") + 1] == "12"
        assert args[args.index("-g") + 1] == "1"
        assert args[args.index("-tune") + 1] == "animation"
        assert args[args.index("-b:a") + 1] == "320k"

    def test_tune_optional(self):
        args = build_ffmpeg_args("in.mp4", [KeepRange(0.0, 1.0)], "out.mp4", RenderConfig(tune=None))
        assert "-tune" not in args

    def test_output_path(self):
        path = output_path_for("clip.final.mp4", "processed")
        assert path == os.path.join("processed", "clip.final_clean.mp4")

    def test_parse_time(self):
        assert parse_ffmpeg_time("01:02:03.50") == pytest.approx(3723.5)


class TestProgressParser:
    """Progress from ffmpeg stderr."""

    def test_progress_after_duration(self):
        parser = ProgressParser()
        assert parser.feed("  Duration: 00:01:40.00, start: 0.000000, bitrate: 1000 kb/s") is None
        assert parser.feed("frame=  10 fps=0.0 q=0.0 size=0kB time=00:00:50.00 bitrate=0.0kbits/s") == pytest.approx(50.0)

    def test_no_duration_no_progress(self):
        parser = ProgressParser()
        assert parser.feed("time=00:00:50.00") is None

    def test_capped_below_complete(self):
        parser = ProgressParser()
        parser.feed("Duration: 00:00:10.00")
        assert parser.feed("time=00:00:12.00") == pytest.approx(99.9)


class TestRunFfmpeg:
    """Process execution with a fake Popen."""

    def test_success_reports_complete(self, monkeypatch):
        lines = ["Duration: 00:00:10.00\n", "time=00:00:05.00\n"]
        monkeypatch.setattr(ffmpeg_module.subprocess, "Popen", lambda *a, **kw: FakeProcess(lines))
        progress = []

        run_ffmpeg(["ffmpeg"], on_progress=progress.append)

        assert progress == [pytest.approx(50.0), 100.0]

    def test_failure_raises_with_tail(self, monkeypatch):
        lines = ["Invalid data found when processing input\n"]
        monkeypatch.setattr(ffmpeg_module.subprocess, "Popen", lambda *a, **kw: FakeProcess(lines, code=1))

        with pytest.raises(RenderError) as exc:
            run_ffmpeg(["ffmpeg"])
        assert "Invalid data" in str(exc.value)

    def test_missing_binary(self, monkeypatch):
        def raise_missing(*args, **kwargs):
            raise FileNotFoundError("ffmpeg")

        monkeypatch.setattr(ffmpeg_module.subprocess, "Popen", raise_missing)
        with pytest.raises(RenderError):
            run_ffmpeg(["ffmpeg"])


class TestRenderRunner:
    """Per-entry skip and failure handling."""

    @pytest.fixture
    def layout(self, tmp_path):
        source_dir = tmp_path / "footage"
        source_dir.mkdir()
        for name in ("a.mp4", "fail.mp4", "empty.mp4", "broken.mp4"):
            (source_dir / name).write_bytes(b"")
        (tmp_path / "local.mp4").write_bytes(b"")
        config = RenderConfig(source_dir=str(source_dir), output_dir=str(tmp_path / "processed"))
        return tmp_path, config

    def test_resolve_source_path(self, layout):
        root, config = layout
        assert resolve_source_path("a.mp4", config.source_dir, str(root)) == os.path.join(config.source_dir, "a.mp4")
        assert resolve_source_path("local.mp4", config.source_dir, str(root)) == os.path.join(str(root), "local.mp4")
        assert resolve_source_path("missing.mp4", config.source_dir, str(root)) is None

    def test_entry_ranges_legacy_key(self):
        assert entry_ranges({"ranges": [{"start": 1, "end": 2}]}) == [KeepRange(1.0, 2.0)]

    def test_run(self, layout):
        root, config = layout
        calls = []

        def fake_ffmpeg(args, on_progress=None):
            calls.append(args)
            if args[2].endswith("fail.mp4"):
                raise RenderError("exit 1")
            on_progress(50.0)
            on_progress(100.0)

        entries = [
            {"keepRanges": [{"start": 0, "end": 1}]},
            {"fileName": "missing.mp4", "keepRanges": [{"start": 0, "end": 1}]},
            {"fileName": "empty.mp4", "keepRanges": []},
            {"fileName": "broken.mp4", "keepRanges": [{"start": "x"}]},
            {"fileName": "fail.mp4", "keepRanges": [{"start": 0, "end": 1}]},
            {"fileName": "a.mp4", "keepRanges": [{"start": 0, "end": 1}, {"start": 2, "end": 3}]},
            {"file": "local.mp4", "ranges": [{"start": 0, "end": 1}]},
        ]

        runner = RenderRunner(config, cwd=str(root), ffmpeg=fake_ffmpeg, show_progress=False)
        report = runner.run(entries)

        assert report.rendered == ["a.mp4", "local.mp4"]
        assert report.failed == ["fail.mp4"]
        assert report.skipped == ["#1", "missing.mp4", "empty.mp4", "broken.mp4"]
        assert os.path.isdir(config.output_dir)
        assert len(calls) == 3
        assert calls[1][-2] == os.path.join(config.output_dir, "a_clean.mp4")
