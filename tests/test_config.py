"""
Smoke tests for configuration loading and validation.
"""

import os

import pytest

from main import load_config, validate_config
from models.config import Config, RenderConfig


class TestValidateConfig:
    """Tests for validate_config function."""

    def test_valid_config_passes(self, valid_config):
        """A complete valid config passes validation."""
        is_valid, error = validate_config(valid_config)

        assert is_valid is True
        assert error is None

    @pytest.mark.parametrize("section", ["analysis", "render", "log_path", "log_level"])
    def test_missing_section(self, valid_config, section):
        """Every required section is checked."""
        del valid_config[section]

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert section in error

    def test_unknown_profile(self, valid_config):
        valid_config["analysis"]["profile"] = "c7-widescreen"

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "analysis.profile" in error

    def test_process_width_type(self, valid_config):
        valid_config["analysis"]["process_width"] = "640"

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "process_width" in error

    def test_progress_every_positive(self, valid_config):
        valid_config["analysis"]["progress_every"] = 0

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "progress_every" in error

    def test_metadata_timeout_positive(self, valid_config):
        valid_config["analysis"]["metadata_timeout"] = -1

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "metadata_timeout" in error

    def test_crf_range(self, valid_config):
        valid_config["render"]["crf"] = 70

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "crf" in error

    def test_bool_is_not_an_integer(self, valid_config):
        valid_config["render"]["gop"] = True

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "gop" in error

    def test_render_path_type(self, valid_config):
        valid_config["render"]["output_dir"] = 5

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "output_dir" in error

    def test_invalid_log_level(self, valid_config):
        valid_config["log_level"] = "VERBOSE"

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "log_level" in error


class TestLoadConfig:
    """Layered YAML loading."""

    def test_default_only(self, temp_config_dir):
        config = load_config(str(temp_config_dir / "config.yaml"))

        assert config["analysis"]["profile"] == "c6a-4-3"
        assert config["render"]["crf"] == 12

    def test_local_overrides_merge(self, temp_config_dir):
        (temp_config_dir / "config.yaml").write_text("render:\n  crf: 18\n")

        config = load_config(str(temp_config_dir / "config.yaml"))

        assert config["render"]["crf"] == 18
        assert config["render"]["source_dir"] == "game_elements/footage"

    def test_explicit_file_applied_last(self, temp_config_dir):
        (temp_config_dir / "config.yaml").write_text("analysis:\n  profile: c6a-16-9\n")
        explicit = temp_config_dir / "vlt.yaml"
        explicit.write_text("analysis:\n  profile: vlt-dual\n")

        config = load_config(str(explicit))

        assert config["analysis"]["profile"] == "vlt-dual"
        assert config["analysis"]["process_width"] == 640

    def test_invalid_yaml_exits(self, temp_config_dir):
        (temp_config_dir / "config.yaml").write_text("analysis: [unclosed\n")

        with pytest.raises(SystemExit):
            load_config(str(temp_config_dir / "config.yaml"))

    def test_checked_in_defaults_are_valid(self):
        path = os.path.join(os.path.dirname(__file__), "..", "config", "config.yaml")
        is_valid, error = validate_config(load_config(path))
        assert is_valid, error


class TestConfigModel:
    """Typed config built from the raw dictionary."""

    def test_from_dict(self, valid_config):
        cfg = Config.from_dict(valid_config)

        assert cfg.analysis.profile == "c6a-4-3"
        assert cfg.analysis.metadata_timeout == 30.0
        assert cfg.render.crf == 12
        assert cfg.render.tune == "animation"
        assert cfg.output.manifest_dir == "."
        assert cfg.log_level == "INFO"

    def test_defaults(self):
        cfg = Config.from_dict({})
        assert cfg.analysis.process_width == 640
        assert cfg.render == RenderConfig()

    def test_to_dict_round_trip(self, valid_config):
        cfg = Config.from_dict(valid_config)
        assert Config.from_dict(cfg.to_dict()) == cfg
