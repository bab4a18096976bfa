"""
Tests for settings loading.
"""

from pathlib import Path

import pytest

from config import PROJECT_ROOT, ConfigurationManager, get_config


def test_dotted_lookup_and_default():
    assert get_config("extraction.vendor.window") == 600
    assert get_config("extraction.missing.key", "fallback") == "fallback"


def test_relative_paths_are_anchored_at_project_root(default_config):
    """Test that the log file lands under the project, not the working directory"""
    log_file = Path(default_config.get("paths.log_file"))

    assert log_file.is_absolute()
    assert log_file == PROJECT_ROOT / "logs" / "invoice_intake.log"
    assert Path(default_config.get("paths.output_dir")) == PROJECT_ROOT / "outputs"


def test_custom_settings_file(tmp_path):
    settings = tmp_path / "settings.yaml"
    settings.write_text("extraction:\n  vendor:\n    window: 120\n", encoding="utf-8")

    ConfigurationManager.reset()

    assert ConfigurationManager(str(settings)).get("extraction.vendor.window") == 120


def test_missing_settings_file(tmp_path):
    ConfigurationManager.reset()

    with pytest.raises(FileNotFoundError):
        ConfigurationManager(str(tmp_path / "nope.yaml"))
