"""Tests for configuration management."""

import json
import os
import tempfile
from pathlib import Path

from skill_tracker.config import DashboardConfig, ImportConfig, Settings


class TestDashboardConfig:
    """Tests for dashboard configuration."""

    def test_defaults(self):
        config = DashboardConfig()
        assert config.skill_gap_threshold == 1.5
        assert config.below_basic_level == 1
        assert config.unknown_placeholder == "Unknown"

    def test_from_file(self):
        with tempfile.NamedTemporaryFile(mode="w", suffix=".json", delete=False) as f:
            json.dump({"skill_gap_threshold": 2.0, "unknown_placeholder": "?"}, f)
            temp_path = f.name

        try:
            config = DashboardConfig.from_file(temp_path)
            assert config.skill_gap_threshold == 2.0
            assert config.unknown_placeholder == "?"
            assert config.below_basic_level == 1
        finally:
            os.unlink(temp_path)

    def test_missing_file_uses_defaults(self):
        config = DashboardConfig.from_file("does/not/exist.json")
        assert config.skill_gap_threshold == 1.5


class TestImportConfig:
    """Tests for import configuration."""

    def test_defaults(self):
        config = ImportConfig()
        assert config.max_upload_mb == 10
        assert config.max_rows == 5000

    def test_from_file(self, tmp_path):
        path = tmp_path / "import.json"
        path.write_text(json.dumps({"max_rows": 50}))

        config = ImportConfig.from_file(str(path))

        assert config.max_rows == 50
        assert config.max_upload_mb == 10


class TestSettings:
    """Tests for application settings."""

    def test_database_url_derived_from_data_root(self, tmp_path):
        settings = Settings(data_root=str(tmp_path))
        assert settings.database_url == f"sqlite:///{tmp_path.resolve()}/skill_tracker.db"

    def test_explicit_database_url_kept(self, tmp_path):
        settings = Settings(data_root=str(tmp_path), database_url="sqlite:///:memory:")
        assert settings.database_url == "sqlite:///:memory:"

    def test_data_root_expanded(self):
        settings = Settings(data_root="~/skill_tracker_data")
        assert settings.data_root == str(Path("~/skill_tracker_data").expanduser().resolve())

    def test_env_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("DATA_ROOT", str(tmp_path))
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("SEED_DEMO_DATA", "true")

        settings = Settings()

        assert settings.data_root == str(tmp_path.resolve())
        assert settings.log_level == "DEBUG"
        assert settings.seed_demo_data is True
