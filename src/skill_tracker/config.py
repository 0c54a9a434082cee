"""Configuration management for the application."""

import json
from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DashboardConfig(BaseSettings):
    """Dashboard aggregation configuration."""

    skill_gap_threshold: float = 1.5
    below_basic_level: int = 1
    unknown_placeholder: str = "Unknown"

    @classmethod
    def from_file(cls, filepath: str = "config/dashboard.json") -> "DashboardConfig":
        """
        Load dashboard configuration from JSON file.

        Falls back to the defaults when the file does not exist.

        Args:
            filepath: Path to the configuration file

        Returns:
            DashboardConfig instance
        """
        if not Path(filepath).exists():
            return cls()
        with open(filepath, "r") as f:
            data = json.load(f)
        return cls(**data)


class ImportConfig(BaseSettings):
    """Bulk import configuration."""

    max_upload_mb: int = 10
    max_rows: int = 5000

    @classmethod
    def from_file(cls, filepath: str = "config/import.json") -> "ImportConfig":
        """
        Load import configuration from JSON file.

        Falls back to the defaults when the file does not exist.

        Args:
            filepath: Path to the configuration file

        Returns:
            ImportConfig instance
        """
        if not Path(filepath).exists():
            return cls()
        with open(filepath, "r") as f:
            data = json.load(f)
        return cls(**data)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Data root — the SQLite DB lives here (outside the repo)
    data_root: str = Field(default="~/Documents/skill_tracker")

    # Database — auto-derived from data_root if not explicitly set
    database_url: str | None = Field(default=None)

    # Backend Server
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8000)

    # Frontend
    frontend_url: str = Field(default="http://localhost:3000")

    # Seed demo data on first start
    seed_demo_data: bool = Field(default=False)

    # Logging
    log_level: str = Field(default="INFO")
    log_requests: bool = Field(default=True)

    @model_validator(mode="after")
    def derive_paths(self) -> "Settings":
        """Expand data_root and derive database_url if not explicitly set."""
        self.data_root = str(Path(self.data_root).expanduser().resolve())
        if self.database_url is None:
            self.database_url = f"sqlite:///{self.data_root}/skill_tracker.db"
        return self


# Global settings instance
settings = Settings()

# Load configurations
dashboard_config = DashboardConfig.from_file()
import_config = ImportConfig.from_file()
