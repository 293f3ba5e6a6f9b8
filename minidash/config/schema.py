"""Configuration schema for minidash."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DashboardConfig(BaseModel):
    """Refresh cadence and grid geometry."""

    model_config = ConfigDict(validate_assignment=True)

    refresh_interval_s: float = Field(default=10.0, gt=0)
    poll_interval_s: float = Field(default=10.0, gt=0)
    max_cols: int = Field(default=0, ge=0)  # 0 = fit to terminal width
    cell_width: int = Field(default=31, ge=4)
    cell_height: int = Field(default=11, ge=4)
    pad: int = Field(default=1, ge=1)

    @model_validator(mode="after")
    def _cells_wider_than_pad(self) -> "DashboardConfig":
        if self.cell_width <= self.pad or self.cell_height <= self.pad:
            raise ValueError("cell_width and cell_height must be larger than pad")
        return self


class MinikubeConfig(BaseModel):
    """How profiles and their status are looked up."""

    model_config = ConfigDict(validate_assignment=True)

    command: str = "minikube"
    timeout_s: float = Field(default=10.0, gt=0)
    profile_source: Literal["cli", "files"] = "cli"
    home: str = ""


class LoggingConfig(BaseModel):
    level: str = "INFO"
    file: str = ""


class Config(BaseSettings):
    """Root configuration for minidash."""

    model_config = SettingsConfigDict(
        env_prefix="MINIDASH_",
        env_nested_delimiter="__",
    )

    dashboard: DashboardConfig = Field(default_factory=DashboardConfig)
    minikube: MinikubeConfig = Field(default_factory=MinikubeConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # Environment beats the config file, which is passed in as init kwargs.
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    @property
    def log_path(self) -> Path:
        """Get expanded log file path."""
        if self.logging.file:
            return Path(self.logging.file).expanduser()
        from minidash.utils.helpers import get_data_path

        return get_data_path() / "logs" / "minidash.log"
