"""Configuration handling for the TIFU dataset toolkit."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import yaml
from dotenv import load_dotenv

from tifu_dataset.paths import DEFAULT_DATA_DIR, TIFU_DATASET_FILE, TIFU_DATASET_URL, data_dir_from_env

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class DownloadConfig:
    """Dataset archive download configuration."""

    timeout_sec: Optional[int] = None  # None waits indefinitely
    chunk_size: int = 1024 * 1024
    show_progress: bool = True


@dataclass
class Config:
    """Application configuration combining environment variables and YAML config."""

    data_dir: str = DEFAULT_DATA_DIR
    dataset_file: str = TIFU_DATASET_FILE
    dataset_url: str = TIFU_DATASET_URL
    log_level: str = "INFO"
    log_file: Optional[str] = None
    download: DownloadConfig = field(default_factory=DownloadConfig)

    @property
    def data_dir_path(self) -> Path:
        return Path(self.data_dir)

    @property
    def dataset_file_path(self) -> Path:
        return self.data_dir_path / self.dataset_file

    @classmethod
    def from_files(cls, config_path: str = "config.yaml", env_path: Optional[str] = None) -> "Config":
        """
        Load configuration from environment variables and an optional YAML file.

        Values from the YAML file win over the environment.

        Args:
            config_path: Path to YAML configuration file (skipped if missing)
            env_path: Optional path to .env file (defaults to .env in current directory)

        Returns:
            Config instance with merged configuration
        """
        if env_path:
            load_dotenv(env_path)
        else:
            load_dotenv()

        config = cls()
        config.data_dir = data_dir_from_env()
        config.dataset_url = os.getenv("TIFU_DATASET_URL", TIFU_DATASET_URL)
        config.log_level = os.getenv("TIFU_LOG_LEVEL", "INFO").upper()

        if config_path and os.path.exists(config_path):
            with open(config_path, "r", encoding="utf-8") as file:
                yaml_config = yaml.safe_load(file)

            if yaml_config:
                for key, value in yaml_config.items():
                    if key != "download" and hasattr(config, key):
                        setattr(config, key, value)

                if isinstance(yaml_config.get("download"), dict):
                    download_config = DownloadConfig()
                    for key, value in yaml_config["download"].items():
                        if hasattr(download_config, key):
                            setattr(download_config, key, value)
                    config.download = download_config

        config.log_level = str(config.log_level).upper()
        return config

    def validate(self) -> List[str]:
        """
        Validate configuration and return a list of validation errors.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if not self.data_dir:
            errors.append("data_dir must not be empty")
        if not self.dataset_file:
            errors.append("dataset_file must not be empty")
        if not self.dataset_url.startswith(("http://", "https://")):
            errors.append(f"dataset_url must be an http(s) URL, got '{self.dataset_url}'")
        if self.log_level not in LOG_LEVELS:
            errors.append(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        if self.download.chunk_size <= 0:
            errors.append("download.chunk_size must be greater than 0")
        if self.download.timeout_sec is not None and self.download.timeout_sec <= 0:
            errors.append("download.timeout_sec must be greater than 0 when set")

        return errors
