"""
Configuration manager for the CPU meter.

This module provides the ConfigLoader class for loading and validating
meter configuration from YAML files.
"""
from pathlib import Path
from typing import Optional

import yaml

from cpumeter.config.meter_config import MeterConfig
from cpumeter.consts.ProviderType import ProviderType


class ConfigLoader:

    def __init__(self, config_path: Path, env: Optional[str] = None):
        self.config_path = config_path
        self.env = env
        self.config_data = self._load_config()

    def _load_config(self) -> MeterConfig:
        """
        Load and parse meter configuration from YAML file.
        Supports environment-specific overrides via config_<env>.yaml

        A missing base config.yaml yields the defaults; a missing override
        file for an explicitly requested environment is an error.

        Returns:
            MeterConfig: Configured meter configuration instance
        """
        data = {}

        base_config_file = self.config_path / "config.yaml"
        if base_config_file.is_file():
            with open(base_config_file, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}

        if self.env:
            env_config_file = self.config_path / f"config_{self.env}.yaml"
            with open(env_config_file, "r", encoding="utf-8") as f:
                env_data = yaml.safe_load(f) or {}
                # dict.update() will overwrite existing keys
                data.update(env_data)

        config = MeterConfig()

        if "interval_ms" in data:
            interval_ms = data["interval_ms"]
            # YAML booleans are ints in Python; 1.5 must not truncate to 1
            if isinstance(interval_ms, bool) or not isinstance(interval_ms, int):
                raise ValueError(f"interval_ms must be an integer number of milliseconds, got {interval_ms!r}")
            config.interval_ms = interval_ms
        if "duration_seconds" in data:
            config.duration_seconds = float(data["duration_seconds"])
        if "provider" in data:
            config.provider = ProviderType(data["provider"])

        config.output_path = data.get("output_path")
        config.log_file = data.get("log_file")

        if config.interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {config.interval_ms}")
        if config.duration_seconds < 0:
            raise ValueError(f"duration_seconds must not be negative, got {config.duration_seconds}")

        return config
