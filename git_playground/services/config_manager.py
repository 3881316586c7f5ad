"""
Configuration management for the Git Playground simulator.
"""

import json
import os
from dataclasses import fields
from typing import Any, Dict, Optional

import yaml

from ..models.config import DEFAULT_LATENCIES, SimulatorConfig
from ..utils.logging import get_logger

logger = get_logger("config.manager")

CONFIG_ENV_VAR = "GIT_PLAYGROUND_CONFIG"


class ConfigurationManager:
    """Loads, validates and reloads simulator configuration."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to a YAML or JSON file. If None, the
                ``GIT_PLAYGROUND_CONFIG`` variable and standard locations are
                searched, falling back to built-in defaults.
        """
        self.config_path = config_path or self._find_config_file()
        self._config: Optional[SimulatorConfig] = None
        self._last_modified: Optional[float] = None

    def _find_config_file(self) -> Optional[str]:
        """Find the configuration file in standard locations."""
        env_path = os.getenv(CONFIG_ENV_VAR)
        if env_path:
            return env_path

        possible_paths = [
            "config/playground.yaml",
            "config/playground.yml",
            "config/playground.json",
            "playground.yaml",
            "playground.yml",
            "playground.json",
        ]

        for path in possible_paths:
            if os.path.exists(path):
                return path

        return None

    def load_config(self) -> SimulatorConfig:
        """
        Load configuration from file, or defaults when there is none.

        Returns:
            Validated SimulatorConfig

        Raises:
            ValueError: If the configuration is invalid or cannot be parsed.
            FileNotFoundError: If an explicit configuration file is missing.
        """
        if self.config_path is None:
            config = SimulatorConfig()
            config.validate()
            self._config = config
            return config

        if not os.path.exists(self.config_path):
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                if self.config_path.endswith(".json"):
                    raw_config = json.load(f)
                else:
                    raw_config = yaml.safe_load(f)

            raw_config = self._expand_env_vars(raw_config or {})
            config = self._parse_config(raw_config)
            config.validate()

            self._config = config
            self._last_modified = os.path.getmtime(self.config_path)

            logger.info("Configuration loaded", extra={"path": self.config_path})
            return config

        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file: {e}")
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in configuration file: {e}")
        except ValueError:
            raise
        except Exception as e:
            raise ValueError(f"Error loading configuration: {e}")

    def _expand_env_vars(self, obj: Any) -> Any:
        """Recursively expand ``${VAR_NAME}`` values."""
        if isinstance(obj, dict):
            return {key: self._expand_env_vars(value) for key, value in obj.items()}
        elif isinstance(obj, list):
            return [self._expand_env_vars(item) for item in obj]
        elif isinstance(obj, str):
            if obj.startswith("${") and obj.endswith("}"):
                var_name = obj[2:-1]
                env_value = os.getenv(var_name)
                if env_value is None:
                    raise ValueError(f"Environment variable '{var_name}' not found")
                return env_value
            return obj
        else:
            return obj

    def _parse_config(self, raw_config: Dict[str, Any]) -> SimulatorConfig:
        """Merge a raw configuration dictionary over the defaults."""
        if not isinstance(raw_config, dict):
            raise ValueError("Configuration root must be a mapping")

        known = {f.name for f in fields(SimulatorConfig)}
        unknown = set(raw_config) - known
        if unknown:
            raise ValueError(f"Unknown configuration keys: {sorted(unknown)}")

        values = dict(raw_config)

        latencies = dict(DEFAULT_LATENCIES)
        for key, delays in (raw_config.get("latencies") or {}).items():
            if isinstance(delays, int):
                delays = [delays]
            if not isinstance(delays, list):
                raise ValueError(f"latency '{key}' must be an integer or a list")
            latencies[key] = tuple(delays)
        values["latencies"] = latencies

        if "time_scale" in values:
            values["time_scale"] = float(values["time_scale"])
        if "sample_files" in values:
            values["sample_files"] = list(values["sample_files"] or [])

        return SimulatorConfig(**values)

    def get_config(self) -> SimulatorConfig:
        """
        Get current configuration, loading if necessary.

        Returns:
            Current configuration object.
        """
        if self._config is None:
            return self.load_config()
        return self._config

    def reload_if_changed(self) -> bool:
        """
        Reload configuration if the file has been modified.

        Returns:
            True if configuration was reloaded, False otherwise.
        """
        if self.config_path is None or not os.path.exists(self.config_path):
            return False

        current_modified = os.path.getmtime(self.config_path)

        if self._last_modified is None or current_modified > self._last_modified:
            try:
                self.load_config()
                return True
            except (ValueError, FileNotFoundError) as e:
                logger.warning(
                    "Keeping previous configuration after failed reload",
                    extra={"error": str(e)},
                )
                return False

        return False
