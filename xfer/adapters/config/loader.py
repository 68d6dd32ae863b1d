"""
Configuration loader with priority: env > overrides > TOML > defaults
"""
import os
import tomllib
from pathlib import Path
from typing import Dict, Any, Optional

from ...core.constants import ENV_PREFIX
from ...core.exceptions import ConfigError


class ConfigLoader:
    """Configuration loader with priority support"""

    # Environment variable suffix -> dotted config key
    ENV_MAPPINGS = {
        "LOG_LEVEL": "log_level",
        "LOG_FILE": "log_file",
        "REPORT_USE_LOCAL_PATH": "report.use_local_path",
        "REPORT_SHOW_SKIPPED": "report.show_skipped",
        "REPORT_MAX_ROWS": "report.max_rows",
    }

    def __init__(self, env_prefix: str = ENV_PREFIX):
        self._env_prefix = env_prefix

    def load_toml(self, path: Path) -> Dict[str, Any]:
        """Load TOML configuration file"""
        path = Path(path).expanduser()
        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        try:
            return tomllib.loads(path.read_text(encoding='utf-8'))
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Failed to parse TOML configuration {path}: {e}") from e

    def load_env(self) -> Dict[str, Any]:
        """Load configuration from environment variables"""
        config: Dict[str, Any] = {}

        for suffix, config_key in self.ENV_MAPPINGS.items():
            value = os.getenv(self._env_prefix + suffix)
            if not value:
                continue
            if "." in config_key:
                section, key = config_key.split(".", 1)
                config.setdefault(section, {})[key] = self._convert_value(value)
            else:
                config[config_key] = self._convert_value(value)

        return config

    def _convert_value(self, value: str) -> Any:
        """Convert string value to appropriate type"""
        if value.lower() in ("true", "yes", "on"):
            return True
        if value.lower() in ("false", "no", "off"):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        return value

    def merge_configs(self, *configs: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge multiple configurations with priority.
        Later configs override earlier ones.
        """
        result: Dict[str, Any] = {}
        for config in configs:
            result = self._deep_merge(result, config)
        return result

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two dictionaries"""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def load(
        self,
        toml_path: Optional[Path] = None,
        overrides: Optional[Dict[str, Any]] = None,
        use_env: bool = True,
    ) -> Dict[str, Any]:
        """
        Load configuration with priority: env > overrides > TOML

        Args:
            toml_path: Path to TOML configuration file
            overrides: Caller supplied values
            use_env: Whether to read XFER_* environment variables

        Returns:
            Merged configuration dictionary

        Raises:
            ConfigError: If the TOML file is missing or malformed
        """
        configs = []

        if toml_path:
            configs.append(self.load_toml(toml_path))

        if overrides:
            configs.append(overrides)

        if use_env:
            env_config = self.load_env()
            if env_config:
                configs.append(env_config)

        return self.merge_configs(*configs)
