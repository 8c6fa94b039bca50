"""
Config Manager

Loads the updater's YAML configuration (with include support) and turns it
into an immutable UpdaterConfig.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from models.config import UpdaterConfig, CURRENT_CONFIG_VERSION
from models.errors import ConfigError
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.CONFIG)

SRC_DIR = Path(__file__).resolve().parent.parent


class ConfigManager:
    """
    Configuration manager with include system support

    Loads config.yaml and processes an optional include: directive to merge
    several YAML files. Any load or validation failure falls back to
    factory_defaults.yaml, and if that fails too, to the built-in defaults.

    Example:
        config = ConfigManager().load()
        config.shutdown_delay      # 120
    """

    def __init__(
        self,
        config_path: Union[str, Path] = "config/config.yaml",
        defaults_path: Union[str, Path] = "config/factory_defaults.yaml"
    ):
        """
        Args:
            config_path: Path to config.yaml (relative paths resolve against src/)
            defaults_path: Path to factory defaults fallback
        """
        self.config_path = self._resolve(config_path)
        self.factory_defaults_path = self._resolve(defaults_path)
        self.data: Dict[str, Any] = {}
        self.config: Optional[UpdaterConfig] = None

    @staticmethod
    def _resolve(path: Union[str, Path]) -> Path:
        path = Path(path)
        return path if path.is_absolute() else SRC_DIR / path

    def load(self) -> UpdaterConfig:
        """
        Load YAML configuration

        Process:
        1. Load main config.yaml
        2. If it has an 'include:' list, load and merge those files
        3. Build UpdaterConfig (validates values)
        4. Fallback to factory defaults on failure

        Returns:
            UpdaterConfig
        """
        try:
            self.data = self._read_with_includes(self.config_path)
            self.config = self._build(self.data)
            log.info("Configuration loaded", path=str(self.config_path))
        except (OSError, yaml.YAMLError, ConfigError) as ex:
            log.error("Failed to load config.yaml", error=str(ex), error_type=type(ex).__name__)
            log.warn("Falling back to factory defaults")
            self.config = self._load_factory_defaults()

        if self.config.is_outdated:
            log.warn(
                "Configuration version is outdated, missing keys use defaults",
                found=self.config.config_version,
                current=CURRENT_CONFIG_VERSION
            )

        return self.config

    def _load_factory_defaults(self) -> UpdaterConfig:
        try:
            self.data = self._read_yaml(self.factory_defaults_path)
            return self._build(self.data)
        except (OSError, yaml.YAMLError, ConfigError) as ex:
            log.error("Failed to load factory defaults, using built-in values", error=str(ex))
            self.data = {}
            return UpdaterConfig()

    def _build(self, data: Dict[str, Any]) -> UpdaterConfig:
        unknown = sorted(set(data) - set(UpdaterConfig.field_names()) - {"include"})
        if unknown:
            log.warn("Ignoring unknown config keys", keys=", ".join(unknown))
        return UpdaterConfig.from_dict(data)

    def _read_with_includes(self, path: Path) -> Dict[str, Any]:
        main_config = self._read_yaml(path)
        if "include" not in main_config:
            return main_config

        log.info("Using include-based configuration")
        # Keys in the main file win over included ones
        merged = self._load_includes(main_config["include"], path.parent)
        merged.update({k: v for k, v in main_config.items() if k != "include"})
        return merged

    def _load_includes(self, include_list: List[str], config_dir: Path) -> Dict[str, Any]:
        """
        Load and merge multiple YAML files from include list

        Later files override earlier ones.

        Raises:
            OSError: An included file is missing
        """
        merged: Dict[str, Any] = {}
        for filename in include_list or []:
            file_data = self._read_yaml(config_dir / filename)
            merged.update(file_data)
            log.debug(f"Loaded {filename}", keys=str(list(file_data.keys())))
        return merged

    @staticmethod
    def _read_yaml(path: Path) -> Dict[str, Any]:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(str(path), "top-level YAML value must be a mapping")
        return data
