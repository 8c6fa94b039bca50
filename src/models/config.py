"""
Updater configuration model

Typed, immutable view of config.yaml. Defaults defined here are the single
source of truth; factory_defaults.yaml mirrors them.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Tuple

from models.enums import LogLevel
from models.errors import ConfigError

CURRENT_CONFIG_VERSION = 2


@dataclass(frozen=True)
class UpdaterConfig:
    """
    Auto-updater configuration (immutable after load)

    Timing values are in seconds. Reloading requires restarting the plugin.
    """

    config_version: int = CURRENT_CONFIG_VERSION

    # === Drain policy ===
    update_check_interval: float = 1800
    shutdown_delay: int = 120
    min_players_instant_shutdown: int = 1
    min_player_percentage_shutdown_allowed: float = 0.6
    shutdown_on_map_change_if_pending_update: bool = True

    # === Version check ===
    steam_app_id: int = 730
    version_check_url: str = "https://api.steampowered.com/ISteamApps/UpToDateCheck/v0001/"
    version_file: str = "csgo/steam.inf"
    request_timeout: float = 10.0

    # === Logging ===
    log_level: LogLevel = LogLevel.INFO

    def __post_init__(self):
        if self.update_check_interval <= 0:
            raise ConfigError("update_check_interval", "must be greater than 0")
        if self.shutdown_delay < 1:
            raise ConfigError("shutdown_delay", "must be at least 1 second")
        if self.min_players_instant_shutdown < 0:
            raise ConfigError("min_players_instant_shutdown", "must not be negative")
        if not 0.0 <= self.min_player_percentage_shutdown_allowed <= 1.0:
            raise ConfigError("min_player_percentage_shutdown_allowed", "must be between 0.0 and 1.0")
        if self.request_timeout <= 0:
            raise ConfigError("request_timeout", "must be greater than 0")

    @property
    def is_outdated(self) -> bool:
        return self.config_version < CURRENT_CONFIG_VERSION

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UpdaterConfig":
        """
        Build config from raw YAML data

        Unknown keys are ignored (caller logs them). Values are coerced to the
        declared field types so "120" in YAML still works.

        Raises:
            ConfigError: If a value cannot be coerced or fails validation
        """
        known = set(cls.field_names())
        kwargs: Dict[str, Any] = {}

        for key, value in (data or {}).items():
            if key not in known or value is None:
                continue
            kwargs[key] = _coerce(key, value)

        return cls(**kwargs)


def _coerce(key: str, value: Any) -> Any:
    """Coerce a raw YAML value to the type of the given field"""
    try:
        if key == "log_level":
            if isinstance(value, LogLevel):
                return value
            return LogLevel[str(value).upper()]
        if key == "shutdown_on_map_change_if_pending_update":
            if isinstance(value, str):
                return value.strip().lower() in ("1", "true", "yes", "on")
            return bool(value)
        if key in ("config_version", "shutdown_delay", "min_players_instant_shutdown", "steam_app_id"):
            return int(value)
        if key in ("update_check_interval", "min_player_percentage_shutdown_allowed", "request_timeout"):
            return float(value)
        return str(value)
    except (KeyError, TypeError, ValueError):
        raise ConfigError(key, f"invalid value {value!r}")
