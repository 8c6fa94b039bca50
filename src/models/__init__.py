"""
Models package - Data models for the auto-updater
"""

from .enums import DrainState, CsTeam, PlayerConnectedState, LogLevel, LogCategory
from .config import UpdaterConfig
from .errors import (
    UpdaterError,
    LocalVersionUnavailable,
    RemoteUnavailable,
    HostActionFailed,
    ConfigError,
)

__all__ = [
    'DrainState',
    'CsTeam',
    'PlayerConnectedState',
    'LogLevel',
    'LogCategory',
    'UpdaterConfig',
    'UpdaterError',
    'LocalVersionUnavailable',
    'RemoteUnavailable',
    'HostActionFailed',
    'ConfigError',
]
