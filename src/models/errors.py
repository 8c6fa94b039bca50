"""
Domain errors for the auto-updater

Every error carries a stable code, a human-readable message and optional
details. None of these are allowed to escape into the host runtime: they are
raised by leaf components and caught and logged by the drain scheduler,
the timer loop or the event bus.
"""

from typing import Optional


class UpdaterError(Exception):
    """Base class for auto-updater errors"""
    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict] = None
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class LocalVersionUnavailable(UpdaterError):
    """Installed version tag could not be read (file or key missing)"""
    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(
            code="LOCAL_VERSION_UNAVAILABLE",
            message=message,
            details={"path": path} if path else None
        )


class RemoteUnavailable(UpdaterError):
    """Version-check service failed (transport, HTTP status or body)"""
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(
            code="REMOTE_UNAVAILABLE",
            message=message,
            details={"status_code": status_code} if status_code is not None else None
        )
        self.status_code = status_code


class HostActionFailed(UpdaterError):
    """Host rejected a command (kick, quit, chat)"""
    def __init__(self, command: str, reason: str = ""):
        super().__init__(
            code="HOST_ACTION_FAILED",
            message=f"Host rejected command '{command}'" + (f": {reason}" if reason else ""),
            details={"command": command}
        )
        self.command = command


class ConfigError(UpdaterError):
    """Configuration value is missing or invalid"""
    def __init__(self, field: str, message: str):
        super().__init__(
            code="CONFIG_INVALID",
            message=f"{field}: {message}",
            details={"field": field}
        )
        self.field = field
