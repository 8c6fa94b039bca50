"""Version state domain models"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of one successful version probe"""
    available: bool
    required_version: int = 0
    local_version: str = ""
    message: Optional[str] = None
    version_is_listable: bool = False


@dataclass
class VersionState:
    """
    Update bookkeeping owned by a DrainScheduler instance

    Invariants:
    - update_found_at is set only when update_available goes False -> True
    - restart_required never goes back to False once set
    """

    update_available: bool = False
    required_version: int = 0
    update_found_at: Optional[float] = None
    restart_required: bool = False

    def mark_update_found(self, now: float, required_version: int) -> bool:
        """
        Record a positive probe result.

        Returns:
            True if this is the first sighting (False -> True transition)
        """
        self.required_version = required_version
        if self.update_available:
            return False
        self.update_available = True
        self.update_found_at = now
        return True

    def require_restart(self) -> None:
        self.restart_required = True

    def reset_for_new_map(self) -> None:
        """Forget a pending update unless a restart is already underway"""
        if self.restart_required:
            return
        self.update_available = False
        self.update_found_at = None
