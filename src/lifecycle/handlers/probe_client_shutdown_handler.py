from __future__ import annotations
from typing import TYPE_CHECKING

from lifecycle.shutdown_protocol import IShutdownHandler
from utils.logger import get_logger, LogCategory

if TYPE_CHECKING:
    from services.version_probe import VersionProbe

log = get_logger().for_category(LogCategory.SHUTDOWN)


class ProbeClientShutdownHandler(IShutdownHandler):
    """
    Shutdown handler for the version probe's HTTP client.

    Priority: 40 (after in-flight requests are cancelled)
    """

    def __init__(self, probe: "VersionProbe"):
        self.probe = probe

    @property
    def shutdown_priority(self) -> int:
        return 40

    async def shutdown(self) -> None:
        await self.probe.aclose()
        log.debug("Version probe HTTP client closed")
