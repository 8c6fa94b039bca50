"""Version probe - asks Steam whether the installed build is still current"""

import asyncio
from pathlib import Path
from typing import Optional

import httpx
from pydantic import ValidationError

from models.config import UpdaterConfig
from models.domain.version_state import ProbeResult
from models.errors import RemoteUnavailable
from models.steam_api import UpToDateCheckResponse
from services.local_version import read_patch_version
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.PROBE)


class VersionProbe:
    """
    One-shot update check against the Steam UpToDateCheck API

    Responsibilities:
    - Read the installed PatchVersion from <game_directory>/<version_file>
    - Issue a single GET with appid + version
    - Validate the JSON body and reduce it to a ProbeResult

    Never touches VersionState; the drain scheduler does that on its own tick.
    Failures raise LocalVersionUnavailable / RemoteUnavailable and are not
    retried here: the next poll is the retry.

    Example:
        probe = VersionProbe(config, Path("/srv/cs2/game"))
        result = await probe.check_for_update()
        if result.available:
            ...
    """

    def __init__(
        self,
        config: UpdaterConfig,
        game_directory: Path,
        client: Optional[httpx.AsyncClient] = None
    ):
        """
        Args:
            config: Updater configuration (endpoint, app id, version file, timeout)
            game_directory: Root of the dedicated server install
            client: Optional pre-built client (tests pass one with MockTransport)
        """
        self.config = config
        self.version_path = Path(game_directory) / config.version_file
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.config.request_timeout)
        return self._client

    async def check_for_update(self) -> ProbeResult:
        """
        Run one probe.

        Returns:
            ProbeResult(available, required_version, ...)

        Raises:
            LocalVersionUnavailable: steam.inf missing or without PatchVersion
            RemoteUnavailable: Transport error, non-2xx status or malformed body
        """
        # steam.inf is read off the event loop
        local_version = await asyncio.to_thread(read_patch_version, self.version_path)

        params = {"appid": self.config.steam_app_id, "version": local_version}
        try:
            response = await self._get_client().get(self.config.version_check_url, params=params)
        except httpx.HTTPError as e:
            raise RemoteUnavailable(f"Steam HTTP request failed: {e}") from e

        if not response.is_success:
            raise RemoteUnavailable(
                f"Steam HTTP request failed with status code: {response.status_code}",
                status_code=response.status_code
            )

        try:
            body = UpToDateCheckResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise RemoteUnavailable(
                f"Steam returned an unreadable response: {e}",
                status_code=response.status_code
            ) from e

        if body.response is None:
            raise RemoteUnavailable(
                "Steam response is missing the 'response' object",
                status_code=response.status_code
            )

        result = ProbeResult(
            available=body.update_available,
            required_version=body.required_version,
            local_version=local_version,
            message=body.response.message,
            version_is_listable=body.response.version_is_listable,
        )

        log.debug(
            "Update check finished",
            local_version=local_version,
            required_version=result.required_version,
            available=result.available
        )
        return result

    async def aclose(self) -> None:
        """Close the HTTP client if this probe created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
