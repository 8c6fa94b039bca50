"""Installed version lookup - reads PatchVersion from steam.inf"""

import re
from pathlib import Path
from typing import Union

from models.errors import LocalVersionUnavailable
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.PROBE)

PATCH_VERSION_PATTERN = re.compile(r"PatchVersion=(\d+)")


def read_patch_version(path: Union[str, Path]) -> str:
    """
    Read the installed PatchVersion tag.

    Args:
        path: Path to steam.inf

    Returns:
        Version digits as a string (e.g. "14050")

    Raises:
        LocalVersionUnavailable: File missing/unreadable or key absent
    """
    path = Path(path)
    if not path.is_file():
        raise LocalVersionUnavailable(
            f"The 'steam.inf' file was not found in the game directory. Path: {path}",
            path=str(path)
        )

    try:
        content = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise LocalVersionUnavailable(
            f"An error occurred while reading the 'steam.inf' file: {e}",
            path=str(path)
        ) from e

    match = PATCH_VERSION_PATTERN.search(content)
    if not match:
        raise LocalVersionUnavailable(
            "The 'PatchVersion' key could not be located in the steam.inf file.",
            path=str(path)
        )

    version = match.group(1)
    log.debug("Installed version read", patch_version=version, path=str(path))
    return version
