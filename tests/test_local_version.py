import pytest

from models.errors import LocalVersionUnavailable
from services.local_version import read_patch_version


def test_reads_patch_version(steam_inf):
    assert read_patch_version(steam_inf) == "14050"


def test_missing_file(tmp_path):
    with pytest.raises(LocalVersionUnavailable) as exc_info:
        read_patch_version(tmp_path / "csgo" / "steam.inf")
    assert exc_info.value.code == "LOCAL_VERSION_UNAVAILABLE"
    assert "was not found" in exc_info.value.message


def test_missing_key(tmp_path):
    path = tmp_path / "steam.inf"
    path.write_text("ClientVersion=2000\nProductName=cs2\n", encoding="utf-8")

    with pytest.raises(LocalVersionUnavailable) as exc_info:
        read_patch_version(path)
    assert "PatchVersion" in exc_info.value.message
    assert exc_info.value.details == {"path": str(path)}
