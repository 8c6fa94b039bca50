"""
Shared fixtures: in-memory host runtime and a hand-cranked scheduler.
"""

import sys
from pathlib import Path
from typing import Callable, List, Optional

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from lifecycle.task_registry import TaskRegistry
from models.config import UpdaterConfig
from models.domain.player import PlayerInfo
from models.enums import CsTeam
from models.errors import HostActionFailed


def make_player(slot: int, **kwargs) -> PlayerInfo:
    kwargs.setdefault("user_id", 100 + slot)
    kwargs.setdefault("team", CsTeam.TERRORIST)
    return PlayerInfo(slot=slot, **kwargs)


class FakeHost:
    """IHostRuntime double that records chat lines and console commands"""

    def __init__(self, game_directory: Path = Path("."), max_players: int = 20, visible_max: Optional[int] = None):
        self.game_directory = game_directory
        self.players: List[PlayerInfo] = []
        self.max_players = max_players
        self.visible_max = visible_max
        self.chat: List[tuple] = []
        self.commands: List[str] = []
        self.failing_prefixes: List[str] = []
        self.chat_fails = False

    def get_players(self) -> List[PlayerInfo]:
        return list(self.players)

    def get_player(self, slot: int) -> Optional[PlayerInfo]:
        for player in self.players:
            if player.slot == slot:
                return player
        return None

    def get_visible_max_players(self) -> Optional[int]:
        return self.visible_max

    def get_max_players(self) -> int:
        return self.max_players

    def print_to_chat(self, slot: int, message: str) -> None:
        if self.chat_fails:
            raise HostActionFailed("say", "chat unavailable")
        self.chat.append((slot, message))

    def execute_command(self, command: str) -> None:
        if any(command.startswith(p) for p in self.failing_prefixes):
            raise HostActionFailed(command, "rejected")
        self.commands.append(command)

    @property
    def kicks(self) -> List[str]:
        return [c for c in self.commands if c.startswith("kickid")]


class ManualTimer:
    def __init__(self, interval, callback, repeat, stop_on_map_change, description):
        self.interval = interval
        self.callback = callback
        self.repeat = repeat
        self.stop_on_map_change = stop_on_map_change
        self.description = description
        self.fired = 0
        self.cancelled = False

    @property
    def active(self) -> bool:
        return not self.cancelled and (self.repeat or self.fired == 0)

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """
    Scheduler double: time is set by the test, timers fire on fire(),
    next_tick callbacks run on flush().
    """

    def __init__(self, now: float = 0.0):
        self.current = now
        self.timers: List[ManualTimer] = []
        self.pending: List[tuple] = []

    def now(self) -> float:
        return self.current

    def add_timer(self, interval, callback, *, repeat=False, stop_on_map_change=False, description=""):
        timer = ManualTimer(interval, callback, repeat, stop_on_map_change, description)
        self.timers.append(timer)
        return timer

    def next_tick(self, callback: Callable, *args) -> None:
        self.pending.append((callback, args))

    def flush(self) -> int:
        ran = 0
        while self.pending:
            callback, args = self.pending.pop(0)
            callback(*args)
            ran += 1
        return ran

    def fire(self, timer: ManualTimer) -> None:
        assert timer.active, f"timer {timer.description!r} is not active"
        timer.fired += 1
        timer.callback()

    def on_map_change(self) -> int:
        cancelled = 0
        for timer in self.timers:
            if timer.stop_on_map_change and timer.active:
                timer.cancel()
                cancelled += 1
        return cancelled

    def cancel_all(self) -> int:
        cancelled = 0
        for timer in self.timers:
            if timer.active:
                timer.cancel()
                cancelled += 1
        return cancelled

    def active_timers(self) -> List[ManualTimer]:
        return [t for t in self.timers if t.active]

    def find(self, description: str) -> Optional[ManualTimer]:
        for timer in reversed(self.timers):
            if timer.description == description:
                return timer
        return None


@pytest.fixture(autouse=True)
def fresh_task_registry():
    TaskRegistry.reset_instance()
    yield
    TaskRegistry.reset_instance()


@pytest.fixture
def config():
    return UpdaterConfig()


@pytest.fixture
def host(tmp_path):
    return FakeHost(game_directory=tmp_path)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def steam_inf(tmp_path):
    """Installed build 14050 at <tmp>/csgo/steam.inf"""
    path = tmp_path / "csgo" / "steam.inf"
    path.parent.mkdir(parents=True)
    path.write_text(
        "ClientVersion=2000\nServerVersion=2000\nPatchVersion=14050\nProductName=cs2\nappID=730\n",
        encoding="utf-8"
    )
    return path
