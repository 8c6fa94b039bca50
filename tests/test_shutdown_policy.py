"""
Tests for the drain admission rule and drain timing.
"""

import pytest

from conftest import FakeHost
from models.config import UpdaterConfig
from services.shutdown_policy import ShutdownPolicy, should_shutdown_now, INSTANT_SHUTDOWN_DELAY


@pytest.mark.parametrize("current,maximum,expected", [
    (0, 20, True),
    (1, 20, True),     # at min_players_instant_shutdown
    (11, 20, True),    # 0.55 < 0.6
    (12, 20, False),   # 0.6 is not below 0.6
    (20, 20, False),
])
def test_should_shutdown_now_defaults(current, maximum, expected):
    assert should_shutdown_now(current, maximum, UpdaterConfig()) is expected


def test_instant_threshold_wins_over_fraction():
    config = UpdaterConfig(min_players_instant_shutdown=4, min_player_percentage_shutdown_allowed=0.0)
    assert should_shutdown_now(4, 4, config)
    assert not should_shutdown_now(5, 10, config)


def test_non_positive_max_population_means_shutdown():
    config = UpdaterConfig(min_players_instant_shutdown=0)
    assert should_shutdown_now(10, 0, config)
    assert should_shutdown_now(10, -1, config)


def test_monotonic_in_population():
    """Once the policy says no, adding players never flips it back."""
    config = UpdaterConfig()
    decisions = [should_shutdown_now(p, 32, config) for p in range(0, 33)]
    first_no = decisions.index(False)
    assert all(decisions[:first_no])
    assert not any(decisions[first_no:])


def test_drain_delay():
    policy = ShutdownPolicy(UpdaterConfig(shutdown_delay=90))
    assert policy.drain_delay(0) == INSTANT_SHUTDOWN_DELAY
    assert policy.drain_delay(1) == INSTANT_SHUTDOWN_DELAY
    assert policy.drain_delay(2) == 90


def test_resolve_max_population_prefers_visible_max():
    host = FakeHost(max_players=64, visible_max=10)
    assert ShutdownPolicy.resolve_max_population(host) == 10

    host.visible_max = -1
    assert ShutdownPolicy.resolve_max_population(host) == 64

    host.visible_max = None
    assert ShutdownPolicy.resolve_max_population(host) == 64
