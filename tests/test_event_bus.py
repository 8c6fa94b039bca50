#!/usr/bin/env python3
"""
Test script for event bus functionality

Tests event creation, publishing, subscription, middleware, and filtering.
"""

import asyncio
import sys
from pathlib import Path

import pytest

# Set UTF-8 encoding for output
if hasattr(sys.stdout, 'reconfigure') and sys.stdout.encoding != 'UTF-8':
    sys.stdout.reconfigure(encoding='utf-8')  # type: ignore
if hasattr(sys.stderr, 'reconfigure') and sys.stderr.encoding != 'UTF-8':
    sys.stderr.reconfigure(encoding='utf-8')  # type: ignore

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from models.domain.player import PlayerInfo
from models.events import (
    ClientConnectedEvent, MapStartEvent, MapEndEvent, PlayerSpawnedEvent, EventSource, EventType
)
from services.event_bus import EventBus


@pytest.mark.asyncio
async def test_basic_pub_sub():
    """Test basic publish/subscribe"""
    print("Test 1: Basic pub/sub...")
    bus = EventBus()
    received = []

    async def handler(event):
        received.append(event)

    bus.subscribe(EventType.CLIENT_CONNECTED, handler)
    await bus.publish(ClientConnectedEvent(3))

    assert len(received) == 1
    assert received[0].slot == 3
    assert received[0].source == EventSource.HOST
    print("✓ Basic pub/sub works!")


@pytest.mark.asyncio
async def test_filtering():
    """Test per-handler filtering"""
    print("\nTest 2: Event filtering...")
    bus = EventBus()
    workshop_maps = []
    all_maps = []

    bus.subscribe(
        EventType.MAP_START,
        lambda e: workshop_maps.append(e.map_name),
        filter_fn=lambda e: e.map_name.startswith("workshop/")
    )
    bus.subscribe(EventType.MAP_START, lambda e: all_maps.append(e.map_name))

    await bus.publish(MapStartEvent("de_dust2"))
    await bus.publish(MapStartEvent("workshop/3070284539/aim_map"))
    await bus.publish(MapStartEvent("de_ancient"))

    assert workshop_maps == ["workshop/3070284539/aim_map"]
    assert len(all_maps) == 3
    print("✓ Filtering works!")


@pytest.mark.asyncio
async def test_middleware():
    """Test middleware blocking"""
    print("\nTest 3: Middleware blocking...")
    bus = EventBus()
    received = []

    # Middleware that blocks everything not coming from the host
    def block_application(event):
        if event.source == EventSource.APPLICATION:
            return None  # Block
        return event

    bus.add_middleware(block_application)

    async def handler(event):
        received.append(event)

    bus.subscribe(EventType.MAP_END, handler)

    blocked = MapEndEvent()
    blocked.source = EventSource.APPLICATION

    await bus.publish(MapEndEvent())
    await bus.publish(blocked)  # Should be blocked

    assert len(received) == 1
    assert received[0].source == EventSource.HOST
    assert len(bus.get_event_history()) == 1
    print("✓ Middleware blocking works!")


@pytest.mark.asyncio
async def test_priority():
    """Test priority-based handler execution"""
    print("\nTest 4: Priority execution...")
    bus = EventBus()
    execution_order = []

    async def low_priority_handler(event):
        execution_order.append("low")

    async def high_priority_handler(event):
        execution_order.append("high")

    def medium_priority_handler(event):
        execution_order.append("medium")

    bus.subscribe(EventType.MAP_END, low_priority_handler, priority=0)
    bus.subscribe(EventType.MAP_END, high_priority_handler, priority=100)
    bus.subscribe(EventType.MAP_END, medium_priority_handler, priority=50)

    await bus.publish(MapEndEvent())

    assert execution_order == ["high", "medium", "low"]
    print("✓ Priority execution works!")


@pytest.mark.asyncio
async def test_failing_handler_is_isolated():
    """A crashing handler must not stop the others or reach the publisher"""
    print("\nTest 5: Handler isolation...")
    bus = EventBus()
    spawned = []

    def broken_handler(event):
        raise RuntimeError("handler exploded")

    bus.subscribe(EventType.PLAYER_SPAWNED, broken_handler, priority=10)
    bus.subscribe(EventType.PLAYER_SPAWNED, lambda e: spawned.append(e.player.slot))

    await bus.publish(PlayerSpawnedEvent(PlayerInfo(slot=7, user_id=107)))

    assert spawned == [7]
    print("✓ Handler isolation works!")


@pytest.mark.asyncio
async def test_unsubscribe():
    """Test handler removal"""
    print("\nTest 6: Unsubscribe...")
    bus = EventBus()
    received = []

    def handler(event):
        received.append(event)

    bus.subscribe(EventType.MAP_END, handler)
    await bus.publish(MapEndEvent())
    bus.unsubscribe(EventType.MAP_END, handler)
    await bus.publish(MapEndEvent())

    assert len(received) == 1
    print("✓ Unsubscribe works!")


async def main():
    """Run all tests"""
    print("=" * 60)
    print("Event Bus Test Suite")
    print("=" * 60)

    try:
        await test_basic_pub_sub()
        await test_filtering()
        await test_middleware()
        await test_priority()
        await test_failing_handler_is_isolated()
        await test_unsubscribe()

        print("\n" + "=" * 60)
        print("✓ All tests passed!")
        print("=" * 60)
    except AssertionError as e:
        print(f"\n✗ Test failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
