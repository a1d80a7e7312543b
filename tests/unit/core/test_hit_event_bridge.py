"""Tests for HitEventBridge — input events driving the RoundController."""

import pytest

from mathblocks.core import events
from mathblocks.core.event_bus import EventBus
from mathblocks.core.hit_event_bridge import HitEventBridge
from mathblocks.core.models.equation import Operation
from mathblocks.core.round_controller import RoundController
from tests.helpers.runtime import wait_for


@pytest.fixture
def controller(generator, event_bus: EventBus) -> RoundController:
    ctrl = RoundController(generator, event_bus)
    ctrl.start_round()
    return ctrl


@pytest.fixture
def bridge(event_bus: EventBus, controller: RoundController):
    b = HitEventBridge(event_bus, controller)
    yield b
    b.close()


class TestBlockHit:
    async def test_correct_hit_advances(self, event_bus, controller, bridge):
        eq = controller.equation
        await event_bus.publish(events.BLOCK_HIT, {"slot": controller.correct_index})
        await wait_for(lambda: controller.correct_count == 1, timeout=2.0)
        assert controller.equation is not eq

    async def test_wrong_hit_counts(self, event_bus, controller, bridge):
        wrong = (controller.correct_index + 1) % 4
        await event_bus.publish(events.BLOCK_HIT, {"slot": wrong})
        await event_bus.publish(events.BLOCK_HIT, {"slot": wrong})
        await wait_for(lambda: controller.wrong_count == 2, timeout=2.0)
        assert controller.correct_count == 0

    async def test_missing_slot_is_noop(self, event_bus, controller, bridge):
        received = []
        event_bus.subscribe("probe", received.append)
        await event_bus.publish(events.BLOCK_HIT, {})
        await event_bus.publish("probe")
        await wait_for(lambda: received, timeout=2.0)
        assert controller.correct_count == 0
        assert controller.wrong_count == 0


class TestGameCommands:
    async def test_new_game_resets_and_starts_round(self, event_bus, controller, bridge):
        controller.handle_hit((controller.correct_index + 1) % 4)
        eq = controller.equation
        await event_bus.publish(events.NEW_GAME_REQUESTED, {"lives": 5})
        await wait_for(lambda: controller.equation is not eq, timeout=2.0)
        assert controller.wrong_count == 0
        assert controller.lives_remaining == 5

    async def test_new_game_ignores_bad_lives(self, event_bus, controller, bridge):
        controller.lose_life()
        eq = controller.equation
        await event_bus.publish(events.NEW_GAME_REQUESTED, {"lives": "lots"})
        await wait_for(lambda: controller.equation is not eq, timeout=2.0)
        assert controller.lives_remaining == 3

    async def test_configure_switches_operation(self, event_bus, controller, bridge):
        await event_bus.publish(
            events.CONFIGURE_REQUESTED, {"operation": "division", "max_result": "50"}
        )
        await wait_for(lambda: controller.operation is Operation.DIVISION, timeout=2.0)
        assert controller.max_result == 50
        assert controller.equation.operator_symbol == "÷"

    async def test_configure_keeps_bound_on_garbage(self, event_bus, controller, bridge):
        await event_bus.publish(
            events.CONFIGURE_REQUESTED, {"operation": "subtraction", "max_result": "many"}
        )
        await wait_for(lambda: controller.operation is Operation.SUBTRACTION, timeout=2.0)
        assert controller.max_result == 20
        assert controller.equation.operator_symbol == "-"


class TestClose:
    async def test_close_stops_forwarding(self, event_bus, controller, bridge):
        bridge.close()
        assert event_bus.subscriber_count(events.BLOCK_HIT) == 0
        received = []
        event_bus.subscribe("probe", received.append)
        await event_bus.publish(events.BLOCK_HIT, {"slot": controller.correct_index})
        await event_bus.publish("probe")
        await wait_for(lambda: received, timeout=2.0)
        assert controller.correct_count == 0
