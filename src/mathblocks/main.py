"""MathBlocks — application entry point (NiceGUI composition root).

Wires together: Config → logging → EventBus → ProblemGenerator →
RoundController → HitEventBridge → DevBoard.  NiceGUI owns the event loop;
``app.on_startup`` / ``app.on_shutdown`` handle lifecycle.
"""

from __future__ import annotations

import logging as _logging
import random

from nicegui import app, ui

from mathblocks.config.config_manager import load_config
from mathblocks.core.event_bus import EventBus
from mathblocks.core.generator import ProblemGenerator
from mathblocks.core.hit_event_bridge import HitEventBridge
from mathblocks.core.models.config import MathBlocksConfig
from mathblocks.core.round_controller import RoundController
from mathblocks.log_config.logger import setup_logging
from mathblocks.ui.dev_board import DevBoard

_log = _logging.getLogger(__name__)


def build_controller(config: MathBlocksConfig, bus: EventBus | None = None) -> RoundController:
    """Create a controller from the game section of *config*."""
    game = config.game
    generator = ProblemGenerator(random.Random(game.seed))
    return RoundController(
        generator,
        bus,
        operation=game.operation,
        max_result=game.max_result,
        lives=game.starting_lives,
        slot_count=game.slot_count,
    )


def main() -> None:
    """Synchronous entry point — bootstraps and starts NiceGUI."""

    config = load_config()
    setup_logging(config.system.log_level, config.system.log_dir)
    _log.info("Starting MathBlocks")

    bus = EventBus(queue_size=config.system.event_bus_queue_size)
    controller = build_controller(config, bus)
    bridge = HitEventBridge(bus, controller)

    @ui.page("/")
    def _index() -> None:
        ui.dark_mode().enable()
        board = DevBoard(controller, bus, show_answer=config.system.dev_mode)
        board.build()
        ui.context.client.on_disconnect(board.close)

    async def on_startup() -> None:
        await bus.start()
        controller.reset()
        controller.start_round()
        _log.info("MathBlocks running on http://localhost:%d", config.system.webui_port)

    async def on_shutdown() -> None:
        bridge.close()
        await bus.stop()
        _log.info("MathBlocks stopped")

    app.on_startup(on_startup)
    app.on_shutdown(on_shutdown)

    ui.run(
        port=config.system.webui_port,
        title="MathBlocks",
        reload=False,
        show=False,
    )


if __name__ == "__main__":
    main()
