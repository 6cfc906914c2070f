"""
Main entry point for MOUTH TRAP.

Loads settings, wires the simulation to storage, assets and the
desktop window, and runs until the window is closed.
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from mouthtrap.config.settings import Settings, get_settings
from mouthtrap.core.events import EventBus
from mouthtrap.core.exceptions import ConfigurationError
from mouthtrap.core.state import StateMachine

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False, log_file: Optional[Path] = None) -> None:
    """Configure console (and optional file) logging."""
    level = logging.DEBUG if debug else logging.INFO

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        # Truncate on each run for fresh logs
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    # Per-frame debug chatter
    logging.getLogger("mouthtrap.game.obstacle").setLevel(logging.INFO)


async def run_game(settings: Settings) -> None:
    """Build all components and run the window."""
    from mouthtrap.game.world import Simulation
    from mouthtrap.graphics.assets import AssetLibrary
    from mouthtrap.graphics.layout import fit_playfield
    from mouthtrap.simulator.window import GameWindow
    from mouthtrap.storage.best_score import BestScoreRepository, JsonFileStore

    event_bus = EventBus()
    state_machine = StateMachine()

    width, height = fit_playfield(
        settings.display.window_width,
        settings.display.window_height,
        settings.display,
    )

    best_scores = BestScoreRepository(
        JsonFileStore(settings.storage.store_path),
        key=settings.storage.best_score_key,
    )

    simulation = Simulation(
        settings.game,
        width,
        height,
        best_scores=best_scores,
        event_bus=event_bus,
        state_machine=state_machine,
    )

    assets = AssetLibrary(settings.assets_path, event_bus=event_bus)
    window = GameWindow(
        settings=settings,
        simulation=simulation,
        assets=assets,
        event_bus=event_bus,
    )

    await window.run()


def main() -> None:
    """Main entry point."""
    from dotenv import load_dotenv

    # Load environment variables
    load_dotenv()

    try:
        settings = get_settings()
    except ValidationError as e:
        setup_logging()
        logger.error(f"Invalid configuration: {e}")
        sys.exit(2)

    setup_logging(settings.debug, settings.log_file)
    logger.info("MOUTH TRAP starting...")

    try:
        asyncio.run(run_game(settings))
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(2)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("MOUTH TRAP stopped")


if __name__ == "__main__":
    main()
