"""Main entry point for the generative garden.

This module provides command-line options to run the garden:
- Window mode (default): interactive pygame window
- Headless mode: fixed-step simulation that prints a JSON snapshot
"""

import argparse
import logging
import sys

from garden.config import display as display_constants
from garden.logging_config import configure_logging

logger = logging.getLogger(__name__)

HEADLESS_FRAME_SECONDS = 1.0 / display_constants.FRAME_RATE


def build_engine(seed=None):
    from garden.config import GardenConfig
    from garden.engine import GardenEngine
    from garden.feedback import LoggingFeedbackSink

    config = GardenConfig.from_env(seed=seed)
    return GardenEngine(config, feedback_sink=LoggingFeedbackSink())


def run_window(width: int, height: int, seed=None, max_frames=None) -> int:
    """Run the interactive pygame window."""
    try:
        from rendering.garden_window import GardenWindow
    except ImportError as e:
        logger.error("Error: pygame is not installed: %s", e)
        logger.error("Install with: pip install -e .")
        return 1

    window = GardenWindow(build_engine(seed), width, height)
    if not window.setup():
        return 1
    window.run(max_frames=max_frames)
    return 0


def run_headless(frames: int, flowers: int, width: int, height: int, seed=None) -> str:
    """Run the garden without a display.

    Spawns *flowers* random flowers, advances *frames* fixed 60 Hz ticks
    (rendering each one) and returns the final snapshot as JSON.

    Args:
        frames: Number of ticks to run
        flowers: Random flowers to plant before the first tick
        width: Viewport width
        height: Viewport height
        seed: Optional seed for deterministic runs
    """
    from garden.snapshot import build_snapshot
    from garden.viewport import Viewport

    engine = build_engine(seed)
    viewport = Viewport(width, height)
    for _ in range(flowers):
        engine.state.spawn_random_flower(viewport)

    commands = 0
    for frame_index in range(1, frames + 1):
        frame = engine.tick(frame_index * HEADLESS_FRAME_SECONDS, viewport)
        commands += len(frame)
    logger.info("Rendered %d frames (%d draw commands)", frames, commands)
    return build_snapshot(engine.state).model_dump_json(indent=2)


def main(argv=None) -> int:
    """Parse command-line arguments and run the appropriate mode."""
    parser = argparse.ArgumentParser(
        description="Generative Garden",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Open the interactive window (default)
  python main.py

  # Deterministic headless run printing the final garden as JSON
  python main.py --headless --frames 600 --flowers 12 --seed 42
        """,
    )
    parser.add_argument("--headless", action="store_true", help="Run without a window")
    parser.add_argument(
        "--frames",
        type=int,
        default=600,
        help="Ticks to run in headless mode (default: 600)",
    )
    parser.add_argument(
        "--flowers", type=int, default=12, help="Random flowers planted in headless mode"
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for deterministic behavior (optional)"
    )
    parser.add_argument("--width", type=int, default=display_constants.SCREEN_WIDTH)
    parser.add_argument("--height", type=int, default=display_constants.SCREEN_HEIGHT)
    parser.add_argument(
        "--log-level", default=None, help="Log level (default: GARDEN_LOG_LEVEL or INFO)"
    )

    args = parser.parse_args(argv)
    configure_logging(level=args.log_level)

    if args.headless:
        logger.info("Starting headless garden: %d frames, %d flowers", args.frames, args.flowers)
        print(run_headless(args.frames, args.flowers, args.width, args.height, seed=args.seed))
        return 0
    return run_window(args.width, args.height, seed=args.seed)


if __name__ == "__main__":
    sys.exit(main())
