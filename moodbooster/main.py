#!/usr/bin/env python3
"""
Mood Booster Launcher

Usage:
    # Play with defaults
    python -m moodbooster

    # Custom window, reproducible spawns, shorter rounds
    python -m moodbooster --resolution 720x1280 --seed 42 --duration 30

    # Settings from a YAML file
    python -m moodbooster --config kiosk.yaml --fullscreen
"""

import argparse
import sys
from typing import List, Optional, Tuple

from pydantic import ValidationError

from moodbooster.config import ConfigError, GameConfig
from moodbooster.game_mode import MoodBoosterGame
from moodbooster.logging import configure_logging


def parse_resolution(value: str) -> Tuple[int, int]:
    """Parse WIDTHxHEIGHT.

    Raises:
        ValueError: If the format is wrong or a dimension is not positive
    """
    width, height = value.lower().split('x')
    size = (int(width), int(height))
    if size[0] <= 0 or size[1] <= 0:
        raise ValueError(f"dimensions must be positive: {value}")
    return size


def build_parser() -> argparse.ArgumentParser:
    """Launcher arguments plus the game's own ARGUMENTS."""
    parser = argparse.ArgumentParser(
        prog='mood-booster',
        description=MoodBoosterGame.DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Controls:
  Tap / click            start from the attract screen
  Drag                   move the barista
  LEFT/RIGHT or A/D      move in steps
  SPACE/ENTER or DRINK   drink at the spout
  R                      restart after a round
  ESC                    quit
        """
    )

    parser.add_argument(
        '--resolution', '-r',
        type=str,
        default=None,
        help='Window resolution as WIDTHxHEIGHT (default: from config, 540x960)'
    )
    parser.add_argument(
        '--fullscreen', '-f',
        action='store_true',
        help='Run in fullscreen mode'
    )
    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Random seed for falling items'
    )
    parser.add_argument(
        '--config', '-c',
        type=str,
        default=None,
        help='YAML file with configuration overrides'
    )
    parser.add_argument(
        '--background',
        type=str,
        default=None,
        help='Background image file'
    )
    parser.add_argument(
        '--log-level',
        type=str,
        default=None,
        choices=['TRACE', 'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL', 'OFF'],
        help='Default log level'
    )

    for arg_def in MoodBoosterGame.get_arguments():
        kwargs = {k: v for k, v in arg_def.items() if k != 'name'}
        if 'action' in kwargs:
            kwargs.pop('type', None)  # action and type are mutually exclusive
        parser.add_argument(arg_def['name'], **kwargs)

    return parser


def load_config(args: argparse.Namespace) -> GameConfig:
    """Config from the YAML file (if any) with CLI overrides applied."""
    overrides = {
        arg_def['dest']: getattr(args, arg_def['dest'])
        for arg_def in MoodBoosterGame.get_arguments()
    }
    return GameConfig.load(args.config, **overrides)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    if args.log_level:
        configure_logging(level=args.log_level)

    try:
        config = load_config(args)
    except (ConfigError, ValidationError) as e:
        print(f"ERROR: Invalid configuration: {e}")
        return 1

    window_size = None
    if args.resolution:
        try:
            window_size = parse_resolution(args.resolution)
        except ValueError:
            print(f"Invalid resolution format: {args.resolution}")
            print("Expected format: WIDTHxHEIGHT (e.g., 540x960)")
            return 1

    # Imported here so --help works without opening a window
    from moodbooster.engine import GameEngine

    print("=" * 60)
    print(f"{MoodBoosterGame.NAME} v{MoodBoosterGame.VERSION}")
    print("=" * 60)

    engine = GameEngine(
        config=config,
        window_size=window_size,
        seed=args.seed,
        fullscreen=args.fullscreen,
        background=args.background,
    )
    try:
        engine.run()
    except KeyboardInterrupt:
        print("\nInterrupted")
    finally:
        engine.quit()

    return 0


if __name__ == '__main__':
    sys.exit(main())
