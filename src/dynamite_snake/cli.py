"""CLI for headless Dynamite Snake simulation."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from dynamite_snake.config import GameConfig

logger = logging.getLogger(__name__)

# Simulate flags that override GameConfig fields of the same name.
_CONFIG_FLAGS = (
    "seed", "speed", "board_width", "board_height", "spawn_interval",
)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dynamite-snake",
        description="Dynamite Snake headless simulation tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", help="Play one game with a random controller.",
    )
    sim_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file (flags override its values).",
    )
    sim_p.add_argument("--seed", type=int, default=None)
    sim_p.add_argument("--speed", type=int, default=None, choices=range(1, 6))
    sim_p.add_argument("--board-width", type=int, default=None)
    sim_p.add_argument("--board-height", type=int, default=None)
    sim_p.add_argument("--spawn-interval", type=int, default=None)
    sim_p.add_argument("--max-ticks", type=int, default=100_000)
    sim_p.add_argument(
        "--turn-probability", type=float, default=0.01,
        help="Chance per tick that the random controller picks a new direction.",
    )

    # --- config ---
    cfg_p = sub.add_parser(
        "config", help="Print the effective configuration as JSON.",
    )
    cfg_p.add_argument("--config", type=str, default=None)

    return parser


def _load_config(args: argparse.Namespace) -> GameConfig:
    from dynamite_snake.config import GameConfig

    config = GameConfig.load(args.config) if args.config else GameConfig()

    overrides = {
        name: getattr(args, name)
        for name in _CONFIG_FLAGS
        if getattr(args, name, None) is not None
    }
    if overrides:
        config = replace(config, **overrides)
    return config


def _run_simulate(args: argparse.Namespace) -> int:
    from dynamite_snake.session import GameSession
    from dynamite_snake.snake import Direction

    if args.max_ticks < 1:
        logger.error("--max-ticks must be at least 1.")
        return 2

    config = _load_config(args)
    session = GameSession(config)
    directions = list(Direction)
    controller_rng = np.random.default_rng(config.seed)

    def random_controller(_session: GameSession) -> Direction | None:
        if controller_rng.random() < args.turn_probability:
            return directions[int(controller_rng.integers(len(directions)))]
        return None

    outcome = session.run(args.max_ticks, controller=random_controller)
    logger.info(
        "Simulation finished after %d ticks: %s, score %d.",
        session.counter, outcome.value, session.state.score,
    )
    print(json.dumps(session.get_state()))  # noqa: T201
    return 0


def _run_config(args: argparse.Namespace) -> int:
    from dynamite_snake.config import GameConfig

    config = GameConfig.load(args.config) if args.config else GameConfig()
    print(json.dumps(config.to_dict(), indent=2))  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``dynamite-snake`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "simulate": _run_simulate,
        "config": _run_config,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
