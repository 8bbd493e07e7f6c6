"""Entry point for playing the Scorched Earth artillery duel."""

import argparse
import logging

from scorched_earth import run_pygame
from scorched_earth.core.round import MAX_PLAYERS_COUNT


def main() -> None:
    parser = argparse.ArgumentParser(description="Scorched Earth artillery duel")
    parser.add_argument(
        "--players",
        type=int,
        choices=range(2, MAX_PLAYERS_COUNT + 1),
        default=None,
        help="number of tanks taking part in the round",
    )
    parser.add_argument("--seed", type=int, default=None, help="seed for terrain and wind")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="print additional debug information to the console",
    )
    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
    )
    run_pygame(players=args.players, seed=args.seed)


if __name__ == "__main__":
    main()
