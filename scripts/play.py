#!/usr/bin/env python3
"""
Play Super Star Trek in the terminal.

Usage:
    python scripts/play.py
    python scripts/play.py --seed 1234 --ruleset v1
    python scripts/play.py --seed 7 --commands moves.txt
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from startrek import (
    PRESETS,
    Ruleset,
    StarTrekGame,
    load_ruleset,
    load_seed,
    override_ruleset,
)
from startrek.events import ECHO_COLOR, LogLine


def print_line(line: LogLine) -> None:
    # Input echoes are already on screen
    if line.color != ECHO_COLOR:
        print(line.text)


def build_ruleset(args) -> Ruleset:
    """Command line flags override the environment / .env settings."""
    return override_ruleset(load_ruleset(), preset=args.ruleset, rank=args.rank)


def main():
    parser = argparse.ArgumentParser(
        description="Play Super Star Trek in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment (.env supported):
    STARTREK_RULESET, STARTREK_RANK, STARTREK_STARBASE_ATTACKS,
    STARTREK_NAV_ENERGY, STARTREK_SEED
        """,
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed (default: STARTREK_SEED or random)",
    )
    parser.add_argument(
        "--ruleset",
        choices=sorted(PRESETS),
        default=None,
        help="Rule set preset (default: STARTREK_RULESET or v2)",
    )
    parser.add_argument(
        "--rank",
        type=int,
        default=None,
        help="Captain rank 1-12, scales starbase attacks (default: 5)",
    )
    parser.add_argument(
        "--commands",
        type=Path,
        default=None,
        help="Read commands from a file instead of the keyboard",
    )
    args = parser.parse_args()

    try:
        ruleset = build_ruleset(args)
        seed = args.seed if args.seed is not None else load_seed()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    game = StarTrekGame(ruleset=ruleset, seed=seed, auto_init=False)
    game.subscribe(print_line)
    game.init()

    if args.commands is not None:
        for command in args.commands.read_text().splitlines():
            if game.is_ended:
                break
            print(f"COMMAND? {command}")
            game.process_input(command)
    else:
        while not game.is_ended:
            try:
                command = input("COMMAND? " if game.dispatcher.pending is None else "? ")
            except (EOFError, KeyboardInterrupt):
                print()
                game.resign()
                break
            game.process_input(command)

    if game.outcome is not None:
        print(f"[GAME] Outcome: {game.outcome.value}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
