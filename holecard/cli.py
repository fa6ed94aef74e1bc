#!/usr/bin/env python3
"""
Command-line blackjack table.

Plays the holecard engine in the terminal through the CLI adapter. Pass
``--seed`` for a reproducible shuffle sequence and ``--delay`` to pace the
dealer's cards the way an animated table would.
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from holecard.adapters import CLIAdapter, DummyAdapter
from holecard.blackjack.round import RoundError
from holecard.engine import TableEngine


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="holecard", description="Play single-deck blackjack against the dealer"
    )
    parser.add_argument(
        "-s", "--seed", type=int, help="Seed the shuffle for a reproducible game"
    )
    parser.add_argument(
        "-d",
        "--delay",
        type=float,
        default=0.5,
        help="Seconds between dealt cards (default: 0.5)",
    )
    parser.add_argument(
        "-r", "--rounds", type=int, help="Number of rounds to play (default: unlimited)"
    )
    parser.add_argument(
        "-t",
        "--test",
        action="store_true",
        help="Run in test mode (non-interactive, always stands)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    return parser


async def run(args: argparse.Namespace) -> int:
    """Play according to parsed arguments and return the number of rounds played."""
    if args.delay < 0:
        raise ValueError("--delay must not be negative")
    if args.test:
        adapter = DummyAdapter(rounds_to_play=args.rounds or 1, verbose=True)
        delay = 0.0
    else:
        adapter = CLIAdapter()
        delay = args.delay

    engine = TableEngine(adapter, {"seed": args.seed, "step_delay": delay})
    return await engine.run(max_rounds=args.rounds)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        played = asyncio.run(run(args))
    except KeyboardInterrupt:
        print("\nGame interrupted. Exiting...")
        return 130
    except (EOFError, ValueError, RoundError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Thanks for playing! Rounds played: {played}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
