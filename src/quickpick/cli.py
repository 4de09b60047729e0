#!/usr/bin/env python3
from __future__ import annotations
import argparse
import os
import sys
from pathlib import Path
from typing import List, Sequence

from loguru import logger
from tqdm import tqdm

from .errors import DomainError, QuickPickError
from .generate import iter_unique_tickets
from .history import load_tickets_csv, write_tickets_csv
from .probability import format_odds, odds_table
from .rules import GAMES, Config, game_rules

LOG_LEVEL_ENV = "QUICKPICK_LOG_LEVEL"
LOG_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>"
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


def setup_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level.upper())
    logger.enable("quickpick")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="quickpick",
        description="Generate unique lottery quick picks and show the odds.",
    )
    ap.add_argument("-g", "--games", type=int, default=1, help="How many unique tickets to generate")
    ap.add_argument("-s", "--start-number", type=int, default=None, help="Lowest ball number (inclusive)")
    ap.add_argument("-e", "--end-number", type=int, default=None, help="Highest ball number (inclusive)")
    ap.add_argument("-p", "--pick", type=int, default=None, help="Balls per ticket")
    ap.add_argument(
        "--game",
        choices=sorted(GAMES),
        default=None,
        help="Use a preset game; -s/-e/-p override its values",
    )
    ap.add_argument("--seed", type=int, default=None, help="Optional RNG seed for reproducibility")
    ap.add_argument(
        "-P", "--possibilities", action="store_true", help="Show how many distinct tickets exist"
    )
    ap.add_argument("--odds", action="store_true", help="Show the odds of matching 0..k balls")
    ap.add_argument("--out", type=Path, default=None, help="Also write the tickets to this CSV")
    ap.add_argument(
        "--exclude", type=Path, default=None, help="CSV of tickets already played; never repeat them"
    )
    ap.add_argument("--progress", action="store_true", help="Show a progress bar while drawing")
    ap.add_argument(
        "--log-level",
        default=os.environ.get(LOG_LEVEL_ENV, "WARNING"),
        help=f"Log level (default from {LOG_LEVEL_ENV}, else WARNING)",
    )
    return ap


def config_from_args(ap: argparse.ArgumentParser, args: argparse.Namespace) -> Config:
    low, high, pick = args.start_number, args.end_number, args.pick
    if args.game:
        preset = game_rules(args.game)
        low = preset.low if low is None else low
        high = preset.high if high is None else high
        pick = preset.pick if pick is None else pick
    if None in (low, high, pick):
        ap.error("-s/--start-number, -e/--end-number and -p/--pick are required without --game")
    return Config(args.games, low, high, pick)


def format_odds_table(config: Config) -> List[str]:
    lines = [f"Odds for {config.pick_count} of {config.size}:"]
    for match, favorable, total in odds_table(config.size, config.pick_count):
        lines.append(f"  match {match:>3}: {format_odds(favorable, total):>24}  ({favorable}/{total})")
    return lines


def main(argv: Sequence[str] | None = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)
    level = args.log_level.upper()
    if level not in LOG_LEVELS:
        ap.error(f"invalid log level {args.log_level!r}; choose from {', '.join(LOG_LEVELS)}")
    setup_logging(level)

    try:
        config = config_from_args(ap, args)
        history = load_tickets_csv(args.exclude, config.rules) if args.exclude else set()
    except DomainError as exc:
        ap.error(str(exc))
    except FileNotFoundError as exc:
        ap.error(f"exclusion file not found: {exc.filename}")

    if history:
        logger.info("loaded {} tickets to exclude from {}", len(history), args.exclude)

    tickets_iter = iter_unique_tickets(config, history=history, seed=args.seed)
    if args.progress:
        tickets_iter = tqdm(
            tickets_iter, total=config.ticket_count, desc="tickets", unit="ticket", file=sys.stderr
        )
    try:
        tickets = list(tickets_iter)
    except DomainError as exc:
        ap.error(str(exc))
    except QuickPickError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    for ticket in tickets:
        print(ticket)

    if args.out:
        write_tickets_csv(args.out, tickets)
    if args.possibilities:
        print(f"This kind of game has {config.space:,} possibilities.", file=sys.stderr)
    if args.odds:
        print("\n".join(format_odds_table(config)), file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
