from __future__ import annotations
import csv
import re
from pathlib import Path
from typing import Iterable, List, Set

from loguru import logger

from .balls import Ticket
from .rules import GameRules

HEADER_FIRST = "ticket"


def _ints_in(s: str) -> List[int]:
    return [int(x) for x in re.findall(r"\d+", s)]


def write_tickets_csv(path: str | Path, tickets: Iterable[Ticket]) -> Path:
    """Write tickets as ``ticket,n1..nk`` rows, numbered from 1."""
    rows = [t.numbers for t in tickets]
    width = max((len(r) for r in rows), default=0)
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8", newline="") as f:
        w = csv.writer(f)
        w.writerow([HEADER_FIRST] + [f"n{i}" for i in range(1, width + 1)])
        for index, numbers in enumerate(rows, start=1):
            w.writerow([index] + [f"{n:02d}" for n in numbers])
    logger.info("wrote {} tickets to {}", len(rows), p)
    return p


def load_tickets_csv(path: str | Path, rules: GameRules) -> Set[Ticket]:
    """
    Reads previously played tickets, e.g. to keep them out of a new batch.

    Files written by ``write_tickets_csv`` are read column by column,
    skipping the ticket index, and a row must hold exactly ``rules.pick``
    numbers. Any other file falls back to collecting the
    integers in each row and taking the first ``rules.pick`` of them.
    Rows that don't match the game's rules are skipped.
    """
    tickets: Set[Ticket] = set()
    skipped = 0
    p = Path(path)

    with p.open("r", encoding="utf-8", newline="") as f:
        r = csv.reader(f)
        indexed = False
        for row in r:
            if not row:
                continue
            if row[0].strip().lower() == HEADER_FIRST:
                indexed = True
                continue

            cells = row[1:] if indexed else row
            ints: List[int] = []
            for cell in cells:
                ints.extend(_ints_in(cell))

            # our own files hold exactly one ticket per row
            if len(ints) < rules.pick or (indexed and len(ints) != rules.pick):
                skipped += 1
                continue

            try:
                tickets.add(rules.ticket(ints[: rules.pick]))
            except ValueError:
                # doesn't fit this game's range or has repeats
                skipped += 1
                continue

    if skipped:
        logger.warning("skipped {} rows of {} that don't fit {}", skipped, p, rules)
    return tickets
