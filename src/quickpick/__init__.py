"""
Lotto quick pick.

Stable surface:
- Config: validated request for N unique tickets over [low, high], k balls each.
- generate_unique / iter_unique_tickets: duplicate-free ticket batches.
- generate_ticket: a single quick pick.
- calculate_probability / probability / odds_table: exact match odds.
- select_strategy, TicketKey, encode_balls, decode_key: the bitmap layer.

Logging goes through loguru and is disabled until ``logger.enable("quickpick")``.
"""

from __future__ import annotations

from loguru import logger

from .balls import BallNumber, BallRange, Ticket
from .bitmap import Strategy, TicketKey, decode_key, encode_balls, select_strategy
from .errors import (
    DomainError,
    InvariantViolation,
    QuickPickError,
    TooManyTicketsError,
    UniqueGenerationFailed,
)
from .generate import generate_ticket, generate_ticket_key, generate_unique, iter_unique_tickets, total_space
from .probability import calculate_probability, combination, odds_table, probability
from .rng import RandomSource, make_source
from .rules import GAMES, Config, GameRules

logger.disable(__name__)

__version__ = "0.1.0"

__all__ = [
    "BallNumber",
    "BallRange",
    "Ticket",
    "Strategy",
    "TicketKey",
    "decode_key",
    "encode_balls",
    "select_strategy",
    "DomainError",
    "InvariantViolation",
    "QuickPickError",
    "TooManyTicketsError",
    "UniqueGenerationFailed",
    "generate_ticket",
    "generate_ticket_key",
    "generate_unique",
    "iter_unique_tickets",
    "total_space",
    "calculate_probability",
    "combination",
    "odds_table",
    "probability",
    "RandomSource",
    "make_source",
    "GAMES",
    "Config",
    "GameRules",
]
