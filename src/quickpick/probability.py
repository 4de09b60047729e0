"""
Exact lottery odds without factorials.

C(n, k) is accumulated left to right as a running product of
(n - i + 1) / i. After step i the product is n(n-1)...(n-i+1) / i!, which is
C(n, i) and therefore an integer, so every division is exact. Each step
checks that instead of trusting it.
"""
from __future__ import annotations
from fractions import Fraction
from typing import List, Tuple

from loguru import logger

from .errors import DomainError, InvariantViolation, MatchCountError


def combination(n: int, k: int) -> int:
    """Number of ways to choose k of n; 0 when k > n."""
    if n < 0 or k < 0:
        raise DomainError(f"combination needs non-negative arguments, got C({n},{k})")
    if k > n:
        return 0
    if k == 0 or k == n:
        return 1

    k = min(k, n - k)
    result = 1
    for i in range(1, k + 1):
        result, remainder = divmod(result * (n - i + 1), i)
        if remainder:
            raise InvariantViolation(
                f"C({n},{k}) left a remainder of {remainder} at step {i}"
            )
    return result


def calculate_probability(total_balls: int, pick_count: int, match_count: int) -> Tuple[int, int]:
    """Return (favorable, total) outcomes for matching exactly ``match_count``.

    ``pick_count`` balls are drawn from ``total_balls`` and the ticket holds
    ``pick_count`` numbers too, so

        favorable = C(pick, match) * C(total - pick, pick - match)
        total     = C(total, pick)
    """
    if min(total_balls, pick_count, match_count) < 0:
        raise DomainError("Probability arguments must be non-negative")
    if total_balls == 0:
        raise DomainError("Cannot draw from an empty pool")
    if pick_count > total_balls:
        raise DomainError(f"Cannot pick {pick_count} balls from a pool of {total_balls}")
    if match_count > pick_count:
        raise MatchCountError(match_count, pick_count)

    total = combination(total_balls, pick_count)
    ways_to_match = combination(pick_count, match_count)
    ways_to_miss = combination(total_balls - pick_count, pick_count - match_count)
    return ways_to_match * ways_to_miss, total


def probability(total_balls: int, pick_count: int, match_count: int) -> Fraction:
    favorable, total = calculate_probability(total_balls, pick_count, match_count)
    return Fraction(favorable, total)


def odds_table(total_balls: int, pick_count: int) -> List[Tuple[int, int, int]]:
    """(match, favorable, total) rows from a full match down to zero matches."""
    rows = []
    for match_count in range(pick_count, -1, -1):
        favorable, total = calculate_probability(total_balls, pick_count, match_count)
        rows.append((match_count, favorable, total))
    logger.debug("odds table for {} of {}: {} rows", pick_count, total_balls, len(rows))
    return rows


def format_odds(favorable: int, total: int) -> str:
    """Human-readable "1 in N" odds."""
    if favorable == 0:
        return "impossible"
    if total % favorable == 0:
        return f"1 in {total // favorable:,}"
    # integer rounding to hundredths; total / favorable can overflow a float
    hundredths = (total * 100 + favorable // 2) // favorable
    return f"1 in {hundredths // 100:,}.{hundredths % 100:02d}"
