"""
Bitmap keys for drawn tickets.

A ticket over a range of ``size`` balls is stored as a set of bits, bit ``p``
standing for ball ``low + p``. Three layouts exist, picked from ``size``
alone:

- NARROW: one 64-bit word (size <= 64)
- WIDE: one 128-bit word (size <= 128)
- EXTENDED: a tuple of 64-bit words, ceil(size / 64) of them

Keys compare and hash by their raw bits, which makes duplicate detection
across a batch a plain set lookup.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Tuple, Union

from .balls import BallNumber, BallRange, Ticket
from .errors import DomainError, InvariantViolation

WORD_BITS = 64


class Strategy(Enum):
    NARROW = "narrow"
    WIDE = "wide"
    EXTENDED = "extended"

    @property
    def capacity(self) -> int | None:
        """Largest range size this layout holds; None when unbounded."""
        return {Strategy.NARROW: 64, Strategy.WIDE: 128}.get(self)


def select_strategy(size: int) -> Strategy:
    if size < 1:
        raise DomainError(f"Range size must be at least 1, got {size}")
    if size <= 64:
        return Strategy.NARROW
    if size <= 128:
        return Strategy.WIDE
    return Strategy.EXTENDED


def word_count(size: int) -> int:
    return -(-size // WORD_BITS)


Bits = Union[int, Tuple[int, ...]]


@dataclass(frozen=True)
class TicketKey:
    strategy: Strategy
    bits: Bits

    @property
    def words(self) -> Tuple[int, ...]:
        """Bits as a word sequence, lowest positions first.

        NARROW and WIDE keys come back as a single (possibly 128-bit) word.
        """
        if self.strategy is Strategy.EXTENDED:
            return self.bits  # type: ignore[return-value]
        return (self.bits,)  # type: ignore[return-value]

    def count_balls(self) -> int:
        return sum(w.bit_count() for w in self.words)

    def positions(self) -> Iterator[int]:
        """Set-bit positions in increasing order, one step per set bit."""
        width = WORD_BITS if self.strategy is Strategy.EXTENDED else 0
        for index, word in enumerate(self.words):
            base = index * width
            while word:
                lowest = word & -word
                yield base + lowest.bit_length() - 1
                word ^= lowest


def validate_key(key: TicketKey, size: int, pick: int) -> TicketKey:
    """Raise InvariantViolation unless ``key`` holds exactly ``pick`` bits below ``size``."""
    capacity = key.strategy.capacity
    if capacity is not None and size > capacity:
        raise InvariantViolation(f"{key.strategy.value} key cannot hold a range of {size}")

    if key.strategy is Strategy.EXTENDED:
        words = key.words
        if len(words) != word_count(size):
            raise InvariantViolation(
                f"extended key has {len(words)} words, range of {size} needs {word_count(size)}"
            )
        if any(w < 0 or w >> WORD_BITS for w in words):
            raise InvariantViolation("extended key word wider than 64 bits")
        tail_bits = size - (len(words) - 1) * WORD_BITS
        stray = words[-1] >> tail_bits
    else:
        if key.bits < 0:  # type: ignore[operator]
            raise InvariantViolation("negative bitmap")
        stray = key.bits >> size  # type: ignore[operator]

    if stray:
        raise InvariantViolation(f"bits set beyond position {size - 1}")
    count = key.count_balls()
    if count != pick:
        raise InvariantViolation(f"bitmap holds {count} balls, expected {pick}")
    return key


def encode_balls(balls: Iterable[BallNumber | int], ball_range: BallRange) -> TicketKey:
    """Build the key for a known set of balls."""
    strategy = select_strategy(ball_range.size)
    words = [0] * word_count(ball_range.size)
    bitmap = 0

    for ball in balls:
        if not ball_range.contains(ball):
            raise DomainError(f"Ball {int(ball)} is outside range {ball_range}")
        offset = int(ball) - ball_range.low
        if strategy is Strategy.EXTENDED:
            words[offset // WORD_BITS] |= 1 << (offset % WORD_BITS)
        else:
            bitmap |= 1 << offset

    if strategy is Strategy.EXTENDED:
        return TicketKey(strategy, tuple(words))
    return TicketKey(strategy, bitmap)


def decode_key(key: TicketKey, ball_range: BallRange) -> Ticket:
    """Turn a validated key back into its ascending ticket."""
    balls = tuple(BallNumber(ball_range.low + p) for p in key.positions())
    for prev, cur in zip(balls, balls[1:]):
        if prev >= cur:
            raise InvariantViolation(f"decoded balls out of order: {prev} before {cur}")
    return Ticket(balls)
