from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple

from .errors import DomainError, InvalidRangeError

BALL_MIN, BALL_MAX = 0, 255


@dataclass(frozen=True, order=True)
class BallNumber:
    """A single lottery ball, always within [BALL_MIN, BALL_MAX]."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise DomainError(f"Ball number must be an integer, got {self.value!r}")
        if not (BALL_MIN <= self.value <= BALL_MAX):
            raise DomainError(
                f"Ball number {self.value} out of range ({BALL_MIN}-{BALL_MAX})"
            )

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return f"{self.value:02d}"


@dataclass(frozen=True)
class BallRange:
    """Closed interval [low, high] of ball numbers."""

    low: int
    high: int

    def __post_init__(self) -> None:
        # constructing the endpoints validates them as ball numbers
        BallNumber(self.low)
        BallNumber(self.high)
        if self.low > self.high:
            raise InvalidRangeError(self.low, self.high)

    @property
    def size(self) -> int:
        return self.high - self.low + 1

    def contains(self, ball: BallNumber | int) -> bool:
        return self.low <= int(ball) <= self.high

    def __contains__(self, ball: BallNumber | int) -> bool:
        return self.contains(ball)

    def __iter__(self) -> Iterator[BallNumber]:
        return (BallNumber(v) for v in range(self.low, self.high + 1))

    def __len__(self) -> int:
        return self.size

    def __str__(self) -> str:
        return f"{self.low}-{self.high}"

    @classmethod
    def mega_sena(cls) -> "BallRange":
        return cls(1, 60)

    @classmethod
    def lotomania(cls) -> "BallRange":
        return cls(0, 99)

    @classmethod
    def powerball(cls) -> "BallRange":
        """White-ball pool of US Powerball."""
        return cls(1, 69)


@dataclass(frozen=True)
class Ticket:
    """One quick pick: strictly ascending, distinct ball numbers.

    Tickets coming out of the generator are already ordered; use
    ``Ticket.from_numbers`` for numbers typed in or read from a file.
    """

    balls: Tuple[BallNumber, ...]

    def __post_init__(self) -> None:
        if not all(isinstance(b, BallNumber) for b in self.balls):
            raise DomainError("Ticket balls must be BallNumber values")
        for prev, cur in zip(self.balls, self.balls[1:]):
            if prev >= cur:
                raise DomainError(f"Ticket balls must be strictly ascending ({prev} before {cur})")

    @classmethod
    def from_numbers(cls, numbers: Iterable[int | BallNumber]) -> "Ticket":
        balls = sorted(b if isinstance(b, BallNumber) else BallNumber(int(b)) for b in numbers)
        if len(set(balls)) != len(balls):
            raise DomainError("Duplicate numbers in ticket")
        return cls(tuple(balls))

    @property
    def numbers(self) -> Tuple[int, ...]:
        return tuple(b.value for b in self.balls)

    def __len__(self) -> int:
        return len(self.balls)

    def __iter__(self) -> Iterator[BallNumber]:
        return iter(self.balls)

    def __contains__(self, ball: BallNumber | int) -> bool:
        return int(ball) in self.numbers

    def __str__(self) -> str:
        return " ".join(str(b) for b in self.balls)
