from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Sequence

from .balls import BallRange, Ticket
from .errors import DomainError, PickCountError, TicketCountError, TooManyTicketsError
from .probability import combination


@dataclass(frozen=True)
class GameRules:
    low: int = 1
    high: int = 69
    pick: int = 5

    def __post_init__(self) -> None:
        size = self.range.size
        if not (1 <= self.pick <= size):
            raise PickCountError(self.pick, size)

    @property
    def range(self) -> BallRange:
        return BallRange(self.low, self.high)

    def validate(self, numbers: Sequence[int]) -> None:
        """Check that a hand-entered ticket matches these rules."""
        if len(numbers) != self.pick:
            raise DomainError(f"Must pick exactly {self.pick} balls")
        if len(set(numbers)) != len(numbers):
            raise DomainError("Duplicate numbers in ticket")
        if not all(self.low <= n <= self.high for n in numbers):
            raise DomainError(f"Ball out of range ({self.low}-{self.high})")

    def ticket(self, numbers: Sequence[int]) -> Ticket:
        self.validate(numbers)
        return Ticket.from_numbers(numbers)


GAMES: Dict[str, GameRules] = {
    "mega-sena": GameRules(low=1, high=60, pick=6),
    "lotomania": GameRules(low=0, high=99, pick=50),
    "powerball": GameRules(low=1, high=69, pick=5),
}


def game_rules(name: str) -> GameRules:
    try:
        return GAMES[name.lower()]
    except KeyError:
        raise DomainError(
            f"Unknown game {name!r}; choose from {', '.join(sorted(GAMES))}"
        ) from None


@dataclass(frozen=True)
class Config:
    """A validated request for ``ticket_count`` unique tickets.

    Everything downstream assumes the values here are already valid, so all
    checks happen once, at construction.
    """

    ticket_count: int
    low: int
    high: int
    pick_count: int

    def __post_init__(self) -> None:
        if self.ticket_count < 1:
            raise TicketCountError(self.ticket_count)
        size = BallRange(self.low, self.high).size
        if not (1 <= self.pick_count <= size):
            raise PickCountError(self.pick_count, size)
        space = combination(size, self.pick_count)
        if self.ticket_count > space:
            raise TooManyTicketsError(self.ticket_count, space)

    @classmethod
    def for_game(cls, name: str, ticket_count: int = 1) -> "Config":
        r = game_rules(name)
        return cls(ticket_count, r.low, r.high, r.pick)

    @property
    def range(self) -> BallRange:
        return BallRange(self.low, self.high)

    @property
    def size(self) -> int:
        return self.high - self.low + 1

    @property
    def space(self) -> int:
        """Number of distinct tickets this game allows, C(size, pick)."""
        return combination(self.size, self.pick_count)

    @property
    def rules(self) -> GameRules:
        return GameRules(self.low, self.high, self.pick_count)
