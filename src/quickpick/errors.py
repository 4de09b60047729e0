from __future__ import annotations


class QuickPickError(Exception):
    """Base class for errors a caller is expected to handle."""


class DomainError(QuickPickError, ValueError):
    """Raised when a configuration or probability query is invalid."""


class InvalidRangeError(DomainError):
    def __init__(self, low: int, high: int):
        super().__init__(f"Start value ({low}) must not be greater than end value ({high})")
        self.low = low
        self.high = high


class PickCountError(DomainError):
    def __init__(self, pick: int, available: int):
        super().__init__(f"Cannot pick {pick} balls from a range of {available} values")
        self.pick = pick
        self.available = available


class TicketCountError(DomainError):
    def __init__(self, count: int):
        super().__init__(f"Number of tickets must be at least 1 (got {count})")
        self.count = count


class MatchCountError(DomainError):
    def __init__(self, match_count: int, pick_count: int):
        super().__init__(
            f"Cannot match {match_count} balls when only picking {pick_count}"
        )
        self.match_count = match_count
        self.pick_count = pick_count


class TooManyTicketsError(DomainError):
    def __init__(self, requested: int, maximum: int):
        super().__init__(
            f"Cannot generate {requested} unique tickets (maximum possible: {maximum:,})"
        )
        self.requested = requested
        self.maximum = maximum


class UniqueGenerationFailed(QuickPickError, RuntimeError):
    def __init__(self, requested: int, generated: int, attempts: int):
        super().__init__(
            f"Failed to generate {requested} unique tickets "
            f"(only generated {generated} after {attempts:,} attempts)"
        )
        self.requested = requested
        self.generated = generated
        self.attempts = attempts


class InvariantViolation(RuntimeError):
    """A generated value broke an internal invariant.

    This points at a defect in the generator or the random source, never at
    bad input, so it is not a QuickPickError and must not be retried.
    """
