from __future__ import annotations
from typing import Iterable, Iterator, List, Set, Tuple

from loguru import logger

from .balls import BallRange, Ticket
from .bitmap import (
    WORD_BITS,
    Strategy,
    TicketKey,
    decode_key,
    encode_balls,
    select_strategy,
    validate_key,
    word_count,
)
from .errors import InvariantViolation, PickCountError, TooManyTicketsError, UniqueGenerationFailed
from .probability import combination
from .rng import RandomSource, make_source
from .rules import Config, GameRules


def total_space(r: Config | GameRules) -> int:
    """Total number of distinct tickets for a game."""
    if isinstance(r, Config):
        return r.space
    return combination(r.range.size, r.pick)


def _draw_position(source: RandomSource, top: int) -> int:
    p = source.randint(0, top)
    if not (0 <= p <= top):
        raise InvariantViolation(f"random source returned {p}, outside [0, {top}]")
    return p


def _fill_word(source: RandomSource, size: int, pick: int) -> int:
    bitmap = 0
    count = 0
    top = size - 1
    while count < pick:
        mask = 1 << _draw_position(source, top)
        if not bitmap & mask:
            bitmap |= mask
            count += 1
    return bitmap


def _fill_words(source: RandomSource, size: int, pick: int) -> Tuple[int, ...]:
    words = [0] * word_count(size)
    count = 0
    top = size - 1
    while count < pick:
        index, bit = divmod(_draw_position(source, top), WORD_BITS)
        mask = 1 << bit
        if not words[index] & mask:
            words[index] |= mask
            count += 1
    return tuple(words)


def _draw_key(source: RandomSource, size: int, pick: int, strategy: Strategy) -> TicketKey:
    if strategy is Strategy.EXTENDED:
        key = TicketKey(strategy, _fill_words(source, size, pick))
    else:
        key = TicketKey(strategy, _fill_word(source, size, pick))
    return validate_key(key, size, pick)


def generate_ticket_key(
    source: RandomSource,
    ball_range: BallRange,
    pick: int,
    strategy: Strategy | None = None,
) -> TicketKey:
    """Draw one ticket as a validated bitmap.

    Positions are drawn uniformly from [0, size) and a draw that hits an
    already-set bit is thrown away. Pass ``strategy`` to reuse one selected
    for a whole batch.
    """
    size = ball_range.size
    if not (1 <= pick <= size):
        raise PickCountError(pick, size)
    if strategy is None:
        strategy = select_strategy(size)
    return _draw_key(source, size, pick, strategy)


def generate_ticket(source: RandomSource, ball_range: BallRange, pick: int) -> Ticket:
    return decode_key(generate_ticket_key(source, ball_range, pick), ball_range)


def _attempt_budget(requested: int, available: int) -> int:
    ratio = requested / available
    if ratio < 0.5:
        return requested * 100
    if ratio < 0.8:
        return requested * 1000
    return requested * 10_000


def _history_keys(history: Iterable[Ticket], config: Config) -> Set[TicketKey]:
    r = config.range
    keys: Set[TicketKey] = set()
    for ticket in history:
        if len(ticket) != config.pick_count or not all(r.contains(b) for b in ticket):
            logger.debug("ignoring history ticket {} (not a {} game)", ticket, config.rules)
            continue
        keys.add(encode_balls(ticket, r))
    return keys


def iter_unique_tickets(
    config: Config,
    source: RandomSource | None = None,
    *,
    history: Iterable[Ticket] = (),
    seed: int | None = None,
    max_attempts: int | None = None,
) -> Iterator[Ticket]:
    """Yield ``config.ticket_count`` tickets, no two alike and none in ``history``.

    ``seed`` only seeds the default source; passing both is an error.
    """
    if source is not None and seed is not None:
        raise TypeError("pass either a random source or a seed, not both")
    if source is None:
        source = make_source(seed)

    r = config.range
    strategy = select_strategy(config.size)
    seen = _history_keys(history, config)
    available = config.space - len(seen)
    if config.ticket_count > available:
        raise TooManyTicketsError(config.ticket_count, available)

    budget = max_attempts if max_attempts is not None else _attempt_budget(
        config.ticket_count, available
    )
    logger.debug(
        "drawing {} tickets of {} from {} ({} bitmap, {} excluded, budget {})",
        config.ticket_count, config.pick_count, r, strategy.value, len(seen), budget,
    )

    attempts = 0
    generated = 0
    while generated < config.ticket_count:
        if attempts >= budget:
            raise UniqueGenerationFailed(config.ticket_count, generated, attempts)
        key = _draw_key(source, config.size, config.pick_count, strategy)
        attempts += 1
        if key in seen:
            continue
        seen.add(key)
        generated += 1
        yield decode_key(key, r)

    logger.info(
        "generated {} unique tickets in {} attempts ({} collisions)",
        generated, attempts, attempts - generated,
    )


def generate_unique(
    config: Config,
    source: RandomSource | None = None,
    *,
    history: Iterable[Ticket] = (),
    seed: int | None = None,
    max_attempts: int | None = None,
) -> List[Ticket]:
    return list(
        iter_unique_tickets(
            config, source, history=history, seed=seed, max_attempts=max_attempts
        )
    )
