from __future__ import annotations
from typing import List, Optional

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from loguru import logger
from pydantic import BaseModel

from quickpick import Config, DomainError, UniqueGenerationFailed, generate_unique, select_strategy
from quickpick.balls import BALL_MAX
from quickpick.probability import calculate_probability, format_odds, odds_table
from quickpick.rules import GAMES, game_rules

MAX_POOL = BALL_MAX + 1


class APIGame(BaseModel):
    name: str
    low: int
    high: int
    pick: int
    space: int


class APITickets(BaseModel):
    low: int
    high: int
    pick: int
    strategy: str
    space: int
    tickets: List[List[int]]


class APIProbability(BaseModel):
    total: int
    pick: int
    match: int
    favorable: int
    outcomes: int
    probability: float
    odds: str


app = FastAPI(title="Lotto Quick Pick API")


@app.exception_handler(DomainError)
async def domain_error(request: Request, exc: DomainError):
    return JSONResponse(status_code=422, content={"error": str(exc)})


@app.exception_handler(UniqueGenerationFailed)
async def generation_failed(request: Request, exc: UniqueGenerationFailed):
    logger.warning("{} failed: {}", request.url.path, exc)
    return JSONResponse(
        status_code=503,
        content={"error": str(exc), "requested": exc.requested, "generated": exc.generated},
    )


@app.get("/", response_class=PlainTextResponse)
def root():
    return "Lotto Quick Pick API: try /generate?game=mega-sena&count=5&seed=42"


@app.get("/games", response_model=List[APIGame])
def games():
    return [
        APIGame(name=name, low=r.low, high=r.high, pick=r.pick,
                space=Config.for_game(name).space)
        for name, r in sorted(GAMES.items())
    ]


@app.get("/generate", response_model=APITickets)
def generate(
    count: int = Query(5, ge=1, le=1000),
    game: Optional[str] = None,
    low: Optional[int] = None,
    high: Optional[int] = None,
    pick: Optional[int] = None,
    seed: Optional[int] = None,
):
    if game is not None:
        preset = game_rules(game)
        low = preset.low if low is None else low
        high = preset.high if high is None else high
        pick = preset.pick if pick is None else pick
    if None in (low, high, pick):
        return JSONResponse(
            status_code=422,
            content={"error": "low, high and pick are required without a game preset"},
        )

    config = Config(count, low, high, pick)
    tickets = generate_unique(config, seed=seed)
    return APITickets(
        low=config.low,
        high=config.high,
        pick=config.pick_count,
        strategy=select_strategy(config.size).value,
        space=config.space,
        tickets=[list(t.numbers) for t in tickets],
    )


@app.get("/probability", response_model=APIProbability)
def match_probability(
    total: int = Query(..., ge=0, le=MAX_POOL),
    pick: int = Query(..., ge=0, le=MAX_POOL),
    match: int = Query(..., ge=0, le=MAX_POOL),
):
    favorable, outcomes = calculate_probability(total, pick, match)
    return APIProbability(
        total=total,
        pick=pick,
        match=match,
        favorable=favorable,
        outcomes=outcomes,
        probability=favorable / outcomes,
        odds=format_odds(favorable, outcomes),
    )


@app.get("/odds", response_model=List[APIProbability])
def odds(total: int = Query(..., ge=0, le=MAX_POOL), pick: int = Query(..., ge=0, le=MAX_POOL)):
    return [
        APIProbability(
            total=total,
            pick=pick,
            match=m,
            favorable=favorable,
            outcomes=outcomes,
            probability=favorable / outcomes,
            odds=format_odds(favorable, outcomes),
        )
        for m, favorable, outcomes in odds_table(total, pick)
    ]
