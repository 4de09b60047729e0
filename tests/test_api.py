import pytest
from fastapi.testclient import TestClient

from api.main import app

client = TestClient(app)


def test_root_hint():
    r = client.get("/")
    assert r.status_code == 200
    assert "/generate" in r.text


def test_games():
    r = client.get("/games")
    assert r.status_code == 200
    games = {g["name"]: g for g in r.json()}
    assert set(games) == {"lotomania", "mega-sena", "powerball"}
    assert games["mega-sena"]["space"] == 50_063_860


def test_generate_preset():
    r = client.get("/generate", params={"game": "mega-sena", "count": 5, "seed": 1})
    assert r.status_code == 200
    body = r.json()
    assert body["strategy"] == "narrow"
    assert body["space"] == 50_063_860
    assert len(body["tickets"]) == 5
    assert len({tuple(t) for t in body["tickets"]}) == 5
    for t in body["tickets"]:
        assert len(t) == 6 and t == sorted(t)
        assert all(1 <= n <= 60 for n in t)


def test_generate_is_reproducible_with_seed():
    params = {"low": 1, "high": 200, "pick": 10, "count": 3, "seed": 99}
    first = client.get("/generate", params=params).json()
    assert first["strategy"] == "extended"
    assert client.get("/generate", params=params).json() == first


@pytest.mark.parametrize(
    "params,message",
    [
        ({"low": 10, "high": 1, "pick": 3}, "must not be greater"),
        ({"low": 1, "high": 5, "pick": 3, "count": 11}, "maximum possible"),
        ({"game": "keno"}, "Unknown game"),
        ({"low": 1, "high": 60}, "required"),
    ],
)
def test_generate_rejects_bad_input(params, message):
    r = client.get("/generate", params=params)
    assert r.status_code == 422
    assert message in r.json()["error"]


def test_probability():
    r = client.get("/probability", params={"total": 60, "pick": 6, "match": 6})
    assert r.status_code == 200
    body = r.json()
    assert body["favorable"] == 1
    assert body["outcomes"] == 50_063_860
    assert body["odds"] == "1 in 50,063,860"
    assert body["probability"] == pytest.approx(1 / 50_063_860)


def test_probability_rejects_impossible_match():
    r = client.get("/probability", params={"total": 60, "pick": 6, "match": 7})
    assert r.status_code == 422
    assert "Cannot match 7" in r.json()["error"]


def test_odds_table_sums_to_one():
    r = client.get("/odds", params={"total": 60, "pick": 6})
    assert r.status_code == 200
    rows = r.json()
    assert [row["match"] for row in rows] == [6, 5, 4, 3, 2, 1, 0]
    assert sum(row["probability"] for row in rows) == pytest.approx(1.0)


@pytest.mark.parametrize(
    "path,params",
    [
        ("/probability", {"total": 2000, "pick": 1000, "match": 1}),
        ("/probability", {"total": 60, "pick": 257, "match": 1}),
        ("/odds", {"total": 6000, "pick": 3000}),
    ],
)
def test_pool_size_is_capped(path, params):
    r = client.get(path, params=params)
    assert r.status_code == 422


def test_largest_pool_is_served():
    r = client.get("/probability", params={"total": 256, "pick": 128, "match": 1})
    assert r.status_code == 200
    assert r.json()["odds"].startswith("1 in ")
