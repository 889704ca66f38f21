"""Tests for the leaderboard HTTP API."""

import pytest

from santa_rush.server.app import create_app


@pytest.fixture
async def client(aiohttp_client):
    return await aiohttp_client(create_app())


async def post_score(client, name, score, followers=0):
    return await client.post("/api/scores", json={
        "playerName": name,
        "score": score,
        "followers": followers,
    })


async def test_health(client):
    resp = await client.get("/api/health")
    assert resp.status == 200
    assert (await resp.json())["status"] == "ok"


async def test_submit_score(client):
    resp = await post_score(client, "Rudolph", 42, 5)
    assert resp.status == 201

    data = await resp.json()
    assert data["success"]
    assert data["score"]["playerName"] == "Rudolph"
    assert data["score"]["score"] == 42
    assert data["score"]["followers"] == 5
    assert data["score"]["id"] == 1
    assert "timestamp" in data["score"]


async def test_ids_increment(client):
    first = await (await post_score(client, "a", 1)).json()
    second = await (await post_score(client, "b", 2)).json()
    assert second["score"]["id"] == first["score"]["id"] + 1


async def test_blank_name_is_anonymous(client):
    data = await (await post_score(client, "", 3)).json()
    assert data["score"]["playerName"] == "Anonymous"


@pytest.mark.parametrize("payload", [
    {"playerName": "x", "score": -1, "followers": 0},
    {"playerName": "x", "score": 1, "followers": -2},
    {"playerName": "x", "score": "many", "followers": 0},
    {"playerName": "x", "score": "12", "followers": 0},
    {"playerName": "x", "score": 12.7, "followers": 0},
    {"playerName": "x", "score": True, "followers": 0},
    {"playerName": "x", "score": 3, "followers": 1.5},
    [1, 2, 3],
])
async def test_rejects_bad_payloads(client, payload):
    resp = await client.post("/api/scores", json=payload)
    assert resp.status == 400
    data = await resp.json()
    assert data["success"] is False
    assert data["error"]


async def test_rejects_invalid_json(client):
    resp = await client.post(
        "/api/scores", data="not json", headers={"Content-Type": "application/json"}
    )
    assert resp.status == 400


async def test_leaderboard_sorted_and_limited(client):
    for score in [5, 50, 20]:
        await post_score(client, "p", score)

    resp = await client.get("/api/leaderboard", params={"limit": "2"})
    data = await resp.json()

    assert [s["score"] for s in data["scores"]] == [50, 20]
    assert data["total"] == 3


@pytest.mark.parametrize("limit", ["abc", "0", "-4"])
async def test_bad_limit_uses_default(client, limit):
    for score in range(12):
        await post_score(client, "p", score)

    data = await (await client.get("/api/leaderboard", params={"limit": limit})).json()

    assert len(data["scores"]) == 10


async def test_all_scores(client):
    await post_score(client, "p", 1)
    await post_score(client, "q", 9)

    data = await (await client.get("/api/scores")).json()

    assert data["total"] == 2
    assert [s["playerName"] for s in data["scores"]] == ["q", "p"]


async def test_score_cap(aiohttp_client):
    client = await aiohttp_client(create_app(keep=2))
    for score in [1, 2, 3]:
        await post_score(client, "p", score)

    data = await (await client.get("/api/scores")).json()

    assert [s["score"] for s in data["scores"]] == [3, 2]


async def test_cors(client):
    resp = await client.get("/api/health")
    assert resp.headers["Access-Control-Allow-Origin"] == "*"

    preflight = await client.options("/api/scores")
    assert preflight.status == 200
    assert "POST" in preflight.headers["Access-Control-Allow-Methods"]
