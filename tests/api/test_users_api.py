"""
API tests for /users/me and /health
"""
from conftest import bearer, register_and_login


async def test_me_returns_profile_and_own_videos(client):
    headers = bearer(await register_and_login(client, "u1@x.com"))
    other = bearer(await register_and_login(client, "u2@x.com"))
    mine = (await client.post(
        "/videos", json={"title": "Mine", "duration": 10, "genre": "demo"}, headers=headers,
    )).json()
    await client.post(
        "/videos", json={"title": "Theirs", "duration": 10, "genre": "demo"}, headers=other,
    )

    response = await client.get("/users/me", headers=headers)

    assert response.status_code == 200
    data = response.json()
    assert data["email"] == "u1@x.com"
    assert [v["id"] for v in data["videos"]] == [mine["id"]]
    assert "hashed_password" not in data


async def test_me_requires_token(client):
    assert (await client.get("/users/me")).status_code == 401


async def test_health_reports_cache(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["cache"] == "ok"


async def test_request_id_header(client):
    response = await client.get("/health", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"
