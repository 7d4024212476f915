"""Error Handlers — malformed bodies, missing store, and the catch-all.

Design Decisions:
    - raise_app_exceptions=False for the catch-all test: the generic handler
      responds, and httpx would otherwise re-raise the original exception
"""

from httpx import ASGITransport, AsyncClient

from app.main import app


async def test_invalid_json_body_is_400(client):
    res = await client.post(
        "/users", content=b"{not json", headers={"content-type": "application/json"},
    )
    assert res.status_code == 400
    assert res.json() == {"error": "Request body is not valid JSON"}


async def test_non_object_body_is_400(client):
    res = await client.post("/groups", json=["admins"])
    assert res.status_code == 400
    assert res.json() == {"error": "Request body must be a JSON object"}


async def test_missing_store_is_503():
    original = getattr(app.state, "store", None)
    app.state.store = None
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test",
        ) as c:
            res = await c.get("/users")
    finally:
        app.state.store = original
    assert res.status_code == 503
    assert res.json() == {"error": "Database connect failed: Database not initialized"}


async def test_unhandled_storage_fault_is_500(fake_store, monkeypatch):
    async def boom(filter):
        raise RuntimeError("connection reset")

    monkeypatch.setattr(fake_store.collection("users"), "find_one", boom)
    original = getattr(app.state, "store", None)
    app.state.store = fake_store
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app, raise_app_exceptions=False),
            base_url="http://test",
        ) as c:
            res = await c.get("/users/507f1f77bcf86cd799439011")
    finally:
        app.state.store = original
    assert res.status_code == 500
    assert res.json() == {"error": "An unexpected error occurred"}
