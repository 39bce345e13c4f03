"""
VendorHub Backend — Global Error Handler Tests
================================================

Unhandled exceptions are rendered by the catch-all handler, which Starlette
runs outside the middleware chain; the response must still carry the request
ID and the generic 500 body.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from vendorhub.main import create_app


@pytest.fixture
def failing_app():
    app = create_app()

    @app.get("/explode")
    async def explode():
        raise RuntimeError("database password is hunter2")

    return app


@pytest.mark.asyncio
async def test_unexpected_error_keeps_request_id(failing_app):
    transport = ASGITransport(app=failing_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/explode", headers={"X-Request-ID": "trace-500"})

    assert response.status_code == 500
    assert response.headers["X-Request-ID"] == "trace-500"
    body = response.json()
    assert body["error"] == "internal_server_error"
    assert body["request_id"] == "trace-500"
    # Internal details stay in the server log
    assert "hunter2" not in response.text


@pytest.mark.asyncio
async def test_unexpected_error_generated_request_id(failing_app):
    transport = ASGITransport(app=failing_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/explode")

    assert response.status_code == 500
    assert response.headers["X-Request-ID"] == response.json()["request_id"]
    assert response.headers["X-Request-ID"]
