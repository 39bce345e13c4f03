"""
VendorHub Backend — Rate Limiter Tests
========================================

SlidingWindowLimiter is driven by a fake clock; the middleware is checked
end to end on a separately built app so the shared app keeps its high limit.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from vendorhub.database import get_db_session
from vendorhub.middleware.rate_limit import SlidingWindowLimiter


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class TestSlidingWindowLimiter:

    def setup_method(self):
        self.clock = FakeClock()
        self.limiter = SlidingWindowLimiter(limit=3, window=60, clock=self.clock)

    def test_allows_up_to_limit(self):
        assert [self.limiter.hit("1.2.3.4") for _ in range(3)] == [None, None, None]

    def test_rejects_over_limit_with_retry_after(self):
        for _ in range(3):
            self.limiter.hit("1.2.3.4")
        self.clock.now += 20
        assert self.limiter.hit("1.2.3.4") == 41

    def test_window_slides(self):
        for _ in range(3):
            self.limiter.hit("1.2.3.4")
        self.clock.now += 60
        assert self.limiter.hit("1.2.3.4") is None

    def test_keys_are_independent(self):
        for _ in range(3):
            self.limiter.hit("1.2.3.4")
        assert self.limiter.hit("5.6.7.8") is None

    def test_prune_forgets_idle_keys(self):
        self.limiter.hit("1.2.3.4")
        self.clock.now += 61
        self.limiter.hit("5.6.7.8")
        self.limiter.prune()
        assert len(self.limiter) == 1


@pytest.mark.asyncio
async def test_login_is_throttled(db_session_factory, monkeypatch):
    from vendorhub.config import settings
    from vendorhub.main import create_app

    monkeypatch.setattr(settings, "rate_limit_requests", 2)
    app = create_app()

    async def override_get_db_session():
        async with db_session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    creds = {"email": "nobody@example.com", "password": "wrong"}

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        statuses = [(await client.post("/vendor/login", json=creds)).status_code for _ in range(3)]
        throttled = await client.post("/vendor/login", json=creds)
        # Reads are never limited
        reads = await client.get("/firm/all-firms")

    assert statuses == [401, 401, 429]
    assert throttled.status_code == 429
    assert int(throttled.headers["Retry-After"]) > 0
    body = throttled.json()
    assert body["error"] == "rate_limit_exceeded"
    assert body["request_id"] == throttled.headers["X-Request-ID"]
    assert reads.status_code == 200
