from fastapi import FastAPI
from fastapi.testclient import TestClient
from redis.exceptions import ConnectionError as RedisConnectionError

from app.middleware.rate_limit import RedisRateLimitMiddleware


class FakeRedis:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.counts: dict[str, int] = {}
        self.expiries: dict[str, int] = {}

    async def incr(self, key: str) -> int:
        if self.fail:
            raise RedisConnectionError("redis is down")
        self.counts[key] = self.counts.get(key, 0) + 1
        return self.counts[key]

    async def expire(self, key: str, seconds: int) -> None:
        self.expiries[key] = seconds


def _app(fake: FakeRedis, limit: int = 2) -> FastAPI:
    app = FastAPI()
    app.add_middleware(RedisRateLimitMiddleware, limit_per_minute=limit, client=fake)

    @app.get("/ping")
    async def ping() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


def test_requests_over_the_limit_get_429() -> None:
    fake = FakeRedis()
    client = TestClient(_app(fake))

    assert client.get("/ping").status_code == 200
    assert client.get("/ping").status_code == 200
    res = client.get("/ping")
    assert res.status_code == 429
    assert res.headers["Retry-After"] == "60"
    assert list(fake.expiries.values()) == [65]


def test_clients_are_counted_separately() -> None:
    client = TestClient(_app(FakeRedis(), limit=1))
    assert client.get("/ping", headers={"X-Forwarded-For": "10.0.0.1"}).status_code == 200
    assert client.get("/ping", headers={"X-Forwarded-For": "10.0.0.2, 172.16.0.1"}).status_code == 200
    assert client.get("/ping", headers={"X-Forwarded-For": "10.0.0.1"}).status_code == 429


def test_health_is_exempt() -> None:
    fake = FakeRedis()
    client = TestClient(_app(fake, limit=1))
    for _ in range(3):
        assert client.get("/health").status_code == 200
    assert fake.counts == {}


def test_fails_open_when_redis_is_down() -> None:
    client = TestClient(_app(FakeRedis(fail=True), limit=1))
    for _ in range(3):
        assert client.get("/ping").status_code == 200
