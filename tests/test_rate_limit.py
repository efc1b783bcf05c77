import pytest
from fastapi import HTTPException
from starlette.requests import Request

from app.core.config import settings
from app.core.rate_limit import FixedWindowRateLimiter


class FakeClock:

    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def make_request(host="10.0.0.1"):
    return Request({"type": "http", "method": "GET", "path": "/", "headers": [], "client": (host, 1234)})


def test_allows_up_to_limit_within_window():
    clock = FakeClock()
    limiter = FixedWindowRateLimiter(limit=3, window_seconds=60, scope="test", clock=clock)

    assert [limiter.hit("client")[0] for _ in range(4)] == [True, True, True, False]


def test_window_resets_after_it_expires():
    clock = FakeClock()
    limiter = FixedWindowRateLimiter(limit=1, window_seconds=30, scope="test", clock=clock)

    assert limiter.hit("client") == (True, 0)
    clock.now += 10
    assert limiter.hit("client") == (False, 20)
    clock.now += 20
    assert limiter.hit("client") == (True, 0)


def test_clients_are_counted_separately():
    limiter = FixedWindowRateLimiter(limit=1, window_seconds=30, scope="test", clock=FakeClock())

    assert limiter.hit("a")[0]
    assert limiter.hit("b")[0]
    assert not limiter.hit("a")[0]


def test_dependency_raises_429_with_retry_after(monkeypatch):
    monkeypatch.setattr(settings, "RATE_LIMIT_ENABLED", True)
    limiter = FixedWindowRateLimiter(limit=1, window_seconds=30, scope="test", clock=FakeClock())
    request = make_request()

    limiter(request)
    with pytest.raises(HTTPException) as exc_info:
        limiter(request)

    assert exc_info.value.status_code == 429
    assert exc_info.value.headers["Retry-After"] == "30"


def test_dependency_is_a_no_op_when_disabled():
    limiter = FixedWindowRateLimiter(limit=1, window_seconds=30, scope="test", clock=FakeClock())
    request = make_request()

    for _ in range(5):
        limiter(request)


def test_reset_clears_counters():
    limiter = FixedWindowRateLimiter(limit=1, window_seconds=30, scope="test", clock=FakeClock())
    limiter.hit("client")

    limiter.reset()

    assert limiter.hit("client")[0]


def test_expired_clients_are_forgotten():
    clock = FakeClock()
    limiter = FixedWindowRateLimiter(limit=5, window_seconds=30, scope="test", clock=clock)
    for i in range(1000):
        limiter.hit(f"client-{i}")
    assert limiter.tracked_clients == 1000

    clock.now += 31
    limiter.hit("newcomer")

    assert limiter.tracked_clients == 1


def test_active_clients_survive_a_sweep():
    clock = FakeClock()
    limiter = FixedWindowRateLimiter(limit=1, window_seconds=30, scope="test", clock=clock)
    limiter.hit("old")
    clock.now += 20
    limiter.hit("recent")

    clock.now += 15
    limiter.hit("newcomer")

    assert limiter.tracked_clients == 2
    assert limiter.hit("recent") == (False, 15)
