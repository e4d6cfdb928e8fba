"""
Unit tests for client identification, IP hashing and rate limiting.
"""

import hashlib

import pytest
from starlette.requests import Request

from storyvote.exceptions import UnauthorizedError
from storyvote.utils.auth import verify_admin_key
from storyvote.utils.request_utils import RateLimiter, get_client_ip, hash_ip


def make_request(headers=None, client=("10.0.0.9", 50000), path="/api/stories"):
    scope = {
        "type": "http",
        "method": "POST",
        "path": path,
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
        "client": client,
    }
    return Request(scope)


class FakeClock:
    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def test_hash_ip():
    digest = hash_ip("1.2.3.4", "salt")
    assert digest == hashlib.sha256(b"1.2.3.4salt").hexdigest()
    assert len(digest) == 64
    assert hash_ip("1.2.3.4", "salt") == digest
    assert hash_ip("1.2.3.4", "pepper") != digest


def test_client_ip_from_forwarded_for():
    request = make_request({"X-Forwarded-For": "203.0.113.7, 10.0.0.1"})
    assert get_client_ip(request) == "203.0.113.7"


def test_client_ip_from_real_ip():
    request = make_request({"X-Real-IP": "198.51.100.2"})
    assert get_client_ip(request) == "198.51.100.2"


def test_client_ip_from_remote_addr_header():
    request = make_request({"Remote-Addr": "192.0.2.44"})
    assert get_client_ip(request) == "192.0.2.44"


def test_client_ip_falls_back_to_peer():
    assert get_client_ip(make_request()) == "10.0.0.9"


def test_client_ip_unknown():
    assert get_client_ip(make_request(client=None)) == "unknown"


def test_rate_limiter_window():
    clock = FakeClock()
    limiter = RateLimiter(max_requests=2, window_seconds=60, clock=clock)

    first = limiter.check("k")
    assert first.allowed
    assert first.remaining == 1
    assert first.reset_at == 1060

    assert limiter.check("k").remaining == 0

    blocked = limiter.check("k")
    assert not blocked.allowed
    assert blocked.remaining == 0

    clock.advance(61)
    again = limiter.check("k")
    assert again.allowed
    assert again.remaining == 1


def test_rate_limiter_keys_are_independent():
    limiter = RateLimiter(max_requests=1, window_seconds=60, clock=FakeClock())
    assert limiter.check("a").allowed
    assert not limiter.check("a").allowed
    assert limiter.check("b").allowed


def test_rate_limiter_per_call_limit():
    limiter = RateLimiter(max_requests=5, window_seconds=60, clock=FakeClock())
    assert limiter.check("vote", max_requests=1).allowed
    assert not limiter.check("vote", max_requests=1).allowed


def test_rate_limiter_cleanup():
    clock = FakeClock()
    limiter = RateLimiter(max_requests=1, window_seconds=10, clock=clock)
    limiter.check("a")
    limiter.check("b")
    assert len(limiter) == 2

    clock.advance(5)
    assert limiter.cleanup() == 0

    clock.advance(10)
    assert limiter.cleanup() == 2
    assert len(limiter) == 0


def test_rate_limiter_cleans_up_periodically():
    clock = FakeClock()
    limiter = RateLimiter(max_requests=1, window_seconds=10, clock=clock, cleanup_interval=100)
    limiter.check("a")

    clock.advance(150)
    limiter.check("b")

    assert len(limiter) == 1


def test_rate_limiter_reset():
    limiter = RateLimiter(max_requests=1, window_seconds=60, clock=FakeClock())
    limiter.check("a")
    limiter.reset()
    assert limiter.check("a").allowed


def test_admin_key_from_body():
    verify_admin_key(make_request(), "secret", "secret")


def test_admin_key_from_header():
    verify_admin_key(make_request({"X-Admin-Key": "secret"}), None, "secret")


@pytest.mark.parametrize("headers, body_key, expected", [
    ({}, None, "secret"),
    ({}, "wrong", "secret"),
    ({"X-Admin-Key": "wrong"}, None, "secret"),
    ({}, "anything", ""),
    ({}, None, ""),
])
def test_admin_key_refused(headers, body_key, expected):
    with pytest.raises(UnauthorizedError):
        verify_admin_key(make_request(headers), body_key, expected)
