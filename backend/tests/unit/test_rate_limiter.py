"""
限流器单元测试
使用可手动推进的时钟，不依赖真实时间
"""

import asyncio
from unittest.mock import MagicMock

import pytest

from app.core.rate_limit import RateLimiter, get_client_ip, periodic_sweep


@pytest.mark.unit
@pytest.mark.rate_limit
class TestRateLimiter:
    """RateLimiter 单元测试类"""

    def test_window_limits_then_resets(self, rate_limiter, fake_clock):
        """3次/1000ms：前三次放行，第四次限流，窗口过后再次放行"""
        results = []
        for _ in range(4):
            results.append(rate_limiter.check_and_increment("K", 3, 1000))
            fake_clock.advance(100)

        assert results == [False, False, False, True]

        fake_clock.advance(1001)
        assert rate_limiter.check_and_increment("K", 3, 1000) is False
        assert rate_limiter.get_entry("K").count == 1

    def test_first_request_initializes_entry(self, rate_limiter, fake_clock):
        assert rate_limiter.check_and_increment("1.2.3.4", 30, 60_000) is False

        entry = rate_limiter.get_entry("1.2.3.4")
        assert entry.count == 1
        assert entry.window_start == fake_clock.now_ms

    def test_keys_are_independent(self, rate_limiter):
        assert rate_limiter.check_and_increment("a", 1, 1000) is False
        assert rate_limiter.check_and_increment("a", 1, 1000) is True
        assert rate_limiter.check_and_increment("b", 1, 1000) is False

    def test_limited_requests_keep_counting(self, rate_limiter):
        for _ in range(3):
            rate_limiter.check_and_increment("a", 1, 1000)
        assert rate_limiter.get_entry("a").count == 3

    def test_request_exactly_at_window_edge_is_in_window(self, rate_limiter, fake_clock):
        rate_limiter.check_and_increment("a", 1, 1000)
        fake_clock.advance(1000)
        assert rate_limiter.check_and_increment("a", 1, 1000) is True

    def test_empty_key_is_never_limited(self, rate_limiter):
        for _ in range(5):
            assert rate_limiter.check_and_increment("", 1, 1000) is False
        assert len(rate_limiter) == 0

    def test_sweep_removes_only_expired_entries(self, rate_limiter, fake_clock):
        rate_limiter.check_and_increment("old", 10, 1000)
        fake_clock.advance(800)
        rate_limiter.check_and_increment("fresh", 10, 1000)
        fake_clock.advance(300)

        removed = rate_limiter.sweep()

        assert removed == 1
        assert rate_limiter.get_entry("old") is None
        assert rate_limiter.get_entry("fresh") is not None
        assert len(rate_limiter) == 1

    def test_get_entry_returns_copy(self, rate_limiter):
        rate_limiter.check_and_increment("a", 10, 1000)
        entry = rate_limiter.get_entry("a")
        entry.count = 99
        assert rate_limiter.get_entry("a").count == 1

    @pytest.mark.asyncio
    async def test_periodic_sweep_runs_until_cancelled(self, rate_limiter, fake_clock):
        rate_limiter.check_and_increment("old", 10, 1000)
        fake_clock.advance(5000)

        task = asyncio.create_task(periodic_sweep(rate_limiter, 0.01))
        for _ in range(50):
            await asyncio.sleep(0.01)
            if len(rate_limiter) == 0:
                break
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert len(rate_limiter) == 0


def _request(headers=None, host="10.0.0.1"):
    request = MagicMock()
    request.headers = headers or {}
    request.client = MagicMock(host=host) if host else None
    return request


@pytest.mark.unit
@pytest.mark.rate_limit
class TestGetClientIp:
    """客户端IP提取单元测试类"""

    def test_forwarded_for_first_hop(self):
        request = _request({"x-forwarded-for": "203.0.113.5, 10.0.0.2"})
        assert get_client_ip(request) == "203.0.113.5"

    def test_real_ip_header(self):
        assert get_client_ip(_request({"x-real-ip": "198.51.100.7"})) == "198.51.100.7"

    def test_cloudflare_header(self):
        assert get_client_ip(_request({"cf-connecting-ip": "192.0.2.9"})) == "192.0.2.9"

    def test_falls_back_to_peer_address(self):
        assert get_client_ip(_request()) == "10.0.0.1"

    def test_no_information_returns_none(self):
        assert get_client_ip(_request(host=None)) is None
