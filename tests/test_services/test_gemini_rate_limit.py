"""Tests for Gemini rate limiting utilities."""

from services.gemini import RateLimiter


async def test_rate_limiter_sleeps_after_limit(monkeypatch):
    """Exceeding the call limit should trigger a sleep."""
    limiter = RateLimiter(max_calls=2, period=10.0)
    sleep_calls = []

    def fake_monotonic():
        return 1000.0

    async def fake_sleep(duration):
        sleep_calls.append(duration)

    monkeypatch.setattr("services.gemini.time.monotonic", fake_monotonic)
    monkeypatch.setattr("services.gemini.asyncio.sleep", fake_sleep)

    await limiter.wait_if_needed()
    await limiter.wait_if_needed()
    await limiter.wait_if_needed()

    assert sleep_calls == [10.0]
