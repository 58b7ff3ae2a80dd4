"""Fixed-window Rate Limiter — budget, lazy reset and retry hints."""

from curator.core.rate_limit import FixedWindowRateLimiter


class _Clock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def test_allows_up_to_limit_then_blocks():
    limiter = FixedWindowRateLimiter(3, clock=_Clock())
    assert [limiter.check("ip") for _ in range(4)] == [True, True, True, False]


def test_keys_are_independent():
    limiter = FixedWindowRateLimiter(1, clock=_Clock())
    assert limiter.check("a")
    assert limiter.check("b")
    assert not limiter.check("a")


def test_window_resets_lazily_after_expiry():
    clock = _Clock()
    limiter = FixedWindowRateLimiter(1, window_seconds=60, clock=clock)
    assert limiter.check("ip")
    assert not limiter.check("ip")
    clock.now = 60.5
    assert limiter.check("ip")
    assert not limiter.check("ip")


def test_retry_after_counts_down():
    clock = _Clock()
    limiter = FixedWindowRateLimiter(1, window_seconds=60, clock=clock)
    assert limiter.retry_after_ms("ip") is None
    limiter.check("ip")
    clock.now = 15.0
    assert limiter.retry_after_ms("ip") == 45_000


def test_reset_clears_all_windows():
    limiter = FixedWindowRateLimiter(1, clock=_Clock())
    limiter.check("ip")
    limiter.reset()
    assert limiter.check("ip")
