"""
Tests for per-client and global rate limiting.
"""

from conftest import FakeClock

from recipe_search.repositories import InMemoryRateRepository
from recipe_search.services import FixedWindowLimiter, RateLimitService


def make_limiter(clock, limit=5, window=60, max_clients=500):
    store = InMemoryRateRepository.create(max_clients=max_clients, idle_ttl=window, clock=clock)
    return RateLimitService(store=store, limit=limit, window=window, clock=clock)


def test_admits_up_to_limit_then_rejects(clock):
    """Five requests are admitted, the sixth is rejected."""
    limiter = make_limiter(clock)
    first = clock()

    decisions = []
    for _ in range(5):
        decisions.append(limiter.admit("1.2.3.4"))
        clock.advance(1)

    assert all(d.allowed for d in decisions)
    assert [d.remaining for d in decisions] == [4, 3, 2, 1, 0]

    rejected = limiter.admit("1.2.3.4")
    assert not rejected.allowed
    assert rejected.remaining == 0
    assert rejected.reset_at == first + 60


def test_rejected_requests_are_not_counted(clock):
    """Rejections do not extend the window."""
    limiter = make_limiter(clock, limit=1)
    assert limiter.admit("a").allowed
    for _ in range(3):
        assert not limiter.admit("a").allowed

    clock.advance(60)
    assert limiter.admit("a").allowed


def test_window_slides(clock):
    """Old timestamps leave the window one at a time."""
    limiter = make_limiter(clock, limit=2, window=10)
    assert limiter.admit("a").allowed
    clock.advance(5)
    assert limiter.admit("a").allowed
    assert not limiter.admit("a").allowed

    clock.advance(5.5)
    decision = limiter.admit("a")
    assert decision.allowed
    assert decision.remaining == 0


def test_clients_are_independent(clock):
    """One client's quota does not affect another's."""
    limiter = make_limiter(clock, limit=1)
    assert limiter.admit("a").allowed
    assert not limiter.admit("a").allowed
    assert limiter.admit("b").allowed


def test_reset_message_rounds_up(clock):
    """The retry message reports whole seconds, rounded up."""
    limiter = make_limiter(clock, limit=1, window=60)
    limiter.admit("a")
    clock.advance(0.5)
    decision = limiter.admit("a")
    assert limiter.seconds_until_reset(decision) == 60
    assert limiter.reset_message(decision) == "Rate limit exceeded. Please try again in 60 seconds."


def test_decision_headers(clock):
    """Reset is rendered in epoch milliseconds."""
    limiter = make_limiter(clock)
    headers = limiter.admit("a").to_headers()
    assert headers["X-RateLimit-Limit"] == "5"
    assert headers["X-RateLimit-Remaining"] == "4"
    assert headers["X-RateLimit-Reset"] == str(int((clock() + 60) * 1000))


def test_store_evicts_least_recently_used():
    """The store never tracks more than max_clients identities."""
    clock = FakeClock()
    store = InMemoryRateRepository.create(max_clients=2, idle_ttl=60, clock=clock)
    store.set("a", [clock()])
    store.set("b", [clock()])
    store.get("a")
    store.set("c", [clock()])

    assert store.count_all() == 2
    assert store.get("b") is None
    assert store.get("a") is not None
    assert store.get("c") is not None


def test_store_forgets_idle_clients():
    """Clients untouched for the idle TTL are dropped."""
    clock = FakeClock()
    store = InMemoryRateRepository.create(max_clients=10, idle_ttl=60, clock=clock)
    store.set("a", [clock()])
    clock.advance(61)
    assert store.get("a") is None


def test_fixed_window_limiter(clock):
    """The global limiter resets after its window."""
    limiter = FixedWindowLimiter(limit=2, window=60, clock=clock)
    assert limiter.acquire()
    assert limiter.acquire()
    assert not limiter.acquire()
    assert limiter.remaining == 0

    clock.advance(30)
    assert limiter.seconds_until_reset() == 30
    assert not limiter.acquire()

    clock.advance(30)
    assert limiter.acquire()
    assert limiter.remaining == 1


def test_evicted_client_starts_fresh(clock):
    """Evicting a client resets its quota."""
    limiter = make_limiter(clock, limit=1)
    assert limiter.admit("a").allowed
    assert not limiter.admit("a").allowed

    assert limiter.store.evict("a") is True
    assert limiter.admit("a").allowed
