"""
Tests for the per-IP rate limiter
"""

import pytest

from planner.utils import security
from planner.utils.security import rate_limit_check, rate_limiter

@pytest.fixture
def clock(monkeypatch):
    """Controllable time.time() for the limiter"""
    now = [1000.0]
    monkeypatch.setattr(security.time, "time", lambda: now[0])
    rate_limiter.clear()
    yield now
    rate_limiter.clear()

def test_limit_applies_within_window(clock):
    assert rate_limit_check("10.0.0.1", limit=2)
    assert rate_limit_check("10.0.0.1", limit=2)
    assert not rate_limit_check("10.0.0.1", limit=2)
    assert rate_limit_check("10.0.0.2", limit=2)

    clock[0] += 61
    assert rate_limit_check("10.0.0.1", limit=2)

def test_idle_clients_are_forgotten(clock):
    for i in range(50):
        rate_limit_check(f"10.0.1.{i}", limit=5)
    assert len(rate_limiter) == 50

    clock[0] += 61
    rate_limit_check("10.0.2.1", limit=5)

    assert list(rate_limiter) == ["10.0.2.1"]
