"""Tests for the per-run deadline."""

from trip_planner.deadline import Deadline


class FakeClock:
    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_unbounded_deadline():
    deadline = Deadline.after(None)
    assert deadline.remaining() is None
    assert deadline.expired is False
    assert deadline.call_timeout(5.0) == 5.0
    assert deadline.call_timeout(None) is None


def test_call_timeout_is_tighter_bound():
    clock = FakeClock()
    deadline = Deadline.after(10.0, clock=clock)
    assert deadline.call_timeout(30.0) == 10.0
    assert deadline.call_timeout(4.0) == 4.0
    clock.now += 8.0
    assert deadline.call_timeout(4.0) == 2.0
    assert deadline.call_timeout(None) == 2.0


def test_expired_deadline():
    clock = FakeClock()
    deadline = Deadline.after(1.0, clock=clock)
    clock.now += 5.0
    assert deadline.remaining() == 0.0
    assert deadline.expired is True
