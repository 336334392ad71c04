"""Injectable "current time" providers."""

from __future__ import annotations

from datetime import datetime


class SystemClock:
    """Reads the local wall clock."""

    def now(self) -> datetime:
        return datetime.now()


class FixedClock:
    """Always returns the same instant. Used by tests and replays."""

    def __init__(self, value: datetime):
        self.value = value

    def now(self) -> datetime:
        return self.value


default_clock = SystemClock()


def resolve(clock=None):
    return clock if clock is not None else default_clock
