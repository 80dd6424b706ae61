"""Clock implementations: the wall clock and a pinned clock for tests."""

from datetime import date, datetime


class SystemClock:
    """Local wall-clock time."""

    def now(self) -> datetime:
        return datetime.now()

    def today(self) -> date:
        return date.today()


class FixedClock:
    """Clock pinned to one instant; advance it explicitly."""

    def __init__(self, at: datetime) -> None:
        self._at = at

    def now(self) -> datetime:
        return self._at

    def today(self) -> date:
        return self._at.date()

    def set(self, at: datetime) -> None:
        self._at = at


_clock: SystemClock | FixedClock | None = None


def get_clock() -> SystemClock | FixedClock:
    """Get the process-wide clock, the system clock unless one was installed."""
    global _clock
    if _clock is None:
        _clock = SystemClock()
    return _clock


def set_clock(clock: SystemClock | FixedClock | None) -> None:
    """Install a clock (None restores the system clock on next use)."""
    global _clock
    _clock = clock
