"""Injectable time source for resolving relative periods."""

from datetime import date, datetime
from typing import Protocol


class IClock(Protocol):
    """Anything that can tell the current time."""

    def now(self) -> datetime:
        """Return the current local time."""
        ...

    def today(self) -> date:
        """Return the current local date."""
        ...
