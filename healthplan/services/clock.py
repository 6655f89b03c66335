"""Time source used for ``created_at`` and ``last_updated`` stamps."""

from datetime import UTC, datetime
from typing import Protocol


class Clock(Protocol):
    """Supplies the current timestamp."""

    def now(self) -> datetime: ...


class SystemClock:
    """Wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FixedClock:
    """Clock frozen at one instant, for reproducible runs."""

    def __init__(self, instant: datetime) -> None:
        self.instant = instant

    def now(self) -> datetime:
        return self.instant
