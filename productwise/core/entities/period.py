"""Half-open UTC instant range used to filter movements."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class DateRange:
    """[start, end_exclusive); either side may be unbounded (None)."""

    start: datetime | None = None
    end_exclusive: datetime | None = None

    @property
    def is_bounded(self) -> bool:
        return self.start is not None or self.end_exclusive is not None

    def contains(self, instant: datetime) -> bool:
        if self.start is not None and instant < self.start:
            return False
        if self.end_exclusive is not None and instant >= self.end_exclusive:
            return False
        return True
