"""
Shared Value Objects used across multiple domains.

Value Objects are immutable objects that describe characteristics of a thing.
Two value objects are equal if all their properties are equal.
"""

from __future__ import annotations
from calendar import monthrange
from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR, date
from enum import Enum
from typing import Optional


# =============================================================================
# ENUMERATIONS
# =============================================================================

class TaskStatus(str, Enum):
    """Status of a task inside a project."""

    TODO = "todo"
    ONGOING = "ongoing"
    DONE = "done"

    @classmethod
    def values(cls) -> frozenset[str]:
        """Get the raw string values accepted in stored documents."""
        return frozenset(s.value for s in cls)


class DashboardTab(str, Enum):
    """Category tab of the project list."""

    ALL = "all"
    ONGOING = "ongoing"
    WEEK = "week"
    OVERDUE = "overdue"


class UrgencyBand(str, Enum):
    """Due-date urgency, shared by list cards and calendar cells."""

    OVERDUE = "overdue"
    DUE_SOON = "due_soon"
    ON_TRACK = "on_track"

    @property
    def color(self) -> str:
        """Get the display colour for this band."""
        mapping = {
            UrgencyBand.OVERDUE: "red",
            UrgencyBand.DUE_SOON: "amber",
            UrgencyBand.ON_TRACK: "green",
        }
        return mapping[self]


class SyncMode(str, Enum):
    """Synchronization discipline between the dashboard and the store."""

    FETCH_ONCE = "fetch_once"    # Load once, local list is the authority
    LIVE = "live"                # Store pushes every change back


# =============================================================================
# VALUE OBJECTS
# =============================================================================

@dataclass(frozen=True)
class DateRange:
    """
    Value object representing the span of a project, start to deadline.
    """

    start: date
    end: date

    def overlaps(self, first: date, last: date) -> bool:
        """Check if the span intersects the inclusive range [first, last]."""
        return self.start <= last and self.end >= first


@dataclass(frozen=True)
class MonthCursor:
    """
    Value object pointing at one calendar month.

    Month is 1-based (January = 1).
    """

    year: int
    month: int

    def __post_init__(self):
        if not (1 <= self.month <= 12):
            raise ValueError("Month must be between 1 and 12")
        if not (MINYEAR < self.year < MAXYEAR):
            raise ValueError(f"Year must be between {MINYEAR + 1} and {MAXYEAR - 1}")

    @classmethod
    def of(cls, day: Optional[date] = None) -> MonthCursor:
        """Get the cursor for the month containing `day` (today by default)."""
        day = day or date.today()
        return cls(day.year, day.month)

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return date(self.year, self.month, monthrange(self.year, self.month)[1])

    def next(self) -> MonthCursor:
        if self.month == 12:
            return MonthCursor(self.year + 1, 1)
        return MonthCursor(self.year, self.month + 1)

    def previous(self) -> MonthCursor:
        if self.month == 1:
            return MonthCursor(self.year - 1, 12)
        return MonthCursor(self.year, self.month - 1)

    def contains(self, day: date) -> bool:
        return day.year == self.year and day.month == self.month

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"
