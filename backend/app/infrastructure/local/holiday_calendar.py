"""
Holiday calendar implementations.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Iterable

from app.interfaces.holiday_calendar import IHolidayCalendar


class NoHolidayCalendar(IHolidayCalendar):
    """Calendar without holidays."""

    def is_holiday(self, day: date) -> bool:
        return False


class StaticHolidayCalendar(IHolidayCalendar):
    """Holidays from a fixed list.

    Entries are either a full date ("2024-12-25") matching that day only, or
    a month and day ("12-25") matching every year.
    """

    def __init__(self, entries: Iterable[str]):
        self._dates: set[date] = set()
        self._yearly: set[tuple[int, int]] = set()
        for raw in entries:
            entry = raw.strip()
            if not entry:
                continue
            if entry.count("-") == 2:
                self._dates.add(datetime.strptime(entry, "%Y-%m-%d").date())
            else:
                # Parse against a leap year so "02-29" is accepted
                parsed = datetime.strptime(f"2000-{entry}", "%Y-%m-%d")
                self._yearly.add((parsed.month, parsed.day))

    @classmethod
    def from_setting(cls, value: str) -> "StaticHolidayCalendar":
        """Build from a comma separated setting value."""
        return cls(value.split(","))

    def is_holiday(self, day: date) -> bool:
        return day in self._dates or (day.month, day.day) in self._yearly
