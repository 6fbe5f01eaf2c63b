"""
Holiday calendar interface.

Used by the recurrence expander to drop dates that fall on a holiday.
"""

from abc import ABC, abstractmethod
from datetime import date


class IHolidayCalendar(ABC):
    """Abstract interface for holiday lookups."""

    @abstractmethod
    def is_holiday(self, day: date) -> bool:
        """Return True if the given date is a holiday."""
        pass
