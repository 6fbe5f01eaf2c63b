"""Abstract interfaces for infrastructure abstraction."""

from app.interfaces.auth_provider import IAuthProvider
from app.interfaces.holiday_calendar import IHolidayCalendar
from app.interfaces.task_repository import ITaskRepository

__all__ = [
    "IAuthProvider",
    "IHolidayCalendar",
    "ITaskRepository",
]
