"""
Dependency injection for API endpoints.

This module provides FastAPI dependencies that inject the correct
infrastructure implementations based on environment configuration.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header

from app.core.config import get_settings
from app.core.exceptions import AuthorizationError
from app.core.logger import setup_logger
from app.interfaces.auth_provider import IAuthProvider, User
from app.interfaces.holiday_calendar import IHolidayCalendar
from app.interfaces.task_repository import ITaskRepository
from app.services.recurring_task_service import RecurringTaskService

logger = setup_logger(__name__)

UNAUTHORIZED_MESSAGE = "No autorizado"


# ===========================================
# Repository Dependencies
# ===========================================


@lru_cache()
def get_task_repository() -> ITaskRepository:
    """Get task repository instance."""
    from app.infrastructure.local.task_repository import SqliteTaskRepository

    return SqliteTaskRepository()


# ===========================================
# Collaborators
# ===========================================


@lru_cache()
def get_holiday_calendar() -> IHolidayCalendar:
    """Get holiday calendar instance."""
    settings = get_settings()
    if settings.HOLIDAY_PROVIDER == "static":
        from app.infrastructure.local.holiday_calendar import StaticHolidayCalendar

        return StaticHolidayCalendar.from_setting(settings.HOLIDAY_DATES)

    from app.infrastructure.local.holiday_calendar import NoHolidayCalendar

    return NoHolidayCalendar()


@lru_cache()
def get_auth_provider() -> IAuthProvider:
    """Get auth provider instance."""
    settings = get_settings()
    if settings.AUTH_PROVIDER == "jwt":
        from app.infrastructure.auth.jwt_auth import JwtAuthProvider

        return JwtAuthProvider(settings)

    from app.infrastructure.local.mock_auth import MockAuthProvider

    return MockAuthProvider(enabled=True)


# ===========================================
# Services
# ===========================================


def get_recurring_task_service(
    task_repo: ITaskRepository = Depends(get_task_repository),
    holiday_calendar: IHolidayCalendar = Depends(get_holiday_calendar),
) -> RecurringTaskService:
    """Get recurring task service wired to the configured collaborators."""
    settings = get_settings()
    return RecurringTaskService(
        task_repo=task_repo,
        holiday_calendar=holiday_calendar,
        max_iterations=settings.RECURRENCE_MAX_ITERATIONS,
        default_max_occurrences=settings.RECURRENCE_DEFAULT_MAX_OCCURRENCES,
    )


# ===========================================
# User Authentication
# ===========================================


async def get_current_user(
    authorization: Annotated[str | None, Header()] = None,
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> User:
    """
    Get current authenticated user.

    Raises:
        AuthorizationError: If the session is missing or invalid
    """
    if not auth_provider.is_enabled():
        # Mock user for development
        return User(id="dev_user", email="dev@example.com", display_name="Developer")

    if not authorization:
        raise AuthorizationError(UNAUTHORIZED_MESSAGE)

    # Extract token from "Bearer <token>"
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise AuthorizationError(UNAUTHORIZED_MESSAGE)

    try:
        return await auth_provider.verify_token(parts[1])
    except Exception as exc:
        logger.info("Rejected session token: %s", exc)
        raise AuthorizationError(UNAUTHORIZED_MESSAGE) from exc


# ===========================================
# Type Aliases for Dependency Injection
# ===========================================

RecurringTasks = Annotated[RecurringTaskService, Depends(get_recurring_task_service)]
CurrentUser = Annotated[User, Depends(get_current_user)]
