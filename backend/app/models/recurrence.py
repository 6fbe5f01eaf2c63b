"""
Recurrence rule model.

Describes how a template task repeats. Field names are accepted in both
camelCase (as sent by the web client) and snake_case.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def date_from_timestamp(value: Any) -> Any:
    """Reduce a datetime or ISO timestamp ("2024-01-01T09:30:00.000Z") to its date.

    The web client sends Date.toISOString() values; the calendar day is taken
    in the timestamp's own offset. Anything else is left for pydantic.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and "T" in value:
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
        except ValueError:
            return value
    return value


class RecurrencePattern(BaseModel):
    """Recurrence rule attached to a template task.

    frequency and interval are optional here so that a missing value is
    reported by the expander as an invalid pattern rather than by the parser.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    frequency: Optional[str] = Field(
        None, description="daily | weekly | monthly | yearly"
    )
    interval: Optional[int] = Field(None, ge=1, description="Number of frequency steps")
    weekdays: Optional[list[int]] = Field(
        None,
        validation_alias=AliasChoices("weekdays", "daysOfWeek", "days_of_week"),
        description="Weekdays to keep, 0=Sunday ... 6=Saturday",
    )
    days_of_month: Optional[list[int]] = Field(
        None, description="Days of month to keep, 1..31"
    )
    months_of_year: Optional[list[int]] = Field(
        None, description="Months to keep, 1=January ... 12=December"
    )
    end_date: Optional[date] = Field(None, description="Inclusive cutoff date")
    skip_weekends: bool = False
    skip_holidays: bool = False
    max_occurrences: Optional[int] = Field(
        None,
        ge=1,
        description=(
            "Maximum number of generated instances, "
            "at most RECURRENCE_MAX_ITERATIONS (1000 by default)"
        ),
    )

    @field_validator("end_date", mode="before")
    @classmethod
    def _end_date_from_timestamp(cls, value: Any) -> Any:
        return date_from_timestamp(value)

    @field_validator("weekdays")
    @classmethod
    def _check_weekdays(cls, value: Optional[list[int]]) -> Optional[list[int]]:
        if value is not None and any(day < 0 or day > 6 for day in value):
            raise ValueError("weekdays must be between 0 (Sunday) and 6 (Saturday)")
        return value

    @field_validator("days_of_month")
    @classmethod
    def _check_days_of_month(cls, value: Optional[list[int]]) -> Optional[list[int]]:
        if value is not None and any(day < 1 or day > 31 for day in value):
            raise ValueError("days_of_month must be between 1 and 31")
        return value

    @field_validator("months_of_year")
    @classmethod
    def _check_months_of_year(cls, value: Optional[list[int]]) -> Optional[list[int]]:
        if value is not None and any(month < 1 or month > 12 for month in value):
            raise ValueError("months_of_year must be between 1 and 12")
        return value
