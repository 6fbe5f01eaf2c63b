"""
Recurrence expansion.

Turns a template task and a recurrence rule into an ordered list of concrete
task instances. Pure: no I/O besides the optional holiday calendar lookup.
"""

from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import Any, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import ValidationError
from app.core.logger import setup_logger
from app.interfaces.holiday_calendar import IHolidayCalendar
from app.models.enums import RecurrenceFrequency, TaskStatus
from app.models.recurrence import RecurrencePattern
from app.models.task import TaskInstance, TaskTemplate

logger = setup_logger(__name__)

DEFAULT_MAX_OCCURRENCES = 52
DEFAULT_MAX_ITERATIONS = 1000

RecurrenceInput = Union[RecurrencePattern, dict[str, Any], None]


def coerce_recurrence_pattern(rule: RecurrenceInput) -> RecurrencePattern:
    """Parse and check a recurrence rule.

    Raises:
        ValidationError: If the rule is missing, unparsable, or lacks a
            frequency or interval
    """
    if rule is None:
        raise ValidationError("invalid recurrence pattern")
    if isinstance(rule, dict):
        try:
            rule = RecurrencePattern.model_validate(rule)
        except PydanticValidationError as exc:
            raise ValidationError(
                "invalid recurrence pattern",
                details=exc.errors(include_url=False, include_context=False),
            ) from exc
    if not rule.frequency or rule.interval is None:
        raise ValidationError("invalid recurrence pattern")
    return rule


def expand_recurrence(
    template: TaskTemplate,
    rule: RecurrenceInput,
    holiday_calendar: Optional[IHolidayCalendar] = None,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    default_max_occurrences: int = DEFAULT_MAX_OCCURRENCES,
) -> list[TaskInstance]:
    """
    Generate the instances of a recurring task.

    Starting from the template's due date, the date is advanced one
    frequency step at a time. A candidate past end_date stops the expansion.
    Candidates rejected by a filter (weekends, holidays, weekdays, days of
    month, months of year) are dropped without counting towards
    max_occurrences, and the next step starts from the dropped date.

    At most max_iterations candidates are examined, so a rule whose filters
    reject every future date still terminates.

    Args:
        template: Task to repeat. Must have an id and a due date.
        rule: Recurrence rule, as a model or a raw dict
        holiday_calendar: Holiday lookup used when skip_holidays is set
        max_iterations: Hard cap on candidate dates examined
        default_max_occurrences: Cap used when the rule has none

    Returns:
        Instances ordered by strictly increasing due date

    Raises:
        ValidationError: Missing due date, invalid rule, max_occurrences
            above max_iterations, or unsupported frequency (raised at the
            first date computation)
    """
    if template.due_date is None:
        raise ValidationError("task must have a due date")
    pattern = coerce_recurrence_pattern(rule)
    if pattern.max_occurrences and pattern.max_occurrences > max_iterations:
        raise ValidationError(
            "invalid recurrence pattern",
            details={"maxOccurrences": pattern.max_occurrences, "limit": max_iterations},
        )

    current = template.due_date
    limit = pattern.max_occurrences or default_max_occurrences
    instances: list[TaskInstance] = []
    attempts = 0

    while len(instances) < limit:
        if attempts >= max_iterations:
            logger.warning(
                "Recurrence for task %s stopped after %d candidate dates (%d instances)",
                template.id,
                attempts,
                len(instances),
            )
            break
        attempts += 1

        try:
            current = next_occurrence(current, pattern.frequency, pattern.interval)
        except OverflowError:
            # Ran past the last representable date
            break

        if pattern.end_date and current > pattern.end_date:
            break
        if not _is_kept(current, pattern, holiday_calendar):
            continue

        instances.append(_build_instance(template, current))

    return instances


def next_occurrence(current: date, frequency: str, interval: int) -> date:
    """Advance a date by one recurrence step.

    Raises:
        ValidationError: If the frequency is not recognized
        OverflowError: If the result is outside the supported date range
    """
    try:
        freq = RecurrenceFrequency(frequency)
    except ValueError:
        raise ValidationError(
            "unsupported frequency", details={"frequency": frequency}
        ) from None

    if freq == RecurrenceFrequency.DAILY:
        return current + timedelta(days=interval)
    if freq == RecurrenceFrequency.WEEKLY:
        return current + timedelta(weeks=interval)
    if freq == RecurrenceFrequency.MONTHLY:
        return add_months(current, interval)
    return add_months(current, 12 * interval)


def add_months(base: date, months: int) -> date:
    """Add calendar months, clamping the day to the target month's length.

    Jan 31 + 1 month is Feb 28 (Feb 29 in leap years).
    """
    month_index = base.year * 12 + base.month - 1 + months
    year, month = divmod(month_index, 12)
    month += 1
    if year < 1 or year > 9999:
        raise OverflowError("date value out of range")
    day = min(base.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def js_weekday(day: date) -> int:
    """Weekday index with 0=Sunday ... 6=Saturday."""
    return (day.weekday() + 1) % 7


def _is_kept(
    day: date,
    pattern: RecurrencePattern,
    holiday_calendar: Optional[IHolidayCalendar],
) -> bool:
    if pattern.skip_weekends and day.weekday() >= 5:
        return False
    if (
        pattern.skip_holidays
        and holiday_calendar is not None
        and holiday_calendar.is_holiday(day)
    ):
        return False
    if pattern.weekdays is not None and js_weekday(day) not in pattern.weekdays:
        return False
    if pattern.days_of_month is not None and day.day not in pattern.days_of_month:
        return False
    if pattern.months_of_year is not None and day.month not in pattern.months_of_year:
        return False
    return True


def _build_instance(template: TaskTemplate, due_date: date) -> TaskInstance:
    """Copy the template into a pending, non-recurring instance."""
    fields = {
        name: getattr(template, name)
        for name in TaskInstance.model_fields
        if name in type(template).model_fields
    }
    fields.update(
        due_date=due_date,
        parent_task_id=template.id,
        status=TaskStatus.PENDING,
        recurrence=None,
    )
    return TaskInstance(**fields)
