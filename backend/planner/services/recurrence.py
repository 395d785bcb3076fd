"""
Recurrence expansion: does an item produce a value in a given month, and what value.

Every schedulable entity (recurring items, planned items, salaries, taxed
incomes, investment contributions) is reduced to a Schedule first, so the
month test is written once.
"""

from dataclasses import dataclass
from typing import Iterable, Mapping

from ..models.enums import Frequency, PlannedKind, ScheduleKind
from ..schemas import (
    OccurrenceOverride,
    PlannedItemResponse,
    RecurringItemResponse,
    SalaryConfigResponse,
    TaxedIncomeResponse,
    YearMonth,
)
from ..schemas.investment import ContributionBase
from ..schemas.year_month import months_between
from .validation import ValidationError


@dataclass(frozen=True, slots=True)
class OverrideKey:
    """Lookup key for occurrence overrides."""
    item_id: int
    year_month: YearMonth


@dataclass(frozen=True, slots=True)
class Occurrence:
    """A single month's realized instance of a scheduled item."""
    name: str
    amount: float
    category: str | None = None
    is_overridden: bool = False


@dataclass(frozen=True, slots=True)
class Schedule:
    start: YearMonth | None
    end: YearMonth | None = None
    interval: int = 1
    is_active: bool = True


def interval_months(frequency: Frequency, custom_interval_months: int | None = None) -> int:
    """Return the number of months between occurrences for a frequency."""
    if frequency == Frequency.MONTHLY:
        return 1
    elif frequency == Frequency.QUARTERLY:
        return 3
    elif frequency == Frequency.YEARLY:
        return 12
    if custom_interval_months is None or custom_interval_months < 1:
        raise ValidationError([f"Custom interval must be at least 1 month, got {custom_interval_months}"])
    return custom_interval_months


def _one_off(month: YearMonth | None, is_active: bool = True) -> Schedule:
    return Schedule(start=month, end=month, is_active=is_active)


def schedule_for(item) -> Schedule:
    """Reduce any schedulable entity to its Schedule."""
    if isinstance(item, RecurringItemResponse):
        return Schedule(
            start=item.start_date,
            end=item.end_date,
            interval=interval_months(item.frequency, item.custom_interval_months),
            is_active=item.is_active,
        )

    if isinstance(item, PlannedItemResponse):
        if item.kind == PlannedKind.ONE_OFF or item.is_recurring_override:
            return _one_off(item.scheduled_date)
        if item.frequency is None:
            return Schedule(start=None)
        return Schedule(
            start=item.first_occurrence,
            end=item.end_date,
            interval=interval_months(item.frequency, item.custom_interval_months),
        )

    if isinstance(item, SalaryConfigResponse):
        return Schedule(start=item.start_date, end=item.end_date, is_active=item.is_active)

    if isinstance(item, (TaxedIncomeResponse, ContributionBase)):
        if item.kind == ScheduleKind.ONE_OFF:
            return _one_off(item.scheduled_date, item.is_active)
        if item.frequency is None:
            return Schedule(start=None)
        return Schedule(
            start=item.start_date,
            end=item.end_date,
            interval=interval_months(item.frequency, item.custom_interval_months),
            is_active=item.is_active,
        )

    raise TypeError(f"Not a schedulable item: {type(item).__name__}")


def schedule_matches(schedule: Schedule, month: YearMonth) -> bool:
    if schedule.start is None or month < schedule.start:
        return False
    if schedule.end is not None and month > schedule.end:
        return False
    if not schedule.is_active:
        return False
    offset = months_between(schedule.start, month)
    return offset >= 0 and offset % schedule.interval == 0


def is_scheduled(item, month: YearMonth) -> bool:
    """True if the item falls due in month (ignoring overrides)."""
    return schedule_matches(schedule_for(item), month)


def occurs_in(
    item: RecurringItemResponse | PlannedItemResponse,
    month: YearMonth,
    overrides: Mapping[OverrideKey, OccurrenceOverride] | None = None,
) -> Occurrence | None:
    """
    Return the item's occurrence in month, or None.

    An override for (item.id, month) either skips the occurrence or replaces
    whichever of name/amount/category it sets.
    """
    if not is_scheduled(item, month):
        return None

    override = overrides.get(OverrideKey(item.id, month)) if overrides else None
    if override is None:
        return Occurrence(name=item.name or "", amount=item.amount or 0.0, category=item.category)
    if override.skip_occurrence:
        return None

    return Occurrence(
        name=override.name if override.name is not None else item.name or "",
        amount=override.amount if override.amount is not None else item.amount or 0.0,
        category=override.category if override.category is not None else item.category,
        is_overridden=True,
    )


def build_override_map(
    overrides: Iterable[OccurrenceOverride],
) -> dict[OverrideKey, OccurrenceOverride]:
    """Index overrides by (item, month). Later entries win."""
    return {OverrideKey(o.item_id, o.year_month): o for o in overrides}


def split_overrides(
    planned_items: Iterable[PlannedItemResponse],
) -> tuple[list[PlannedItemResponse], dict[OverrideKey, OccurrenceOverride]]:
    """
    Separate override rows from regular planned items.

    Override rows are planned items flagged is_recurring_override with a
    linked recurring item and a month; they never produce line items of
    their own.
    """
    regular = []
    overrides = []
    for item in planned_items:
        if item.is_recurring_override and item.linked_recurring_item_id and item.scheduled_date:
            overrides.append(OccurrenceOverride(
                item_id=item.linked_recurring_item_id,
                year_month=item.scheduled_date,
                name=item.name,
                amount=item.amount,
                category=item.category,
                skip_occurrence=item.skip_occurrence,
            ))
        elif not item.is_recurring_override:
            regular.append(item)
    return regular, build_override_map(overrides)
