import pytest

from planner.models import Frequency, ScheduleKind
from planner.schemas import YearMonth
from planner.services.recurrence import (
    build_override_map,
    interval_months,
    is_scheduled,
    occurs_in,
    split_overrides,
)
from planner.services.validation import ValidationError
from tests.helpers import (
    make_contribution,
    make_one_off,
    make_override,
    make_recurring,
    make_repeating,
)


def months(item, start="2026-01", count=12):
    first = YearMonth.parse(start)
    return [str(first.add_months(i)) for i in range(count) if is_scheduled(item, first.add_months(i))]


def test_interval_months():
    assert interval_months(Frequency.MONTHLY) == 1
    assert interval_months(Frequency.QUARTERLY) == 3
    assert interval_months(Frequency.YEARLY) == 12
    assert interval_months(Frequency.CUSTOM, 5) == 5
    with pytest.raises(ValidationError):
        interval_months(Frequency.CUSTOM, 0)


def test_quarterly_item_occurs_every_third_month_from_start():
    item = make_recurring(frequency=Frequency.QUARTERLY, start_date="2026-02")
    assert months(item) == ["2026-02", "2026-05", "2026-08", "2026-11"]


def test_custom_interval_and_end_date_are_inclusive():
    item = make_recurring(
        frequency=Frequency.CUSTOM, custom_interval_months=2,
        start_date="2026-01", end_date="2026-07",
    )
    assert months(item) == ["2026-01", "2026-03", "2026-05", "2026-07"]


def test_inactive_items_never_occur():
    assert months(make_recurring(is_active=False)) == []


def test_one_off_occurs_only_in_its_month():
    assert months(make_one_off(scheduled_date="2026-06")) == ["2026-06"]


def test_repeating_planned_item_starts_at_first_occurrence():
    item = make_repeating(frequency=Frequency.YEARLY, first_occurrence="2026-03", end_date="2028-03")
    assert months(item, count=36) == ["2026-03", "2027-03", "2028-03"]


def test_one_off_contribution_schedule():
    contribution = make_contribution(kind=ScheduleKind.ONE_OFF, scheduled_date="2026-04")
    assert months(contribution) == ["2026-04"]


def test_override_replaces_only_the_fields_it_sets():
    item = make_recurring(name="Rent", amount=500.0, category="Housing")
    overrides = build_override_map([make_override(item, "2026-03", amount=650.0)])

    occurrence = occurs_in(item, YearMonth(2026, 3), overrides)
    assert occurrence.amount == 650.0
    assert occurrence.name == "Rent"
    assert occurrence.category == "Housing"
    assert occurrence.is_overridden

    untouched = occurs_in(item, YearMonth(2026, 4), overrides)
    assert untouched.amount == 500.0
    assert not untouched.is_overridden


def test_skip_override_suppresses_the_occurrence():
    item = make_recurring()
    overrides = build_override_map([make_override(item, "2026-05", skip_occurrence=True)])
    assert occurs_in(item, YearMonth(2026, 5), overrides) is None
    assert occurs_in(item, YearMonth(2026, 6), overrides) is not None


def test_override_for_an_unscheduled_month_does_nothing():
    item = make_recurring(frequency=Frequency.QUARTERLY, start_date="2026-01")
    overrides = build_override_map([make_override(item, "2026-02", amount=1.0)])
    assert occurs_in(item, YearMonth(2026, 2), overrides) is None


def test_split_overrides_separates_override_rows():
    item = make_recurring()
    regular = make_one_off()
    override_row = make_one_off(
        name=None, amount=None, category=None, scheduled_date="2026-02",
        is_recurring_override=True, linked_recurring_item_id=item.id, skip_occurrence=True,
    )

    planned, overrides = split_overrides([regular, override_row])
    assert planned == [regular]
    assert occurs_in(item, YearMonth(2026, 2), overrides) is None
