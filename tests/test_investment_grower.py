import pytest

from planner.models import ContributionType, ScheduleKind
from planner.schemas import YearMonth
from planner.services.investment_grower import (
    advance_investment,
    initial_investment_state,
    monthly_growth_rate,
)
from tests.helpers import make_contribution, make_investment


def run(investment, count, start="2026-01"):
    state = initial_investment_state(investment)
    positions = []
    month = YearMonth.parse(start)
    for _ in range(count):
        state, position = advance_investment(investment, state, month)
        positions.append(position)
        month = month.add_months(1)
    return positions


def test_monthly_rate_compounds_to_annual_rate():
    assert (1 + monthly_growth_rate(12.0)) ** 12 == pytest.approx(1.12)
    assert monthly_growth_rate(0.0) == 0.0


def test_twelve_months_of_growth_match_annual_rate():
    positions = run(make_investment(starting_valuation=10000.0, annual_growth_rate=12.0), 12)
    assert positions[-1].ending_valuation == pytest.approx(10000.0 * 1.12)


def test_growth_is_applied_before_contributions():
    investment = make_investment(
        starting_valuation=1000.0, annual_growth_rate=12.0,
        contributions=[make_contribution(amount=100.0)],
    )
    first = run(investment, 1)[0]
    assert first.growth == pytest.approx(1000.0 * monthly_growth_rate(12.0))
    assert first.contributions == 100.0
    assert first.ending_valuation == pytest.approx(1000.0 + first.growth + 100.0)


def test_withdrawals_can_push_valuation_negative():
    investment = make_investment(
        starting_valuation=100.0, annual_growth_rate=0.0,
        contributions=[make_contribution(
            type=ContributionType.WITHDRAWAL, kind=ScheduleKind.ONE_OFF,
            amount=150.0, scheduled_date="2026-02", frequency=None, start_date=None,
        )],
    )
    positions = run(investment, 3)
    assert positions[1].withdrawals == 150.0
    assert positions[1].ending_valuation == -50.0
    assert positions[1].is_negative
    assert positions[2].ending_valuation == -50.0


def test_nothing_happens_before_valuation_date():
    positions = run(make_investment(valuation_date="2026-03"), 3)
    assert positions[0].ending_valuation == 10000.0
    assert positions[1].growth == 0.0
    assert positions[2].growth > 0
