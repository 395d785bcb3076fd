import pytest

from planner.schemas import YearMonth
from planner.services.receivable_tracker import (
    ReceivableSchedule,
    advance_receivable,
    initial_receivable_state,
)
from tests.helpers import make_receivable


def run(receivable, count, start="2026-01", project_expected=True):
    schedule = ReceivableSchedule.from_receivable(receivable)
    state = initial_receivable_state(receivable)
    positions = []
    month = YearMonth.parse(start)
    for _ in range(count):
        state, position = advance_receivable(schedule, state, month, project_expected)
        positions.append(position)
        month = month.add_months(1)
    return positions


def test_expected_repayments_run_the_balance_down_to_zero():
    positions = run(make_receivable(initial_principal=250.0, expected_monthly_repayment=100.0), 4)
    assert [p.repayment for p in positions] == [100.0, 100.0, 50.0, 0.0]
    assert positions[2].ending_balance == 0.0
    assert positions[3].ending_balance == 0.0


def test_recorded_repayment_wins_over_expected():
    receivable = make_receivable(repayments=[{"date": "2026-02", "amount": 300.0}])
    positions = run(receivable, 2)
    assert positions[1].repayment == 300.0
    assert positions[1].is_actual_repayment
    assert positions[1].ending_balance == pytest.approx(600.0)


def test_interest_accrues_monthly():
    receivable = make_receivable(
        initial_principal=1200.0, has_interest=True, annual_interest_rate=12.0,
        expected_monthly_repayment=0.0,
    )
    first = run(receivable, 1)[0]
    assert first.interest_accrued == pytest.approx(12.0)
    assert first.ending_balance == pytest.approx(1212.0)


def test_history_only_counts_recorded_repayments():
    receivable = make_receivable(repayments=[{"date": "2026-01", "amount": 50.0}])
    positions = run(receivable, 2, project_expected=False)
    assert [p.repayment for p in positions] == [50.0, 0.0]
