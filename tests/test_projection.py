import json

import pytest

from planner.models import CUSTOM_HORIZON, Frequency, ItemKind, ItemType, Source
from planner.schemas import ProjectionFilters, YearMonth
from planner.services.projection_service import (
    calculate_net_worth,
    calculate_projection,
    calculate_yearly_rollups,
    generate_month_list,
    unique_categories,
)
from planner.services.validation import ValidationError
from tests.helpers import (
    make_account,
    make_amortized_debt,
    make_installment_debt,
    make_investment,
    make_one_off,
    make_override,
    make_receivable,
    make_recurring,
    make_repeating,
    make_salary,
    make_taxed_income,
)


@pytest.fixture
def household():
    """A year with a salary, rent, a one-off trip and a car loan."""
    return {
        "account": make_account(starting_balance=1000.0),
        "recurring_items": [
            make_recurring(name="Rent", amount=900.0),
            make_recurring(type=ItemType.INCOME, name="Side gig", amount=200.0, category="Freelance"),
        ],
        "planned_items": [make_one_off(name="Trip", amount=1200.0, scheduled_date="2026-06")],
        "salary_configs": [make_salary()],
        "debts": [make_amortized_debt(initial_principal=600.0, monthly_payment=100.0)],
    }


def project(data, filters=None, **kwargs):
    extra = {k: v for k, v in data.items() if k not in ("account", "recurring_items", "planned_items")}
    extra.update(kwargs)
    return calculate_projection(
        data["account"], data["recurring_items"], data["planned_items"], filters, **extra
    )


def test_one_record_per_month_of_horizon(household):
    result = project(household)
    assert [str(m.year_month) for m in result] == [f"2026-{m:02d}" for m in range(1, 13)]


def test_balances_chain_month_to_month(household):
    result = project(household)
    assert result[0].starting_balance == 1000.0
    for previous, current in zip(result, result[1:]):
        assert current.starting_balance == previous.ending_balance


def test_totals_equal_breakdown_sums(household):
    for month in project(household):
        assert month.total_income == pytest.approx(sum(i.amount for i in month.income_breakdown))
        assert month.total_expenses == pytest.approx(sum(e.amount for e in month.expense_breakdown))
        assert month.ending_balance == pytest.approx(
            month.starting_balance + month.total_income - month.total_expenses
        )


def test_month_contents(household):
    result = project(household)
    january = result[0]

    # Salary 2050 + side gig 200; rent 900 + loan 100
    assert january.total_income == pytest.approx(2250.0)
    assert january.total_expenses == pytest.approx(1000.0)
    assert {line.source for line in january.income_breakdown} == {Source.RECURRING, Source.SALARY}
    assert january.expense_breakdown[-1].source == Source.DEBT_PAYMENT

    june = result[5]
    assert any(line.name == "Trip" and line.kind == ItemKind.ONE_OFF for line in june.expense_breakdown)
    # Loan of 600 is paid off after six payments
    july = result[6]
    assert all(line.source != Source.DEBT_PAYMENT for line in july.expense_breakdown)
    assert july.debts[0].is_paid_off


def test_projection_is_deterministic(household):
    first = json.dumps([m.model_dump(mode="json") for m in project(household)])
    second = json.dumps([m.model_dump(mode="json") for m in project(household)])
    assert first == second


def test_overrides_change_or_skip_single_occurrences():
    rent = make_recurring(name="Rent", amount=900.0)
    account = make_account(starting_balance=0.0, planning_horizon_months=3)
    overrides = [
        make_override(rent, "2026-02", amount=1000.0),
        make_override(rent, "2026-03", skip_occurrence=True),
    ]

    result = calculate_projection(account, [rent], [], overrides=overrides)
    assert [m.total_expenses for m in result] == [900.0, 1000.0, 0.0]
    assert result[1].expense_breakdown[0].is_overridden
    assert result[1].expense_breakdown[0].name == "Rent"


def test_override_rows_in_planned_items_are_applied():
    rent = make_recurring(name="Rent", amount=900.0)
    override_row = make_one_off(
        name=None, amount=850.0, category=None, scheduled_date="2026-01",
        is_recurring_override=True, linked_recurring_item_id=rent.id,
    )
    account = make_account(starting_balance=0.0, planning_horizon_months=2)

    result = calculate_projection(account, [rent], [override_row])
    assert [m.total_expenses for m in result] == [850.0, 900.0]
    # The override row itself is not a line item
    assert len(result[0].expense_breakdown) == 1


def test_repeating_planned_items():
    account = make_account(planning_horizon_months=12)
    insurance = make_repeating(amount=300.0, first_occurrence="2026-02")
    result = calculate_projection(account, [], [insurance])
    charged = [str(m.year_month) for m in result if m.total_expenses]
    assert charged == ["2026-02", "2026-05", "2026-08", "2026-11"]


def test_custom_end_date_sets_horizon():
    account = make_account(planning_horizon_months=CUSTOM_HORIZON, custom_end_date="2027-06")
    months = generate_month_list(account)
    assert len(months) == 18
    assert months[-1] == YearMonth(2027, 6)
    assert len(calculate_projection(account, [], [])) == 18


def test_current_month_is_flagged():
    account = make_account(planning_horizon_months=3)
    result = calculate_projection(account, [], [], current_month=YearMonth(2026, 2))
    assert [m.is_current_month for m in result] == [False, True, False]


def test_filters_prune_output_without_touching_balances(household):
    full = project(household)
    filters = ProjectionFilters(
        start_date="2026-03", end_date="2026-06", categories=["Travel"],
    )
    filtered = project(household, filters)

    assert [str(m.year_month) for m in filtered] == ["2026-03", "2026-04", "2026-05", "2026-06"]
    for month in filtered:
        original = full[month.month - 1]
        assert month.ending_balance == original.ending_balance
        assert month.total_expenses == original.total_expenses
        assert all(line.category in ("Travel", None) for line in month.expense_breakdown)
    assert [line.name for line in filtered[-1].expense_breakdown] == ["Trip"]


def test_item_type_filter_drops_a_whole_breakdown(household):
    filtered = project(household, ProjectionFilters(item_types=[ItemType.INCOME]))
    assert all(m.expense_breakdown == [] for m in filtered)
    assert all(m.income_breakdown for m in filtered)


def test_linked_salary_is_carried_by_its_recurring_item():
    paycheck = make_recurring(type=ItemType.INCOME, name="Paycheck", amount=2050.0, category="Salary")
    salary = make_salary(is_linked_to_recurring=True, linked_recurring_item_id=paycheck.id)
    account = make_account(starting_balance=0.0, planning_horizon_months=1)

    result = calculate_projection(account, [paycheck], [], salary_configs=[salary])
    assert result[0].total_income == pytest.approx(2050.0)
    assert [line.source for line in result[0].income_breakdown] == [Source.RECURRING]


def test_taxed_income_lands_net():
    account = make_account(starting_balance=0.0, planning_horizon_months=12)
    bonus = make_taxed_income(gross_amount=1000.0, custom_tax_rate=30.0, scheduled_date="2026-12")
    result = calculate_projection(account, [], [], taxed_incomes=[bonus])
    assert result[-1].total_income == pytest.approx(700.0)
    assert result[-1].income_breakdown[0].source == Source.TAXED_INCOME
    assert result[-1].ending_balance == pytest.approx(700.0)


def test_debt_started_before_projection_is_fast_forwarded():
    account = make_account(starting_date="2026-01", planning_horizon_months=3)
    loan = make_amortized_debt(initial_principal=1200.0, monthly_payment=100.0, start_date="2025-07")
    result = calculate_projection(account, [], [], debts=[loan])

    # Six payments made in 2025 are history, not cash flow
    assert result[0].debts[0].starting_principal == pytest.approx(600.0)
    assert result[0].starting_balance == account.starting_balance


def test_installment_debt_expense_lines():
    account = make_account(planning_horizon_months=8)
    phone = make_installment_debt()
    result = calculate_projection(account, [], [], debts=[phone])
    assert [m.total_expenses for m in result] == [50.0] * 6 + [0.0, 0.0]


def test_net_worth_combines_positions():
    account = make_account(starting_balance=1000.0, planning_horizon_months=1)
    result = calculate_projection(
        account, [], [],
        debts=[make_amortized_debt(initial_principal=1200.0, monthly_payment=100.0)],
        investments=[make_investment(starting_valuation=5000.0, annual_growth_rate=0.0)],
        receivables=[make_receivable(initial_principal=300.0, expected_monthly_repayment=0.0)],
    )
    worth = calculate_net_worth(result)[0]

    assert worth.cash == pytest.approx(900.0)
    assert worth.debts == pytest.approx(1100.0)
    assert worth.investments == pytest.approx(5000.0)
    assert worth.receivables == pytest.approx(300.0)
    assert worth.net_worth == pytest.approx(900.0 + 5000.0 + 300.0 - 1100.0)


def test_yearly_rollups_group_by_calendar_year():
    account = make_account(starting_date="2026-07", starting_balance=0.0, planning_horizon_months=18)
    salary = make_salary(start_date="2026-07")
    monthly = calculate_projection(account, [], [], salary_configs=[salary])
    rollups = calculate_yearly_rollups(monthly)

    assert [r.year for r in rollups] == [2026, 2027]
    assert [r.month_count for r in rollups] == [6, 12]
    assert rollups[0].total_income == pytest.approx(6 * 2050.0)
    assert rollups[0].starting_balance == 0.0
    assert rollups[0].ending_balance == monthly[5].ending_balance
    assert rollups[1].starting_balance == rollups[0].ending_balance
    assert rollups[1].ending_balance == monthly[-1].ending_balance


def test_invalid_inputs_raise_before_projecting():
    account = make_account()
    bad = make_recurring(amount=-5.0)
    with pytest.raises(ValidationError) as excinfo:
        calculate_projection(account, [bad], [])
    assert any("amount must be positive" in e for e in excinfo.value.errors)


def test_negative_override_amount_is_rejected():
    rent = make_recurring(name="Rent", amount=900.0)
    account = make_account(planning_horizon_months=3)
    with pytest.raises(ValidationError) as excinfo:
        calculate_projection(
            account, [rent], [], overrides=[make_override(rent, "2026-02", amount=-500.0)]
        )
    assert any("override amount must be positive" in e for e in excinfo.value.errors)


def test_end_before_start_is_rejected():
    account = make_account()
    with pytest.raises(ValidationError) as excinfo:
        calculate_projection(
            account,
            [make_recurring(start_date="2026-06", end_date="2026-03")],
            [make_repeating(first_occurrence="2026-06", end_date="2026-01")],
            salary_configs=[make_salary(start_date="2026-06", end_date="2026-05")],
        )
    errors = excinfo.value.errors
    assert len([e for e in errors if "is before start date" in e]) == 3


def test_custom_interval_below_one_month_is_rejected():
    account = make_account()
    item = make_recurring(frequency=Frequency.CUSTOM, custom_interval_months=0)
    with pytest.raises(ValidationError) as excinfo:
        calculate_projection(account, [item], [])
    assert any("custom interval must be at least 1 month" in e for e in excinfo.value.errors)


def test_horizon_over_limit_is_rejected():
    with pytest.raises(ValidationError):
        calculate_projection(make_account(planning_horizon_months=601), [], [])


def test_unique_categories():
    categories = unique_categories(
        [make_recurring(category="Housing"), make_recurring(category=None)],
        [make_one_off(category="Travel"), make_one_off(category="Housing")],
    )
    assert categories == ["Housing", "Travel"]
