import itertools

from planner.models import (
    ContributionType,
    DebtType,
    Frequency,
    InterestModel,
    ItemType,
    PlannedKind,
    ScheduleKind,
)
from planner.schemas import (
    AccountResponse,
    DebtResponse,
    InvestmentResponse,
    OccurrenceOverride,
    PlannedItemResponse,
    ReceivableResponse,
    RecurringItemResponse,
    SalaryConfigResponse,
    TaxedIncomeResponse,
)
from planner.schemas.investment import ContributionResponse

_ids = itertools.count(1)

ACCOUNT_ID = 1


def make_account(**overrides) -> AccountResponse:
    data = {
        "id": ACCOUNT_ID,
        "name": "Checking",
        "starting_balance": 1000.0,
        "starting_date": "2026-01",
        "planning_horizon_months": 12,
    }
    data.update(overrides)
    return AccountResponse(**data)


def make_recurring(**overrides) -> RecurringItemResponse:
    data = {
        "id": next(_ids),
        "account_id": ACCOUNT_ID,
        "type": ItemType.EXPENSE,
        "name": "Rent",
        "amount": 500.0,
        "category": "Housing",
        "frequency": Frequency.MONTHLY,
        "start_date": "2026-01",
    }
    data.update(overrides)
    return RecurringItemResponse(**data)


def make_one_off(**overrides) -> PlannedItemResponse:
    data = {
        "id": next(_ids),
        "account_id": ACCOUNT_ID,
        "type": ItemType.EXPENSE,
        "kind": PlannedKind.ONE_OFF,
        "name": "Vacation",
        "amount": 1200.0,
        "category": "Travel",
        "scheduled_date": "2026-06",
    }
    data.update(overrides)
    return PlannedItemResponse(**data)


def make_repeating(**overrides) -> PlannedItemResponse:
    data = {
        "id": next(_ids),
        "account_id": ACCOUNT_ID,
        "type": ItemType.EXPENSE,
        "kind": PlannedKind.REPEATING,
        "name": "Insurance",
        "amount": 300.0,
        "category": "Insurance",
        "frequency": Frequency.QUARTERLY,
        "first_occurrence": "2026-02",
    }
    data.update(overrides)
    return PlannedItemResponse(**data)


def make_override(item: RecurringItemResponse, year_month: str, **overrides) -> OccurrenceOverride:
    return OccurrenceOverride(item_id=item.id, year_month=year_month, **overrides)


def make_salary(**overrides) -> SalaryConfigResponse:
    data = {
        "id": next(_ids),
        "account_id": ACCOUNT_ID,
        "name": "Day job",
        "gross_salary": 3000.0,
        "tax_rate": 20.0,
        "contributions_rate": 10.0,
        "other_deductions": 50.0,
        "start_date": "2026-01",
    }
    data.update(overrides)
    return SalaryConfigResponse(**data)


def make_taxed_income(**overrides) -> TaxedIncomeResponse:
    data = {
        "id": next(_ids),
        "account_id": ACCOUNT_ID,
        "name": "Bonus",
        "gross_amount": 1000.0,
        "category": "Bonus",
        "kind": ScheduleKind.ONE_OFF,
        "scheduled_date": "2026-12",
        "custom_tax_rate": 30.0,
    }
    data.update(overrides)
    return TaxedIncomeResponse(**data)


def make_amortized_debt(**overrides) -> DebtResponse:
    data = {
        "id": next(_ids),
        "account_id": ACCOUNT_ID,
        "name": "Car loan",
        "debt_type": DebtType.AMORTIZED,
        "initial_principal": 1200.0,
        "start_date": "2026-01",
        "interest_model_type": InterestModel.NONE,
        "monthly_payment": 100.0,
    }
    data.update(overrides)
    return DebtResponse(**data)


def make_installment_debt(**overrides) -> DebtResponse:
    data = {
        "id": next(_ids),
        "account_id": ACCOUNT_ID,
        "name": "Phone",
        "debt_type": DebtType.FIXED_INSTALLMENT,
        "initial_principal": 300.0,
        "start_date": "2026-01",
        "installment_amount": 50.0,
        "total_installments": 6,
    }
    data.update(overrides)
    return DebtResponse(**data)


def make_contribution(**overrides) -> ContributionResponse:
    data = {
        "id": next(_ids),
        "type": ContributionType.CONTRIBUTION,
        "kind": ScheduleKind.RECURRING,
        "amount": 100.0,
        "frequency": Frequency.MONTHLY,
        "start_date": "2026-01",
    }
    data.update(overrides)
    return ContributionResponse(**data)


def make_investment(**overrides) -> InvestmentResponse:
    data = {
        "id": next(_ids),
        "account_id": ACCOUNT_ID,
        "name": "Index fund",
        "starting_valuation": 10000.0,
        "valuation_date": "2026-01",
        "annual_growth_rate": 12.0,
    }
    data.update(overrides)
    return InvestmentResponse(**data)


def make_receivable(**overrides) -> ReceivableResponse:
    data = {
        "id": next(_ids),
        "account_id": ACCOUNT_ID,
        "name": "Loan to Sam",
        "initial_principal": 1000.0,
        "start_date": "2026-01",
        "expected_monthly_repayment": 100.0,
    }
    data.update(overrides)
    return ReceivableResponse(**data)
