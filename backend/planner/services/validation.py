"""
Range checks run before any projection math.

Each validate_* function returns a list of problems for one entity so the
API can report them per request; validate_projection_inputs collects all of
them and raises a single ValidationError.
"""

from typing import Iterable

from ..models.enums import (
    CUSTOM_HORIZON,
    DebtType,
    Frequency,
    InterestModel,
    PlannedKind,
    ScheduleKind,
)
from ..schemas import (
    AccountResponse,
    DebtResponse,
    InvestmentResponse,
    OccurrenceOverride,
    PlannedItemResponse,
    ReceivableResponse,
    RecurringItemResponse,
    SalaryConfigResponse,
    TaxedIncomeResponse,
    YearMonth,
)
from ..schemas.investment import ContributionBase
from ..schemas.year_month import months_between

MAX_HORIZON_MONTHS = 600


class ValidationError(ValueError):
    """Malformed entity definition. Carries every problem found."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "Invalid input")


def _check_schedule(
    label: str,
    errors: list[str],
    frequency: Frequency | None,
    custom_interval_months: int | None,
    start: YearMonth | None,
    end: YearMonth | None,
) -> None:
    if start is None:
        errors.append(f"{label}: start date is required")
    if frequency is None:
        errors.append(f"{label}: frequency is required")
    elif frequency == Frequency.CUSTOM:
        if custom_interval_months is None or custom_interval_months < 1:
            errors.append(f"{label}: custom interval must be at least 1 month")
    if start is not None and end is not None and end < start:
        errors.append(f"{label}: end date {end} is before start date {start}")


def _check_rate(label: str, errors: list[str], name: str, value: float | None) -> None:
    if value is not None and not 0 <= value <= 100:
        errors.append(f"{label}: {name} must be between 0 and 100")


def validate_account(account: AccountResponse, max_horizon: int = MAX_HORIZON_MONTHS) -> list[str]:
    label = f"Account {account.id} ({account.name})"
    errors = []
    if account.planning_horizon_months == CUSTOM_HORIZON:
        if account.custom_end_date is None:
            errors.append(f"{label}: custom end date is required")
        else:
            months = months_between(account.starting_date, account.custom_end_date) + 1
            if months < 1:
                errors.append(f"{label}: custom end date is before starting date")
            elif months > max_horizon:
                errors.append(f"{label}: horizon of {months} months exceeds {max_horizon}")
    elif not 1 <= account.planning_horizon_months <= max_horizon:
        errors.append(f"{label}: planning horizon must be between 1 and {max_horizon} months")
    return errors


def validate_recurring_item(item: RecurringItemResponse) -> list[str]:
    label = f"Recurring item {item.id} ({item.name})"
    errors = []
    if not item.name:
        errors.append(f"{label}: name is required")
    if item.amount <= 0:
        errors.append(f"{label}: amount must be positive")
    _check_schedule(label, errors, item.frequency, item.custom_interval_months,
                    item.start_date, item.end_date)
    return errors


def validate_planned_item(item: PlannedItemResponse) -> list[str]:
    label = f"Planned item {item.id} ({item.name})"
    errors = []

    if item.is_recurring_override:
        if item.linked_recurring_item_id is None:
            errors.append(f"{label}: override must reference a recurring item")
        if item.scheduled_date is None:
            errors.append(f"{label}: override month is required")
        if item.amount is not None and item.amount <= 0:
            errors.append(f"{label}: override amount must be positive")
        return errors

    if not item.name:
        errors.append(f"{label}: name is required")
    if item.amount is None or item.amount <= 0:
        errors.append(f"{label}: amount must be positive")

    if item.kind == PlannedKind.ONE_OFF:
        if item.scheduled_date is None:
            errors.append(f"{label}: scheduled date is required for one-off items")
    else:
        _check_schedule(label, errors, item.frequency, item.custom_interval_months,
                        item.first_occurrence, item.end_date)
    return errors


def validate_override(override: OccurrenceOverride) -> list[str]:
    label = f"Override of recurring item {override.item_id} in {override.year_month}"
    if override.amount is not None and override.amount <= 0:
        return [f"{label}: override amount must be positive"]
    return []


def validate_salary_config(config: SalaryConfigResponse) -> list[str]:
    label = f"Salary {config.id} ({config.name})"
    errors = []
    if config.gross_salary < 0:
        errors.append(f"{label}: gross salary cannot be negative")
    _check_rate(label, errors, "tax rate", config.tax_rate)
    _check_rate(label, errors, "contributions rate", config.contributions_rate)
    if config.other_deductions < 0:
        errors.append(f"{label}: other deductions cannot be negative")
    for benefit in config.benefits:
        if benefit.amount < 0:
            errors.append(f"{label}: benefit '{benefit.name}' cannot be negative")
    if config.end_date is not None and config.end_date < config.start_date:
        errors.append(f"{label}: end date {config.end_date} is before start date {config.start_date}")
    return errors


def _check_scheduled_kind(
    label: str,
    errors: list[str],
    kind: ScheduleKind,
    scheduled_date: YearMonth | None,
    frequency: Frequency | None,
    custom_interval_months: int | None,
    start: YearMonth | None,
    end: YearMonth | None,
) -> None:
    if kind == ScheduleKind.ONE_OFF:
        if scheduled_date is None:
            errors.append(f"{label}: scheduled date is required for one-off entries")
    else:
        _check_schedule(label, errors, frequency, custom_interval_months, start, end)


def validate_taxed_income(income: TaxedIncomeResponse) -> list[str]:
    label = f"Taxed income {income.id} ({income.name})"
    errors = []
    if income.gross_amount <= 0:
        errors.append(f"{label}: gross amount must be positive")
    _check_rate(label, errors, "tax rate", income.custom_tax_rate)
    _check_rate(label, errors, "contributions rate", income.custom_contributions_rate)
    if income.custom_other_deductions is not None and income.custom_other_deductions < 0:
        errors.append(f"{label}: other deductions cannot be negative")
    _check_scheduled_kind(label, errors, income.kind, income.scheduled_date, income.frequency,
                          income.custom_interval_months, income.start_date, income.end_date)
    return errors


def validate_debt(debt: DebtResponse) -> list[str]:
    label = f"Debt {debt.id} ({debt.name})"
    errors = []
    if debt.initial_principal <= 0:
        errors.append(f"{label}: initial principal must be positive")

    if debt.debt_type == DebtType.AMORTIZED:
        if debt.monthly_payment is None or debt.monthly_payment <= 0:
            errors.append(f"{label}: monthly payment must be positive")
        if debt.interest_model_type == InterestModel.FIXED:
            if debt.fixed_interest_rate is None or debt.fixed_interest_rate < 0:
                errors.append(f"{label}: fixed interest rate is required and cannot be negative")
    else:
        if debt.installment_amount is None or debt.installment_amount <= 0:
            errors.append(f"{label}: installment amount must be positive")
        if debt.total_installments is None or debt.total_installments < 1:
            errors.append(f"{label}: total installments must be at least 1")

    for payment in debt.extra_payments:
        if payment.amount <= 0:
            errors.append(f"{label}: extra payment in {payment.date} must be positive")
    return errors


def validate_contribution(label: str, contribution: ContributionBase) -> list[str]:
    errors = []
    if contribution.amount <= 0:
        errors.append(f"{label}: contribution amount must be positive")
    _check_scheduled_kind(label, errors, contribution.kind, contribution.scheduled_date,
                          contribution.frequency, contribution.custom_interval_months,
                          contribution.start_date, contribution.end_date)
    return errors


def validate_investment(investment: InvestmentResponse) -> list[str]:
    label = f"Investment {investment.id} ({investment.name})"
    errors = []
    if investment.annual_growth_rate <= -100:
        errors.append(f"{label}: annual growth rate must be above -100%")
    for contribution in investment.contributions:
        errors.extend(validate_contribution(label, contribution))
    return errors


def validate_receivable(receivable: ReceivableResponse) -> list[str]:
    label = f"Receivable {receivable.id} ({receivable.name})"
    errors = []
    if receivable.initial_principal <= 0:
        errors.append(f"{label}: initial principal must be positive")
    if receivable.has_interest:
        if receivable.annual_interest_rate is None or receivable.annual_interest_rate < 0:
            errors.append(f"{label}: interest rate is required and cannot be negative")
    if receivable.expected_monthly_repayment is not None and receivable.expected_monthly_repayment < 0:
        errors.append(f"{label}: expected repayment cannot be negative")
    for repayment in receivable.repayments:
        if repayment.amount <= 0:
            errors.append(f"{label}: repayment in {repayment.date} must be positive")
    return errors


def ensure_valid(errors: list[str]) -> None:
    """Raise ValidationError if any problems were collected."""
    if errors:
        raise ValidationError(errors)


def validate_projection_inputs(
    account: AccountResponse,
    recurring_items: Iterable[RecurringItemResponse] = (),
    planned_items: Iterable[PlannedItemResponse] = (),
    salary_configs: Iterable[SalaryConfigResponse] = (),
    taxed_incomes: Iterable[TaxedIncomeResponse] = (),
    debts: Iterable[DebtResponse] = (),
    investments: Iterable[InvestmentResponse] = (),
    receivables: Iterable[ReceivableResponse] = (),
    overrides: Iterable[OccurrenceOverride] = (),
    max_horizon: int = MAX_HORIZON_MONTHS,
) -> None:
    errors = validate_account(account, max_horizon)
    for item in recurring_items:
        errors.extend(validate_recurring_item(item))
    for planned in planned_items:
        errors.extend(validate_planned_item(planned))
    for config in salary_configs:
        errors.extend(validate_salary_config(config))
    for income in taxed_incomes:
        errors.extend(validate_taxed_income(income))
    for debt in debts:
        errors.extend(validate_debt(debt))
    for investment in investments:
        errors.extend(validate_investment(investment))
    for receivable in receivables:
        errors.extend(validate_receivable(receivable))
    for override in overrides:
        errors.extend(validate_override(override))
    ensure_valid(errors)
