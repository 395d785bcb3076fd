"""
Projection driver: folds an account's definitions forward month by month.

calculate_projection is pure. It validates its inputs, then threads a
ProjectionState (running balance plus every debt, investment and
receivable state) through the account's months, emitting one
MonthlyProjection per month. Identical inputs give identical output.
"""

import logging
from dataclasses import dataclass, replace
from typing import Iterable

from ..models.enums import CUSTOM_HORIZON, ItemType
from ..schemas import (
    AccountResponse,
    DebtPosition,
    DebtResponse,
    InvestmentPosition,
    InvestmentResponse,
    MonthlyProjection,
    NetWorthMonth,
    OccurrenceOverride,
    PlannedItemResponse,
    ProjectionFilters,
    ProjectionLineItem,
    ReceivablePosition,
    ReceivableResponse,
    RecurringItemResponse,
    SalaryConfigResponse,
    TaxedIncomeResponse,
    YearMonth,
    YearlyRollup,
)
from ..schemas.year_month import month_range, months_between
from .debt_amortizer import (
    DebtSchedule,
    DebtState,
    advance_debt,
    debt_line_items,
    initial_debt_state,
)
from .investment_grower import InvestmentState, advance_investment, initial_investment_state
from .month_aggregator import MonthContext, aggregate_month
from .receivable_tracker import (
    ReceivableSchedule,
    ReceivableState,
    advance_receivable,
    initial_receivable_state,
)
from .validation import MAX_HORIZON_MONTHS, validate_projection_inputs

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProjectionState:
    """Everything carried from one month to the next."""
    balance: float
    debts: tuple[DebtState, ...] = ()
    investments: tuple[InvestmentState, ...] = ()
    receivables: tuple[ReceivableState, ...] = ()


@dataclass(frozen=True)
class _Entities:
    debts: tuple[DebtSchedule, ...]
    investments: tuple[InvestmentResponse, ...]
    receivables: tuple[ReceivableSchedule, ...]


@dataclass(frozen=True)
class _MonthStep:
    state: ProjectionState
    debts: list[DebtPosition]
    investments: list[InvestmentPosition]
    receivables: list[ReceivablePosition]


def horizon_months(account: AccountResponse) -> int:
    """Number of projected months for an account."""
    if account.planning_horizon_months == CUSTOM_HORIZON and account.custom_end_date is not None:
        return months_between(account.starting_date, account.custom_end_date) + 1
    return account.planning_horizon_months


def generate_month_list(account: AccountResponse) -> list[YearMonth]:
    """Every month of the account's horizon, starting at starting_date."""
    return [account.starting_date.add_months(k) for k in range(horizon_months(account))]


def _advance_entities(
    entities: _Entities,
    state: ProjectionState,
    month: YearMonth,
    project_expected: bool = True,
) -> _MonthStep:
    debt_states, debt_positions = [], []
    for schedule, debt_state in zip(entities.debts, state.debts):
        next_state, position = advance_debt(schedule, debt_state, month)
        debt_states.append(next_state)
        debt_positions.append(position)

    investment_states, investment_positions = [], []
    for investment, investment_state in zip(entities.investments, state.investments):
        next_state, position = advance_investment(investment, investment_state, month)
        investment_states.append(next_state)
        investment_positions.append(position)

    receivable_states, receivable_positions = [], []
    for schedule, receivable_state in zip(entities.receivables, state.receivables):
        next_state, position = advance_receivable(schedule, receivable_state, month, project_expected)
        receivable_states.append(next_state)
        receivable_positions.append(position)

    next_state = replace(
        state,
        debts=tuple(debt_states),
        investments=tuple(investment_states),
        receivables=tuple(receivable_states),
    )
    return _MonthStep(next_state, debt_positions, investment_positions, receivable_positions)


def _earliest_entity_start(entities: _Entities) -> YearMonth | None:
    starts = [s.debt.start_date for s in entities.debts]
    starts += [i.valuation_date for i in entities.investments]
    starts += [s.receivable.start_date for s in entities.receivables]
    return min(starts) if starts else None


def initial_state(account: AccountResponse, entities: _Entities) -> ProjectionState:
    """
    State at the start of the account's first month.

    Entities that began before the projection are fast-forwarded from their
    own start so the first month sees their current principal/valuation.
    History emits no line items and only recorded receivable repayments
    count.
    """
    state = ProjectionState(
        balance=account.starting_balance,
        debts=tuple(initial_debt_state(s.debt) for s in entities.debts),
        investments=tuple(initial_investment_state(i) for i in entities.investments),
        receivables=tuple(initial_receivable_state(s.receivable) for s in entities.receivables),
    )
    earliest = _earliest_entity_start(entities)
    if earliest is None or earliest >= account.starting_date:
        return state

    for month in month_range(earliest, account.starting_date.add_months(-1)):
        state = _advance_entities(entities, state, month, project_expected=False).state
    return state


def _keep_line(line: ProjectionLineItem, filters: ProjectionFilters) -> bool:
    if filters.categories and line.category and line.category not in filters.categories:
        return False
    if filters.item_kinds and line.kind not in filters.item_kinds:
        return False
    return True


def apply_filters(
    projections: list[MonthlyProjection], filters: ProjectionFilters | None
) -> list[MonthlyProjection]:
    """
    Restrict output to a date window and/or breakdown subset.

    Balances and totals are left as computed from the full model.
    """
    if filters is None:
        return projections

    result = []
    for projection in projections:
        if filters.start_date and projection.year_month < filters.start_date:
            continue
        if filters.end_date and projection.year_month > filters.end_date:
            break

        income = [line for line in projection.income_breakdown if _keep_line(line, filters)]
        expenses = [line for line in projection.expense_breakdown if _keep_line(line, filters)]
        if filters.item_types:
            if ItemType.INCOME not in filters.item_types:
                income = []
            if ItemType.EXPENSE not in filters.item_types:
                expenses = []

        result.append(projection.model_copy(update={
            "income_breakdown": income,
            "expense_breakdown": expenses,
        }))
    return result


def calculate_projection(
    account: AccountResponse,
    recurring_items: Iterable[RecurringItemResponse],
    planned_items: Iterable[PlannedItemResponse],
    filters: ProjectionFilters | None = None,
    *,
    salary_configs: Iterable[SalaryConfigResponse] = (),
    taxed_incomes: Iterable[TaxedIncomeResponse] = (),
    debts: Iterable[DebtResponse] = (),
    investments: Iterable[InvestmentResponse] = (),
    receivables: Iterable[ReceivableResponse] = (),
    overrides: Iterable[OccurrenceOverride] = (),
    current_month: YearMonth | None = None,
    max_horizon: int = MAX_HORIZON_MONTHS,
) -> list[MonthlyProjection]:
    """
    Project an account month by month over its planning horizon.

    Raises ValidationError before any math if an input is malformed.
    current_month only flags the matching record for display.
    """
    recurring_items = list(recurring_items)
    planned_items = list(planned_items)
    salary_configs = list(salary_configs)
    taxed_incomes = list(taxed_incomes)
    debts = list(debts)
    investments = list(investments)
    receivables = list(receivables)
    overrides = list(overrides)

    validate_projection_inputs(
        account, recurring_items, planned_items, salary_configs, taxed_incomes,
        debts, investments, receivables, overrides, max_horizon,
    )

    context = MonthContext.build(
        recurring_items, planned_items, salary_configs, taxed_incomes, overrides,
    )
    entities = _Entities(
        debts=tuple(DebtSchedule.from_debt(d) for d in debts),
        investments=tuple(investments),
        receivables=tuple(ReceivableSchedule.from_receivable(r) for r in receivables),
    )
    months = generate_month_list(account)
    logger.debug(
        "Projecting account %s over %d months from %s (%d recurring, %d planned, %d debts)",
        account.id, len(months), account.starting_date,
        len(recurring_items), len(planned_items), len(debts),
    )

    state = initial_state(account, entities)
    projections = []

    for month in months:
        step = _advance_entities(entities, state, month)
        debt_lines = []
        for schedule, position in zip(entities.debts, step.debts):
            debt_lines.extend(debt_line_items(schedule.debt, position))

        breakdown = aggregate_month(month, context, debt_lines)
        starting_balance = state.balance
        ending_balance = starting_balance + breakdown.net_change

        projections.append(MonthlyProjection(
            year_month=month,
            year=month.year,
            month=month.month,
            starting_balance=starting_balance,
            ending_balance=ending_balance,
            total_income=breakdown.total_income,
            total_expenses=breakdown.total_expenses,
            net_change=breakdown.net_change,
            income_breakdown=breakdown.income,
            expense_breakdown=breakdown.expenses,
            debts=step.debts,
            investments=step.investments,
            receivables=step.receivables,
            is_current_month=month == current_month,
        ))
        state = replace(step.state, balance=ending_balance)

    return apply_filters(projections, filters)


def calculate_yearly_rollups(monthly: Iterable[MonthlyProjection]) -> list[YearlyRollup]:
    """Group monthly projections into calendar years, in order."""
    by_year: dict[int, list[MonthlyProjection]] = {}
    for projection in monthly:
        by_year.setdefault(projection.year, []).append(projection)

    rollups = []
    for year in sorted(by_year):
        months = sorted(by_year[year], key=lambda p: p.month)
        total_income = sum(m.total_income for m in months)
        total_expenses = sum(m.total_expenses for m in months)
        rollups.append(YearlyRollup(
            year=year,
            total_income=total_income,
            total_expenses=total_expenses,
            net_change=total_income - total_expenses,
            starting_balance=months[0].starting_balance,
            ending_balance=months[-1].ending_balance,
            month_count=len(months),
        ))
    return rollups


def calculate_net_worth(monthly: Iterable[MonthlyProjection]) -> list[NetWorthMonth]:
    """Cash + investments + receivables - debts at the end of each month."""
    result = []
    for projection in monthly:
        investments = sum(p.ending_valuation for p in projection.investments)
        receivables = sum(p.ending_balance for p in projection.receivables)
        debts = sum(p.ending_principal for p in projection.debts)
        result.append(NetWorthMonth(
            year_month=projection.year_month,
            cash=projection.ending_balance,
            investments=investments,
            receivables=receivables,
            debts=debts,
            net_worth=projection.ending_balance + investments + receivables - debts,
        ))
    return result


def unique_categories(
    recurring_items: Iterable[RecurringItemResponse],
    planned_items: Iterable[PlannedItemResponse],
) -> list[str]:
    """Sorted distinct categories, for filter choices."""
    categories = {item.category for item in recurring_items if item.category}
    categories |= {item.category for item in planned_items if item.category}
    return sorted(categories)
