from dataclasses import dataclass, field
from typing import Iterable

from ..models.enums import ItemKind, ItemType, PlannedKind, ScheduleKind, Source
from ..schemas import (
    OccurrenceOverride,
    PlannedItemResponse,
    ProjectionLineItem,
    RecurringItemResponse,
    SalaryConfigResponse,
    TaxedIncomeResponse,
    YearMonth,
)
from .recurrence import OverrideKey, build_override_map, is_scheduled, occurs_in, split_overrides
from .salary_calculator import (
    SALARY_CATEGORY,
    calculate_net_amount,
    emits_salary_income,
    net_salary_for,
    resolve_tax_settings,
)


@dataclass(frozen=True)
class MonthContext:
    """Cash-flow definitions for one account, prepared once per run."""
    recurring_items: list[RecurringItemResponse] = field(default_factory=list)
    planned_items: list[PlannedItemResponse] = field(default_factory=list)
    overrides: dict[OverrideKey, OccurrenceOverride] = field(default_factory=dict)
    salary_configs: list[SalaryConfigResponse] = field(default_factory=list)
    taxed_incomes: list[TaxedIncomeResponse] = field(default_factory=list)

    @classmethod
    def build(
        cls,
        recurring_items: Iterable[RecurringItemResponse] = (),
        planned_items: Iterable[PlannedItemResponse] = (),
        salary_configs: Iterable[SalaryConfigResponse] = (),
        taxed_incomes: Iterable[TaxedIncomeResponse] = (),
        overrides: Iterable[OccurrenceOverride] = (),
    ) -> "MonthContext":
        regular, override_map = split_overrides(planned_items)
        override_map.update(build_override_map(overrides))
        return cls(
            recurring_items=list(recurring_items),
            planned_items=regular,
            overrides=override_map,
            salary_configs=list(salary_configs),
            taxed_incomes=list(taxed_incomes),
        )


@dataclass(frozen=True)
class MonthBreakdown:
    income: list[ProjectionLineItem]
    expenses: list[ProjectionLineItem]

    @property
    def total_income(self) -> float:
        return sum(item.amount for item in self.income)

    @property
    def total_expenses(self) -> float:
        return sum(item.amount for item in self.expenses)

    @property
    def net_change(self) -> float:
        return self.total_income - self.total_expenses


def _recurring_lines(month: YearMonth, context: MonthContext) -> list[tuple[ItemType, ProjectionLineItem]]:
    lines = []
    for item in context.recurring_items:
        occurrence = occurs_in(item, month, context.overrides)
        if occurrence is None:
            continue
        lines.append((item.type, ProjectionLineItem(
            item_id=item.id,
            name=occurrence.name,
            amount=occurrence.amount,
            category=occurrence.category,
            source=Source.RECURRING,
            kind=ItemKind.RECURRING,
            is_overridden=occurrence.is_overridden,
        )))
    return lines


def _planned_lines(month: YearMonth, context: MonthContext) -> list[tuple[ItemType, ProjectionLineItem]]:
    one_offs = []
    repeating = []
    for item in context.planned_items:
        occurrence = occurs_in(item, month)
        if occurrence is None:
            continue
        if item.kind == PlannedKind.ONE_OFF:
            source, kind, bucket = Source.PLANNED_ONE_OFF, ItemKind.ONE_OFF, one_offs
        else:
            source, kind, bucket = Source.PLANNED_REPEATING, ItemKind.REPEATING, repeating
        bucket.append((item.type, ProjectionLineItem(
            item_id=item.id,
            name=occurrence.name,
            amount=occurrence.amount,
            category=occurrence.category,
            source=source,
            kind=kind,
        )))
    return one_offs + repeating


def _salary_lines(month: YearMonth, context: MonthContext) -> list[ProjectionLineItem]:
    lines = []
    for config in context.salary_configs:
        if not emits_salary_income(config) or not is_scheduled(config, month):
            continue
        lines.append(ProjectionLineItem(
            item_id=config.id,
            name=config.name,
            amount=net_salary_for(config),
            category=SALARY_CATEGORY,
            source=Source.SALARY,
            kind=ItemKind.RECURRING,
        ))
    return lines


def _taxed_income_lines(month: YearMonth, context: MonthContext) -> list[ProjectionLineItem]:
    lines = []
    for income in context.taxed_incomes:
        if not is_scheduled(income, month):
            continue
        settings = resolve_tax_settings(income, context.salary_configs)
        lines.append(ProjectionLineItem(
            item_id=income.id,
            name=income.name,
            amount=calculate_net_amount(income.gross_amount, settings),
            category=income.category,
            source=Source.TAXED_INCOME,
            kind=ItemKind.ONE_OFF if income.kind == ScheduleKind.ONE_OFF else ItemKind.RECURRING,
        ))
    return lines


def aggregate_month(
    month: YearMonth,
    context: MonthContext,
    debt_lines: Iterable[ProjectionLineItem] = (),
) -> MonthBreakdown:
    """
    Collect every income and expense line item for one month.

    Income: recurring, planned (one-off then repeating), salaries, taxed
    incomes. Expenses: recurring, planned, then debt payments.
    """
    income: list[ProjectionLineItem] = []
    expenses: list[ProjectionLineItem] = []

    for item_type, line in _recurring_lines(month, context) + _planned_lines(month, context):
        if item_type == ItemType.INCOME:
            income.append(line)
        else:
            expenses.append(line)

    income.extend(_salary_lines(month, context))
    income.extend(_taxed_income_lines(month, context))
    expenses.extend(debt_lines)

    return MonthBreakdown(income=income, expenses=expenses)
