"""
Debt amortization, one month at a time.

The carried state is a frozen DebtState; advance_debt returns the next
state together with the month's DebtPosition so the projection driver can
fold over months without any shared mutable state.
"""

import logging
import math
from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Iterable

from ..models.enums import DebtType, InterestModel, ItemKind, Source
from ..schemas import DebtPosition, DebtResponse, ProjectionLineItem, ReferenceRate, YearMonth

logger = logging.getLogger(__name__)

DEBT_CATEGORY = "Debt Payment"

# Residual principal below this is float noise, not money owed
_PAID_OFF_EPSILON = 1e-9


@dataclass(frozen=True, slots=True)
class DebtState:
    remaining_principal: float
    installments_left: int | None = None  # fixed-installment debts only


class ReferenceRateTable:
    """Sparse month -> rate table answering "latest rate on or before month"."""

    def __init__(self, rates: Iterable[ReferenceRate] = ()):
        by_month = {r.year_month: r.rate for r in rates}
        self._months = sorted(by_month)
        self._rates = [by_month[m] for m in self._months]

    def rate_for(self, month: YearMonth) -> float:
        """Rate set for month, else the most recent earlier rate, else 0."""
        i = bisect_right(self._months, month)
        return self._rates[i - 1] if i else 0.0


@dataclass(frozen=True)
class DebtSchedule:
    """A debt plus its lookups, prepared once per projection run."""
    debt: DebtResponse
    rates: ReferenceRateTable
    extra_payments: dict[YearMonth, float] = field(default_factory=dict)

    @classmethod
    def from_debt(cls, debt: DebtResponse) -> "DebtSchedule":
        extras: dict[YearMonth, float] = {}
        for payment in debt.extra_payments:
            extras[payment.date] = extras.get(payment.date, 0.0) + payment.amount
        return cls(debt=debt, rates=ReferenceRateTable(debt.reference_rates), extra_payments=extras)


def initial_debt_state(debt: DebtResponse) -> DebtState:
    if debt.debt_type == DebtType.FIXED_INSTALLMENT:
        return DebtState(debt.initial_principal, debt.total_installments or 0)
    return DebtState(debt.initial_principal)


def effective_annual_rate(debt: DebtResponse, rates: ReferenceRateTable, month: YearMonth) -> float:
    """Annual percentage rate in effect for month."""
    if debt.interest_model_type == InterestModel.FIXED:
        return debt.fixed_interest_rate or 0.0
    if debt.interest_model_type == InterestModel.VARIABLE:
        return rates.rate_for(month) + (debt.reference_rate_margin or 0.0)
    return 0.0


def is_terminal(debt: DebtResponse, state: DebtState) -> bool:
    if state.remaining_principal <= 0:
        return True
    return debt.debt_type == DebtType.FIXED_INSTALLMENT and (state.installments_left or 0) <= 0


def _idle_position(debt: DebtResponse, state: DebtState) -> DebtPosition:
    return DebtPosition(
        debt_id=debt.id,
        name=debt.name,
        starting_principal=state.remaining_principal,
        ending_principal=state.remaining_principal,
        installments_left=state.installments_left,
        is_paid_off=state.remaining_principal <= 0,
    )


def _amortized_step(
    schedule: DebtSchedule, state: DebtState, month: YearMonth
) -> tuple[DebtState, DebtPosition]:
    debt = schedule.debt
    principal = state.remaining_principal
    annual_rate = effective_annual_rate(debt, schedule.rates, month)
    interest = principal * (annual_rate / 100 / 12)
    payment = debt.monthly_payment or 0.0

    negative_amortization = payment <= interest
    if negative_amortization:
        scheduled = 0.0
        logger.warning(
            "Debt %s (%s): payment %.2f does not cover interest %.2f in %s",
            debt.id, debt.name, payment, interest, month,
        )
    else:
        scheduled = min(payment - interest, principal)

    after_scheduled = principal - scheduled
    extra = min(schedule.extra_payments.get(month, 0.0), after_scheduled)
    ending = after_scheduled - extra
    if ending < _PAID_OFF_EPSILON:
        ending = 0.0

    position = DebtPosition(
        debt_id=debt.id,
        name=debt.name,
        starting_principal=principal,
        ending_principal=ending,
        interest_rate=annual_rate,
        interest=interest,
        principal_paid=scheduled,
        extra_payment=extra,
        payment=interest + scheduled,
        negative_amortization=negative_amortization,
        is_paid_off=ending <= 0,
    )
    return DebtState(ending), position


def _installment_step(
    schedule: DebtSchedule, state: DebtState, month: YearMonth
) -> tuple[DebtState, DebtPosition]:
    debt = schedule.debt
    principal = state.remaining_principal
    installment_amount = debt.installment_amount or 0.0

    installment = min(installment_amount, principal)
    after_installment = principal - installment
    installments_left = (state.installments_left or 0) - 1

    extra = min(schedule.extra_payments.get(month, 0.0), after_installment)
    ending = after_installment - extra
    if ending < _PAID_OFF_EPSILON:
        ending = 0.0
        installments_left = 0
    elif extra > 0:
        # Extra payments that cover future installments shorten the schedule
        installments_left = min(installments_left, math.ceil(ending / installment_amount))

    position = DebtPosition(
        debt_id=debt.id,
        name=debt.name,
        starting_principal=principal,
        ending_principal=ending,
        principal_paid=installment,
        extra_payment=extra,
        payment=installment,
        installments_left=installments_left,
        is_paid_off=ending <= 0,
    )
    return DebtState(ending, installments_left), position


def advance_debt(
    schedule: DebtSchedule, state: DebtState, month: YearMonth
) -> tuple[DebtState, DebtPosition]:
    """
    Apply one month to a debt.

    Before start_date, and once paid off or out of installments, the state
    is returned unchanged with an idle position (no payment).
    """
    debt = schedule.debt
    if month < debt.start_date or is_terminal(debt, state):
        return state, _idle_position(debt, state)

    if debt.debt_type == DebtType.AMORTIZED:
        return _amortized_step(schedule, state, month)
    return _installment_step(schedule, state, month)


def debt_line_items(debt: DebtResponse, position: DebtPosition) -> list[ProjectionLineItem]:
    """Expense lines for a month: the regular payment and any extra payment."""
    lines = []
    if position.payment > 0:
        lines.append(ProjectionLineItem(
            item_id=debt.id,
            name=debt.name,
            amount=position.payment,
            category=DEBT_CATEGORY,
            source=Source.DEBT_PAYMENT,
            kind=ItemKind.RECURRING,
        ))
    if position.extra_payment > 0:
        lines.append(ProjectionLineItem(
            item_id=debt.id,
            name=f"{debt.name} (extra payment)",
            amount=position.extra_payment,
            category=DEBT_CATEGORY,
            source=Source.DEBT_EXTRA_PAYMENT,
            kind=ItemKind.ONE_OFF,
        ))
    return lines
