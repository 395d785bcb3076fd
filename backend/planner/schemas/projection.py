from __future__ import annotations
from pydantic import BaseModel

from ..models.enums import ItemKind, ItemType, Source
from .year_month import YearMonth


# --- Engine output ---

class ProjectionLineItem(BaseModel):
    """One income or expense entry of a projected month."""
    item_id: int
    name: str
    amount: float
    category: str | None = None
    source: Source
    kind: ItemKind
    is_overridden: bool = False

    class Config:
        frozen = True


class DebtPosition(BaseModel):
    """State of one debt in one month."""
    debt_id: int
    name: str
    starting_principal: float
    ending_principal: float
    interest_rate: float = 0.0  # annual percent in effect this month
    interest: float = 0.0
    principal_paid: float = 0.0  # scheduled portion
    extra_payment: float = 0.0
    payment: float = 0.0  # interest + scheduled principal (or installment)
    installments_left: int | None = None
    negative_amortization: bool = False  # payment did not cover interest
    is_paid_off: bool = False

    class Config:
        frozen = True


class InvestmentPosition(BaseModel):
    investment_id: int
    name: str
    starting_valuation: float
    growth: float = 0.0
    contributions: float = 0.0
    withdrawals: float = 0.0
    ending_valuation: float
    is_negative: bool = False

    class Config:
        frozen = True


class ReceivablePosition(BaseModel):
    receivable_id: int
    name: str
    starting_balance: float
    interest_accrued: float = 0.0
    repayment: float = 0.0
    ending_balance: float
    is_actual_repayment: bool = False

    class Config:
        frozen = True


class MonthlyProjection(BaseModel):
    year_month: YearMonth
    year: int
    month: int
    starting_balance: float
    ending_balance: float
    total_income: float
    total_expenses: float
    net_change: float  # total_income - total_expenses
    income_breakdown: list[ProjectionLineItem] = []
    expense_breakdown: list[ProjectionLineItem] = []
    debts: list[DebtPosition] = []
    investments: list[InvestmentPosition] = []
    receivables: list[ReceivablePosition] = []
    is_current_month: bool = False

    class Config:
        frozen = True


class YearlyRollup(BaseModel):
    year: int
    total_income: float
    total_expenses: float
    net_change: float
    starting_balance: float
    ending_balance: float  # December, or the last projected month of the year
    month_count: int

    class Config:
        frozen = True


class NetWorthMonth(BaseModel):
    year_month: YearMonth
    cash: float
    investments: float
    receivables: float
    debts: float
    net_worth: float  # cash + investments + receivables - debts

    class Config:
        frozen = True


# --- Engine input ---

class ProjectionFilters(BaseModel):
    """Restricts what is returned; never changes the month-by-month math."""
    start_date: YearMonth | None = None
    end_date: YearMonth | None = None
    categories: list[str] = []
    item_types: list[ItemType] = []
    item_kinds: list[ItemKind] = []
