"""
Load everything the projection engine needs for one account.

The engine works on immutable Pydantic records, never on ORM rows, so a
projection run cannot touch the session.
"""

import logging
from dataclasses import dataclass, field

from sqlalchemy.orm import Session, selectinload

from ..models import (
    Account,
    Debt,
    InvestmentAccount,
    PlannedItem,
    Receivable,
    RecurringItem,
    SalaryConfig,
    TaxedIncome,
)
from ..schemas import (
    AccountResponse,
    DebtResponse,
    InvestmentResponse,
    PlannedItemResponse,
    ReceivableResponse,
    RecurringItemResponse,
    SalaryConfigResponse,
    TaxedIncomeResponse,
)

logger = logging.getLogger(__name__)


class AccountNotFound(LookupError):
    pass


@dataclass(frozen=True)
class ProjectionInputs:
    account: AccountResponse
    recurring_items: list[RecurringItemResponse] = field(default_factory=list)
    planned_items: list[PlannedItemResponse] = field(default_factory=list)
    salary_configs: list[SalaryConfigResponse] = field(default_factory=list)
    taxed_incomes: list[TaxedIncomeResponse] = field(default_factory=list)
    debts: list[DebtResponse] = field(default_factory=list)
    investments: list[InvestmentResponse] = field(default_factory=list)
    receivables: list[ReceivableResponse] = field(default_factory=list)

    def engine_kwargs(self) -> dict:
        """Keyword arguments for calculate_projection beyond the positional ones."""
        return {
            "salary_configs": self.salary_configs,
            "taxed_incomes": self.taxed_incomes,
            "debts": self.debts,
            "investments": self.investments,
            "receivables": self.receivables,
        }


def load_projection_inputs(db: Session, account_id: int) -> ProjectionInputs:
    """Read an account and all its cash-flow entities from the open book."""
    account = db.query(Account).filter(Account.id == account_id).first()
    if not account:
        raise AccountNotFound(f"Account {account_id} not found")

    recurring = (
        db.query(RecurringItem)
        .filter(RecurringItem.account_id == account_id)
        .order_by(RecurringItem.id)
        .all()
    )
    planned = (
        db.query(PlannedItem)
        .filter(PlannedItem.account_id == account_id)
        .order_by(PlannedItem.id)
        .all()
    )
    salaries = (
        db.query(SalaryConfig)
        .options(selectinload(SalaryConfig.benefits))
        .filter(SalaryConfig.account_id == account_id)
        .order_by(SalaryConfig.id)
        .all()
    )
    taxed = (
        db.query(TaxedIncome)
        .filter(TaxedIncome.account_id == account_id)
        .order_by(TaxedIncome.id)
        .all()
    )
    debts = (
        db.query(Debt)
        .options(selectinload(Debt.reference_rates), selectinload(Debt.extra_payments))
        .filter(Debt.account_id == account_id)
        .order_by(Debt.id)
        .all()
    )
    investments = (
        db.query(InvestmentAccount)
        .options(selectinload(InvestmentAccount.contributions))
        .filter(InvestmentAccount.account_id == account_id)
        .order_by(InvestmentAccount.id)
        .all()
    )
    receivables = (
        db.query(Receivable)
        .options(selectinload(Receivable.repayments))
        .filter(Receivable.account_id == account_id)
        .order_by(Receivable.id)
        .all()
    )

    inputs = ProjectionInputs(
        account=AccountResponse.model_validate(account),
        recurring_items=[RecurringItemResponse.model_validate(r) for r in recurring],
        planned_items=[PlannedItemResponse.model_validate(p) for p in planned],
        salary_configs=[SalaryConfigResponse.model_validate(s) for s in salaries],
        taxed_incomes=[TaxedIncomeResponse.model_validate(t) for t in taxed],
        debts=[DebtResponse.model_validate(d) for d in debts],
        investments=[InvestmentResponse.model_validate(i) for i in investments],
        receivables=[ReceivableResponse.model_validate(r) for r in receivables],
    )
    logger.debug(
        "Loaded account %s: %d recurring, %d planned, %d salaries, %d debts",
        account_id, len(inputs.recurring_items), len(inputs.planned_items),
        len(inputs.salary_configs), len(inputs.debts),
    )
    return inputs
