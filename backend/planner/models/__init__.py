from .base import Base
from .enums import (
    ItemType,
    Frequency,
    PlannedKind,
    ScheduleKind,
    ItemKind,
    DebtType,
    InterestModel,
    ContributionType,
    Source,
    CUSTOM_HORIZON,
)
from .account import Account
from .recurring_item import RecurringItem
from .planned_item import PlannedItem
from .salary_config import SalaryConfig, SalaryBenefit
from .taxed_income import TaxedIncome
from .debt import Debt, DebtReferenceRate, DebtExtraPayment
from .investment import InvestmentAccount, InvestmentContribution
from .receivable import Receivable, ReceivableRepayment

__all__ = [
    "Base",
    "ItemType",
    "Frequency",
    "PlannedKind",
    "ScheduleKind",
    "ItemKind",
    "DebtType",
    "InterestModel",
    "ContributionType",
    "Source",
    "CUSTOM_HORIZON",
    "Account",
    "RecurringItem",
    "PlannedItem",
    "SalaryConfig",
    "SalaryBenefit",
    "TaxedIncome",
    "Debt",
    "DebtReferenceRate",
    "DebtExtraPayment",
    "InvestmentAccount",
    "InvestmentContribution",
    "Receivable",
    "ReceivableRepayment",
]
