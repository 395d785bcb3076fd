from .year_month import YearMonth
from .account import AccountCreate, AccountUpdate, AccountResponse
from .recurring import (
    RecurringItemCreate,
    RecurringItemUpdate,
    RecurringItemResponse,
    OccurrenceOverrideInput,
    OccurrenceOverride,
)
from .planned import PlannedItemCreate, PlannedItemUpdate, PlannedItemResponse
from .salary import (
    SalaryBenefitInput,
    SalaryConfigCreate,
    SalaryConfigUpdate,
    SalaryConfigResponse,
)
from .taxed_income import TaxedIncomeCreate, TaxedIncomeUpdate, TaxedIncomeResponse
from .debt import (
    ReferenceRate,
    ExtraPaymentInput,
    ExtraPayment,
    DebtCreate,
    DebtUpdate,
    DebtResponse,
)
from .investment import (
    ContributionCreate,
    ContributionResponse,
    InvestmentCreate,
    InvestmentUpdate,
    InvestmentResponse,
)
from .receivable import (
    RepaymentInput,
    Repayment,
    ReceivableCreate,
    ReceivableUpdate,
    ReceivableResponse,
)
from .projection import (
    ProjectionLineItem,
    DebtPosition,
    InvestmentPosition,
    ReceivablePosition,
    MonthlyProjection,
    YearlyRollup,
    NetWorthMonth,
    ProjectionFilters,
)

__all__ = [
    "YearMonth",
    "AccountCreate",
    "AccountUpdate",
    "AccountResponse",
    "RecurringItemCreate",
    "RecurringItemUpdate",
    "RecurringItemResponse",
    "OccurrenceOverrideInput",
    "OccurrenceOverride",
    "PlannedItemCreate",
    "PlannedItemUpdate",
    "PlannedItemResponse",
    "SalaryBenefitInput",
    "SalaryConfigCreate",
    "SalaryConfigUpdate",
    "SalaryConfigResponse",
    "TaxedIncomeCreate",
    "TaxedIncomeUpdate",
    "TaxedIncomeResponse",
    "ReferenceRate",
    "ExtraPaymentInput",
    "ExtraPayment",
    "DebtCreate",
    "DebtUpdate",
    "DebtResponse",
    "ContributionCreate",
    "ContributionResponse",
    "InvestmentCreate",
    "InvestmentUpdate",
    "InvestmentResponse",
    "RepaymentInput",
    "Repayment",
    "ReceivableCreate",
    "ReceivableUpdate",
    "ReceivableResponse",
    "ProjectionLineItem",
    "DebtPosition",
    "InvestmentPosition",
    "ReceivablePosition",
    "MonthlyProjection",
    "YearlyRollup",
    "NetWorthMonth",
    "ProjectionFilters",
]
