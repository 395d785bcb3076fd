from pydantic import BaseModel

from ..models.enums import ContributionType, Frequency, ScheduleKind
from .year_month import YearMonth


class ContributionBase(BaseModel):
    type: ContributionType = ContributionType.CONTRIBUTION
    kind: ScheduleKind = ScheduleKind.ONE_OFF
    name: str | None = None
    amount: float
    scheduled_date: YearMonth | None = None
    frequency: Frequency | None = None
    custom_interval_months: int | None = None
    start_date: YearMonth | None = None
    end_date: YearMonth | None = None
    is_active: bool = True


class ContributionCreate(ContributionBase):
    pass


class ContributionResponse(ContributionBase):
    id: int

    class Config:
        from_attributes = True


class InvestmentBase(BaseModel):
    name: str
    currency: str = "EUR"
    starting_valuation: float
    valuation_date: YearMonth
    annual_growth_rate: float = 0.0  # percent, may be negative


class InvestmentCreate(InvestmentBase):
    pass


class InvestmentUpdate(BaseModel):
    name: str | None = None
    currency: str | None = None
    starting_valuation: float | None = None
    valuation_date: YearMonth | None = None
    annual_growth_rate: float | None = None


class InvestmentResponse(InvestmentBase):
    id: int
    account_id: int
    contributions: list[ContributionResponse] = []

    class Config:
        from_attributes = True
