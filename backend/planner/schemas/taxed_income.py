from pydantic import BaseModel

from ..models.enums import Frequency, ScheduleKind
from .year_month import YearMonth


class TaxedIncomeBase(BaseModel):
    name: str
    gross_amount: float
    category: str | None = None
    use_salary_tax_settings: bool = False
    custom_tax_rate: float | None = None
    custom_contributions_rate: float | None = None
    custom_other_deductions: float | None = None
    kind: ScheduleKind = ScheduleKind.ONE_OFF
    scheduled_date: YearMonth | None = None
    frequency: Frequency | None = None
    custom_interval_months: int | None = None
    start_date: YearMonth | None = None
    end_date: YearMonth | None = None
    is_active: bool = True


class TaxedIncomeCreate(TaxedIncomeBase):
    pass


class TaxedIncomeUpdate(BaseModel):
    name: str | None = None
    gross_amount: float | None = None
    category: str | None = None
    use_salary_tax_settings: bool | None = None
    custom_tax_rate: float | None = None
    custom_contributions_rate: float | None = None
    custom_other_deductions: float | None = None
    kind: ScheduleKind | None = None
    scheduled_date: YearMonth | None = None
    frequency: Frequency | None = None
    custom_interval_months: int | None = None
    start_date: YearMonth | None = None
    end_date: YearMonth | None = None
    is_active: bool | None = None


class TaxedIncomeResponse(TaxedIncomeBase):
    id: int
    account_id: int

    class Config:
        from_attributes = True
