from pydantic import BaseModel

from .year_month import YearMonth


class SalaryBenefitInput(BaseModel):
    name: str
    amount: float
    is_taxable: bool = False

    class Config:
        from_attributes = True


class SalaryConfigBase(BaseModel):
    name: str
    gross_salary: float
    tax_rate: float = 0.0  # percent
    contributions_rate: float = 0.0  # percent
    other_deductions: float = 0.0
    benefits: list[SalaryBenefitInput] = []
    start_date: YearMonth
    end_date: YearMonth | None = None
    is_active: bool = True
    is_linked_to_recurring: bool = False
    linked_recurring_item_id: int | None = None


class SalaryConfigCreate(SalaryConfigBase):
    pass


class SalaryConfigUpdate(BaseModel):
    name: str | None = None
    gross_salary: float | None = None
    tax_rate: float | None = None
    contributions_rate: float | None = None
    other_deductions: float | None = None
    benefits: list[SalaryBenefitInput] | None = None
    start_date: YearMonth | None = None
    end_date: YearMonth | None = None
    is_active: bool | None = None
    is_linked_to_recurring: bool | None = None
    linked_recurring_item_id: int | None = None


class SalaryConfigResponse(SalaryConfigBase):
    id: int
    account_id: int
    net_salary: float | None = None  # filled in by the API

    class Config:
        from_attributes = True
