from pydantic import BaseModel

from .year_month import YearMonth


class RepaymentInput(BaseModel):
    date: YearMonth
    amount: float


class Repayment(RepaymentInput):
    id: int | None = None

    class Config:
        from_attributes = True


class ReceivableBase(BaseModel):
    name: str
    currency: str = "EUR"
    initial_principal: float
    start_date: YearMonth
    has_interest: bool = False
    annual_interest_rate: float | None = None
    expected_monthly_repayment: float | None = None


class ReceivableCreate(ReceivableBase):
    pass


class ReceivableUpdate(BaseModel):
    name: str | None = None
    currency: str | None = None
    initial_principal: float | None = None
    start_date: YearMonth | None = None
    has_interest: bool | None = None
    annual_interest_rate: float | None = None
    expected_monthly_repayment: float | None = None


class ReceivableResponse(ReceivableBase):
    id: int
    account_id: int
    repayments: list[Repayment] = []

    class Config:
        from_attributes = True
