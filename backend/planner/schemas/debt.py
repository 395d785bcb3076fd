from pydantic import BaseModel

from ..models.enums import DebtType, InterestModel
from .year_month import YearMonth


class ReferenceRate(BaseModel):
    year_month: YearMonth
    rate: float  # annual percent

    class Config:
        from_attributes = True


class ExtraPaymentInput(BaseModel):
    date: YearMonth
    amount: float


class ExtraPayment(ExtraPaymentInput):
    id: int | None = None

    class Config:
        from_attributes = True


class DebtBase(BaseModel):
    name: str
    currency: str = "EUR"
    debt_type: DebtType
    initial_principal: float
    start_date: YearMonth

    # Amortized
    interest_model_type: InterestModel = InterestModel.NONE
    fixed_interest_rate: float | None = None
    reference_rate_margin: float | None = None
    monthly_payment: float | None = None

    # Fixed installment
    installment_amount: float | None = None
    total_installments: int | None = None


class DebtCreate(DebtBase):
    pass


class DebtUpdate(BaseModel):
    name: str | None = None
    currency: str | None = None
    debt_type: DebtType | None = None
    initial_principal: float | None = None
    start_date: YearMonth | None = None
    interest_model_type: InterestModel | None = None
    fixed_interest_rate: float | None = None
    reference_rate_margin: float | None = None
    monthly_payment: float | None = None
    installment_amount: float | None = None
    total_installments: int | None = None


class DebtResponse(DebtBase):
    id: int
    account_id: int
    reference_rates: list[ReferenceRate] = []
    extra_payments: list[ExtraPayment] = []

    class Config:
        from_attributes = True
