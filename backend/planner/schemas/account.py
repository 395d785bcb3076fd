from pydantic import BaseModel

from .year_month import YearMonth


class AccountBase(BaseModel):
    """Base account fields."""
    name: str
    currency: str = "EUR"
    starting_balance: float = 0.0
    starting_date: YearMonth
    planning_horizon_months: int = 120  # -1 = use custom_end_date
    custom_end_date: YearMonth | None = None
    is_archived: bool = False
    display_order: int = 0


class AccountCreate(AccountBase):
    """Fields for creating an account."""
    pass


class AccountUpdate(BaseModel):
    """Fields for updating an account (all optional)."""
    name: str | None = None
    currency: str | None = None
    starting_balance: float | None = None
    starting_date: YearMonth | None = None
    planning_horizon_months: int | None = None
    custom_end_date: YearMonth | None = None
    is_archived: bool | None = None
    display_order: int | None = None


class AccountResponse(AccountBase):
    """Account response with all fields."""
    id: int

    class Config:
        from_attributes = True
