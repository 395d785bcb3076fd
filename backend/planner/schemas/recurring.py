from pydantic import BaseModel

from ..models.enums import ItemType, Frequency
from .year_month import YearMonth


class RecurringItemBase(BaseModel):
    type: ItemType
    name: str
    amount: float
    category: str | None = None
    frequency: Frequency = Frequency.MONTHLY
    custom_interval_months: int | None = None
    start_date: YearMonth
    end_date: YearMonth | None = None
    is_active: bool = True


class RecurringItemCreate(RecurringItemBase):
    pass


class RecurringItemUpdate(BaseModel):
    type: ItemType | None = None
    name: str | None = None
    amount: float | None = None
    category: str | None = None
    frequency: Frequency | None = None
    custom_interval_months: int | None = None
    start_date: YearMonth | None = None
    end_date: YearMonth | None = None
    is_active: bool | None = None


class RecurringItemResponse(RecurringItemBase):
    id: int
    account_id: int

    class Config:
        from_attributes = True


class OccurrenceOverrideInput(BaseModel):
    """Replacement values for one month of a recurring item."""
    name: str | None = None
    amount: float | None = None
    category: str | None = None
    skip_occurrence: bool = False


class OccurrenceOverride(OccurrenceOverrideInput):
    """An override as seen by the projection engine."""
    item_id: int
    year_month: YearMonth
