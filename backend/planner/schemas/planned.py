from pydantic import BaseModel

from ..models.enums import ItemType, Frequency, PlannedKind
from .year_month import YearMonth


class PlannedItemBase(BaseModel):
    type: ItemType
    kind: PlannedKind = PlannedKind.ONE_OFF
    # Optional only for override rows
    name: str | None = None
    amount: float | None = None
    category: str | None = None

    # One-off
    scheduled_date: YearMonth | None = None

    # Repeating
    frequency: Frequency | None = None
    custom_interval_months: int | None = None
    first_occurrence: YearMonth | None = None
    end_date: YearMonth | None = None


class PlannedItemCreate(PlannedItemBase):
    pass


class PlannedItemUpdate(BaseModel):
    type: ItemType | None = None
    kind: PlannedKind | None = None
    name: str | None = None
    amount: float | None = None
    category: str | None = None
    scheduled_date: YearMonth | None = None
    frequency: Frequency | None = None
    custom_interval_months: int | None = None
    first_occurrence: YearMonth | None = None
    end_date: YearMonth | None = None


class PlannedItemResponse(PlannedItemBase):
    id: int
    account_id: int
    is_recurring_override: bool = False
    linked_recurring_item_id: int | None = None
    skip_occurrence: bool = False

    class Config:
        from_attributes = True
