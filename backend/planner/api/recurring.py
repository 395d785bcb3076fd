from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import PlannedItem, RecurringItem
from ..schemas import (
    OccurrenceOverride,
    OccurrenceOverrideInput,
    PlannedItemResponse,
    RecurringItemCreate,
    RecurringItemResponse,
    RecurringItemUpdate,
)
from ..services.validation import validate_planned_item, validate_recurring_item
from .deps import get_account_or_404, get_owned_or_404, parse_year_month, raise_if_invalid

router = APIRouter()


def _to_override(row: PlannedItem) -> OccurrenceOverride:
    return OccurrenceOverride(
        item_id=row.linked_recurring_item_id,
        year_month=row.scheduled_date,
        name=row.name,
        amount=row.amount,
        category=row.category,
        skip_occurrence=row.skip_occurrence,
    )


@router.get("/", response_model=list[RecurringItemResponse])
def list_recurring_items(account_id: int, db: Session = Depends(get_db)):
    """Get all recurring items of an account."""
    get_account_or_404(db, account_id)
    return (
        db.query(RecurringItem)
        .filter(RecurringItem.account_id == account_id)
        .order_by(RecurringItem.type, RecurringItem.name)
        .all()
    )


@router.get("/{item_id}", response_model=RecurringItemResponse)
def get_recurring_item(account_id: int, item_id: int, db: Session = Depends(get_db)):
    return get_owned_or_404(db, RecurringItem, item_id, account_id, "Recurring item")


@router.post("/", response_model=RecurringItemResponse, status_code=201)
def create_recurring_item(
    account_id: int,
    item: RecurringItemCreate,
    db: Session = Depends(get_db)
):
    """Create a recurring item."""
    get_account_or_404(db, account_id)
    db_item = RecurringItem(account_id=account_id, **item.model_dump())
    db.add(db_item)
    db.flush()
    db.refresh(db_item)
    raise_if_invalid(validate_recurring_item(RecurringItemResponse.model_validate(db_item)))
    return db_item


@router.patch("/{item_id}", response_model=RecurringItemResponse)
def update_recurring_item(
    account_id: int,
    item_id: int,
    item: RecurringItemUpdate,
    db: Session = Depends(get_db)
):
    """Update a recurring item."""
    db_item = get_owned_or_404(db, RecurringItem, item_id, account_id, "Recurring item")

    for field, value in item.model_dump(exclude_unset=True).items():
        setattr(db_item, field, value)

    db.flush()
    db.refresh(db_item)
    raise_if_invalid(validate_recurring_item(RecurringItemResponse.model_validate(db_item)))
    return db_item


@router.delete("/{item_id}", status_code=204)
def delete_recurring_item(account_id: int, item_id: int, db: Session = Depends(get_db)):
    """Delete a recurring item along with its overrides."""
    db_item = get_owned_or_404(db, RecurringItem, item_id, account_id, "Recurring item")
    db.delete(db_item)
    return None


# --- Occurrence overrides ---

@router.get("/{item_id}/overrides", response_model=list[OccurrenceOverride])
def list_overrides(account_id: int, item_id: int, db: Session = Depends(get_db)):
    """Get every override of a recurring item, by month."""
    get_owned_or_404(db, RecurringItem, item_id, account_id, "Recurring item")
    rows = (
        db.query(PlannedItem)
        .filter(
            PlannedItem.linked_recurring_item_id == item_id,
            PlannedItem.is_recurring_override.is_(True),
        )
        .order_by(PlannedItem.scheduled_date)
        .all()
    )
    return [_to_override(row) for row in rows]


@router.put("/{item_id}/overrides/{year_month}", response_model=OccurrenceOverride)
def set_override(
    account_id: int,
    item_id: int,
    year_month: str,
    override: OccurrenceOverrideInput,
    db: Session = Depends(get_db)
):
    """Replace or skip one month's occurrence of a recurring item."""
    month = parse_year_month(year_month)
    recurring = get_owned_or_404(db, RecurringItem, item_id, account_id, "Recurring item")

    row = db.query(PlannedItem).filter(
        PlannedItem.linked_recurring_item_id == item_id,
        PlannedItem.scheduled_date == str(month),
    ).first()
    if not row:
        row = PlannedItem(
            account_id=account_id,
            type=recurring.type,
            is_recurring_override=True,
            linked_recurring_item_id=item_id,
            scheduled_date=str(month),
        )
        db.add(row)

    for field, value in override.model_dump().items():
        setattr(row, field, value)

    db.flush()
    db.refresh(row)
    raise_if_invalid(validate_planned_item(PlannedItemResponse.model_validate(row)))
    return _to_override(row)


@router.delete("/{item_id}/overrides/{year_month}", status_code=204)
def delete_override(
    account_id: int,
    item_id: int,
    year_month: str,
    db: Session = Depends(get_db)
):
    """Restore the default occurrence for a month."""
    month = parse_year_month(year_month)
    get_owned_or_404(db, RecurringItem, item_id, account_id, "Recurring item")
    row = db.query(PlannedItem).filter(
        PlannedItem.linked_recurring_item_id == item_id,
        PlannedItem.scheduled_date == str(month),
    ).first()
    if not row:
        raise HTTPException(status_code=404, detail="Override not found")
    db.delete(row)
    return None
