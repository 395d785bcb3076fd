from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import PlannedItem
from ..schemas import PlannedItemCreate, PlannedItemUpdate, PlannedItemResponse
from ..services.validation import validate_planned_item
from .deps import get_account_or_404, get_owned_or_404, raise_if_invalid

router = APIRouter()


def _get_planned_or_404(db: Session, account_id: int, item_id: int) -> PlannedItem:
    item = get_owned_or_404(db, PlannedItem, item_id, account_id, "Planned item")
    # Override rows are managed through the recurring item they modify
    if item.is_recurring_override:
        raise HTTPException(status_code=404, detail="Planned item not found")
    return item


@router.get("/", response_model=list[PlannedItemResponse])
def list_planned_items(account_id: int, db: Session = Depends(get_db)):
    """Get the planned one-off and repeating items of an account."""
    get_account_or_404(db, account_id)
    return (
        db.query(PlannedItem)
        .filter(
            PlannedItem.account_id == account_id,
            PlannedItem.is_recurring_override.is_(False),
        )
        .order_by(PlannedItem.scheduled_date, PlannedItem.first_occurrence, PlannedItem.id)
        .all()
    )


@router.get("/{item_id}", response_model=PlannedItemResponse)
def get_planned_item(account_id: int, item_id: int, db: Session = Depends(get_db)):
    return _get_planned_or_404(db, account_id, item_id)


@router.post("/", response_model=PlannedItemResponse, status_code=201)
def create_planned_item(
    account_id: int,
    item: PlannedItemCreate,
    db: Session = Depends(get_db)
):
    """Create a planned item."""
    get_account_or_404(db, account_id)
    db_item = PlannedItem(account_id=account_id, **item.model_dump())
    db.add(db_item)
    db.flush()
    db.refresh(db_item)
    raise_if_invalid(validate_planned_item(PlannedItemResponse.model_validate(db_item)))
    return db_item


@router.patch("/{item_id}", response_model=PlannedItemResponse)
def update_planned_item(
    account_id: int,
    item_id: int,
    item: PlannedItemUpdate,
    db: Session = Depends(get_db)
):
    """Update a planned item."""
    db_item = _get_planned_or_404(db, account_id, item_id)

    for field, value in item.model_dump(exclude_unset=True).items():
        setattr(db_item, field, value)

    db.flush()
    db.refresh(db_item)
    raise_if_invalid(validate_planned_item(PlannedItemResponse.model_validate(db_item)))
    return db_item


@router.delete("/{item_id}", status_code=204)
def delete_planned_item(account_id: int, item_id: int, db: Session = Depends(get_db)):
    """Delete a planned item."""
    db_item = _get_planned_or_404(db, account_id, item_id)
    db.delete(db_item)
    return None
