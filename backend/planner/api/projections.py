from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..config import load_settings
from ..database import get_db
from ..models import ItemKind, ItemType
from ..schemas import MonthlyProjection, NetWorthMonth, ProjectionFilters, YearlyRollup
from ..schemas.year_month import current_year_month
from ..services.projection_service import (
    calculate_net_worth,
    calculate_projection,
    calculate_yearly_rollups,
    unique_categories,
)
from ..services.snapshot_service import AccountNotFound, ProjectionInputs, load_projection_inputs
from .deps import parse_year_month

router = APIRouter()


def _load(db: Session, account_id: int) -> ProjectionInputs:
    try:
        return load_projection_inputs(db, account_id)
    except AccountNotFound:
        raise HTTPException(status_code=404, detail="Account not found")


def _project(
    inputs: ProjectionInputs,
    filters: ProjectionFilters | None = None,
    current_month: str | None = None,
) -> list[MonthlyProjection]:
    month = parse_year_month(current_month) if current_month else current_year_month()
    return calculate_projection(
        inputs.account,
        inputs.recurring_items,
        inputs.planned_items,
        filters,
        current_month=month,
        max_horizon=load_settings().max_horizon_months,
        **inputs.engine_kwargs(),
    )


@router.get("/", response_model=list[MonthlyProjection])
def get_projection(
    account_id: int,
    start_date: str | None = None,
    end_date: str | None = None,
    categories: list[str] = Query(default=[]),
    item_types: list[ItemType] = Query(default=[]),
    item_kinds: list[ItemKind] = Query(default=[]),
    current_month: str | None = None,
    db: Session = Depends(get_db),
):
    """Month-by-month projection of an account, optionally filtered."""
    filters = ProjectionFilters(
        start_date=parse_year_month(start_date) if start_date else None,
        end_date=parse_year_month(end_date) if end_date else None,
        categories=categories,
        item_types=item_types,
        item_kinds=item_kinds,
    )
    return _project(_load(db, account_id), filters, current_month)


@router.get("/yearly", response_model=list[YearlyRollup])
def get_yearly_projection(account_id: int, db: Session = Depends(get_db)):
    """Projection rolled up by calendar year."""
    return calculate_yearly_rollups(_project(_load(db, account_id)))


@router.get("/net-worth", response_model=list[NetWorthMonth])
def get_net_worth(account_id: int, db: Session = Depends(get_db)):
    """Cash plus investments and receivables, minus debts, per month."""
    return calculate_net_worth(_project(_load(db, account_id)))


@router.get("/categories", response_model=list[str])
def get_categories(account_id: int, db: Session = Depends(get_db)):
    """Categories in use, for filter choices."""
    inputs = _load(db, account_id)
    return unique_categories(inputs.recurring_items, inputs.planned_items)
