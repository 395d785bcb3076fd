from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..config import load_settings
from ..database import get_db
from ..models import Account
from ..schemas import AccountCreate, AccountUpdate, AccountResponse
from ..services.validation import validate_account
from .deps import get_account_or_404, raise_if_invalid

router = APIRouter()


def _check_account(db_account: Account) -> None:
    settings = load_settings()
    raise_if_invalid(validate_account(
        AccountResponse.model_validate(db_account), settings.max_horizon_months
    ))


@router.get("/", response_model=list[AccountResponse])
def list_accounts(include_archived: bool = False, db: Session = Depends(get_db)):
    """Get all accounts."""
    query = db.query(Account)
    if not include_archived:
        query = query.filter(Account.is_archived.is_(False))
    return query.order_by(Account.display_order, Account.name).all()


@router.get("/{account_id}", response_model=AccountResponse)
def get_account(account_id: int, db: Session = Depends(get_db)):
    """Get a single account by ID."""
    return get_account_or_404(db, account_id)


@router.post("/", response_model=AccountResponse, status_code=201)
def create_account(account: AccountCreate, db: Session = Depends(get_db)):
    """Create a new account."""
    data = account.model_dump()
    if "planning_horizon_months" not in account.model_fields_set:
        data["planning_horizon_months"] = load_settings().default_horizon_months

    db_account = Account(**data)
    db.add(db_account)
    db.flush()
    db.refresh(db_account)
    _check_account(db_account)
    return db_account


@router.patch("/{account_id}", response_model=AccountResponse)
def update_account(
    account_id: int,
    account: AccountUpdate,
    db: Session = Depends(get_db)
):
    """Update an account."""
    db_account = get_account_or_404(db, account_id)

    update_data = account.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(db_account, field, value)

    db.flush()
    db.refresh(db_account)
    _check_account(db_account)
    return db_account


@router.delete("/{account_id}", status_code=204)
def delete_account(account_id: int, db: Session = Depends(get_db)):
    """Delete an account and everything planned against it."""
    db_account = db.query(Account).filter(Account.id == account_id).first()
    if not db_account:
        raise HTTPException(status_code=404, detail="Account not found")

    db.delete(db_account)
    return None
