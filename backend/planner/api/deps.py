from fastapi import HTTPException
from sqlalchemy.orm import Session

from ..models import Account
from ..schemas import YearMonth


def get_account_or_404(db: Session, account_id: int) -> Account:
    account = db.query(Account).filter(Account.id == account_id).first()
    if not account:
        raise HTTPException(status_code=404, detail="Account not found")
    return account


def get_owned_or_404(db: Session, model, item_id: int, account_id: int, label: str):
    """Fetch a row of model by id, making sure it belongs to the account."""
    item = db.query(model).filter(model.id == item_id, model.account_id == account_id).first()
    if not item:
        raise HTTPException(status_code=404, detail=f"{label} not found")
    return item


def raise_if_invalid(errors: list[str]) -> None:
    """Reject the request (and roll back the session) on validation problems."""
    if errors:
        raise HTTPException(status_code=422, detail=errors)


def parse_year_month(value: str) -> YearMonth:
    """Parse a YYYY-MM path or query value."""
    try:
        return YearMonth.parse(value)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
