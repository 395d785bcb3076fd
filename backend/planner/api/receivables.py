from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import Receivable, ReceivableRepayment
from ..schemas import ReceivableCreate, ReceivableResponse, ReceivableUpdate, RepaymentInput
from ..services.validation import validate_receivable
from .deps import get_account_or_404, get_owned_or_404, raise_if_invalid

router = APIRouter()


def _check(db: Session, db_receivable: Receivable) -> Receivable:
    db.flush()
    db.refresh(db_receivable)
    raise_if_invalid(validate_receivable(ReceivableResponse.model_validate(db_receivable)))
    return db_receivable


@router.get("/", response_model=list[ReceivableResponse])
def list_receivables(account_id: int, db: Session = Depends(get_db)):
    get_account_or_404(db, account_id)
    return (
        db.query(Receivable)
        .filter(Receivable.account_id == account_id)
        .order_by(Receivable.start_date, Receivable.id)
        .all()
    )


@router.get("/{receivable_id}", response_model=ReceivableResponse)
def get_receivable(account_id: int, receivable_id: int, db: Session = Depends(get_db)):
    return get_owned_or_404(db, Receivable, receivable_id, account_id, "Receivable")


@router.post("/", response_model=ReceivableResponse, status_code=201)
def create_receivable(
    account_id: int,
    receivable: ReceivableCreate,
    db: Session = Depends(get_db)
):
    """Record money lent out."""
    get_account_or_404(db, account_id)
    db_receivable = Receivable(account_id=account_id, **receivable.model_dump())
    db.add(db_receivable)
    return _check(db, db_receivable)


@router.patch("/{receivable_id}", response_model=ReceivableResponse)
def update_receivable(
    account_id: int,
    receivable_id: int,
    receivable: ReceivableUpdate,
    db: Session = Depends(get_db)
):
    db_receivable = get_owned_or_404(db, Receivable, receivable_id, account_id, "Receivable")

    for field, value in receivable.model_dump(exclude_unset=True).items():
        setattr(db_receivable, field, value)

    return _check(db, db_receivable)


@router.delete("/{receivable_id}", status_code=204)
def delete_receivable(account_id: int, receivable_id: int, db: Session = Depends(get_db)):
    db_receivable = get_owned_or_404(db, Receivable, receivable_id, account_id, "Receivable")
    db.delete(db_receivable)
    return None


# --- Repayments ---

@router.post("/{receivable_id}/repayments", response_model=ReceivableResponse, status_code=201)
def add_repayment(
    account_id: int,
    receivable_id: int,
    repayment: RepaymentInput,
    db: Session = Depends(get_db)
):
    """Record a repayment actually received."""
    db_receivable = get_owned_or_404(db, Receivable, receivable_id, account_id, "Receivable")
    db_receivable.repayments.append(ReceivableRepayment(**repayment.model_dump()))
    return _check(db, db_receivable)


@router.delete("/{receivable_id}/repayments/{repayment_id}", response_model=ReceivableResponse)
def delete_repayment(
    account_id: int,
    receivable_id: int,
    repayment_id: int,
    db: Session = Depends(get_db)
):
    db_receivable = get_owned_or_404(db, Receivable, receivable_id, account_id, "Receivable")
    row = db.query(ReceivableRepayment).filter(
        ReceivableRepayment.id == repayment_id,
        ReceivableRepayment.receivable_id == receivable_id,
    ).first()
    if not row:
        raise HTTPException(status_code=404, detail="Repayment not found")
    db_receivable.repayments.remove(row)
    return _check(db, db_receivable)
