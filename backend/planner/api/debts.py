from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import Debt, DebtExtraPayment, DebtReferenceRate
from ..schemas import DebtCreate, DebtResponse, DebtUpdate, ExtraPaymentInput
from ..services.validation import validate_debt
from .deps import get_account_or_404, get_owned_or_404, parse_year_month, raise_if_invalid

router = APIRouter()


class RateInput(BaseModel):
    rate: float  # annual percent


def _check(db: Session, db_debt: Debt) -> Debt:
    db.flush()
    db.refresh(db_debt)
    raise_if_invalid(validate_debt(DebtResponse.model_validate(db_debt)))
    return db_debt


@router.get("/", response_model=list[DebtResponse])
def list_debts(account_id: int, db: Session = Depends(get_db)):
    """Get all debts paid from an account."""
    get_account_or_404(db, account_id)
    return (
        db.query(Debt)
        .filter(Debt.account_id == account_id)
        .order_by(Debt.start_date, Debt.id)
        .all()
    )


@router.get("/{debt_id}", response_model=DebtResponse)
def get_debt(account_id: int, debt_id: int, db: Session = Depends(get_db)):
    return get_owned_or_404(db, Debt, debt_id, account_id, "Debt")


@router.post("/", response_model=DebtResponse, status_code=201)
def create_debt(account_id: int, debt: DebtCreate, db: Session = Depends(get_db)):
    """Create a debt."""
    get_account_or_404(db, account_id)
    db_debt = Debt(account_id=account_id, **debt.model_dump())
    db.add(db_debt)
    return _check(db, db_debt)


@router.patch("/{debt_id}", response_model=DebtResponse)
def update_debt(
    account_id: int,
    debt_id: int,
    debt: DebtUpdate,
    db: Session = Depends(get_db)
):
    """Update a debt."""
    db_debt = get_owned_or_404(db, Debt, debt_id, account_id, "Debt")

    for field, value in debt.model_dump(exclude_unset=True).items():
        setattr(db_debt, field, value)

    return _check(db, db_debt)


@router.delete("/{debt_id}", status_code=204)
def delete_debt(account_id: int, debt_id: int, db: Session = Depends(get_db)):
    db_debt = get_owned_or_404(db, Debt, debt_id, account_id, "Debt")
    db.delete(db_debt)
    return None


# --- Reference rates (variable-rate debts) ---

@router.put("/{debt_id}/rates/{year_month}", response_model=DebtResponse)
def set_reference_rate(
    account_id: int,
    debt_id: int,
    year_month: str,
    body: RateInput,
    db: Session = Depends(get_db)
):
    """Set the reference rate that applies from a month onwards."""
    month = parse_year_month(year_month)
    db_debt = get_owned_or_404(db, Debt, debt_id, account_id, "Debt")

    row = db.query(DebtReferenceRate).filter(
        DebtReferenceRate.debt_id == debt_id,
        DebtReferenceRate.year_month == str(month),
    ).first()
    if row:
        row.rate = body.rate
    else:
        db_debt.reference_rates.append(DebtReferenceRate(year_month=str(month), rate=body.rate))

    return _check(db, db_debt)


@router.delete("/{debt_id}/rates/{year_month}", response_model=DebtResponse)
def delete_reference_rate(
    account_id: int,
    debt_id: int,
    year_month: str,
    db: Session = Depends(get_db)
):
    month = parse_year_month(year_month)
    db_debt = get_owned_or_404(db, Debt, debt_id, account_id, "Debt")
    row = db.query(DebtReferenceRate).filter(
        DebtReferenceRate.debt_id == debt_id,
        DebtReferenceRate.year_month == str(month),
    ).first()
    if not row:
        raise HTTPException(status_code=404, detail="Reference rate not found")
    db_debt.reference_rates.remove(row)
    return _check(db, db_debt)


# --- Extra payments ---

@router.post("/{debt_id}/extra-payments", response_model=DebtResponse, status_code=201)
def add_extra_payment(
    account_id: int,
    debt_id: int,
    payment: ExtraPaymentInput,
    db: Session = Depends(get_db)
):
    """Record an additional principal payment."""
    db_debt = get_owned_or_404(db, Debt, debt_id, account_id, "Debt")
    db_debt.extra_payments.append(DebtExtraPayment(**payment.model_dump()))
    return _check(db, db_debt)


@router.delete("/{debt_id}/extra-payments/{payment_id}", response_model=DebtResponse)
def delete_extra_payment(
    account_id: int,
    debt_id: int,
    payment_id: int,
    db: Session = Depends(get_db)
):
    db_debt = get_owned_or_404(db, Debt, debt_id, account_id, "Debt")
    row = db.query(DebtExtraPayment).filter(
        DebtExtraPayment.id == payment_id,
        DebtExtraPayment.debt_id == debt_id,
    ).first()
    if not row:
        raise HTTPException(status_code=404, detail="Extra payment not found")
    db_debt.extra_payments.remove(row)
    return _check(db, db_debt)
