from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import TaxedIncome
from ..schemas import TaxedIncomeCreate, TaxedIncomeUpdate, TaxedIncomeResponse
from ..services.validation import validate_taxed_income
from .deps import get_account_or_404, get_owned_or_404, raise_if_invalid

router = APIRouter()


@router.get("/", response_model=list[TaxedIncomeResponse])
def list_taxed_incomes(account_id: int, db: Session = Depends(get_db)):
    """Get all taxed incomes of an account."""
    get_account_or_404(db, account_id)
    return (
        db.query(TaxedIncome)
        .filter(TaxedIncome.account_id == account_id)
        .order_by(TaxedIncome.id)
        .all()
    )


@router.get("/{income_id}", response_model=TaxedIncomeResponse)
def get_taxed_income(account_id: int, income_id: int, db: Session = Depends(get_db)):
    return get_owned_or_404(db, TaxedIncome, income_id, account_id, "Taxed income")


@router.post("/", response_model=TaxedIncomeResponse, status_code=201)
def create_taxed_income(
    account_id: int,
    income: TaxedIncomeCreate,
    db: Session = Depends(get_db)
):
    get_account_or_404(db, account_id)
    db_income = TaxedIncome(account_id=account_id, **income.model_dump())
    db.add(db_income)
    db.flush()
    db.refresh(db_income)
    raise_if_invalid(validate_taxed_income(TaxedIncomeResponse.model_validate(db_income)))
    return db_income


@router.patch("/{income_id}", response_model=TaxedIncomeResponse)
def update_taxed_income(
    account_id: int,
    income_id: int,
    income: TaxedIncomeUpdate,
    db: Session = Depends(get_db)
):
    db_income = get_owned_or_404(db, TaxedIncome, income_id, account_id, "Taxed income")

    for field, value in income.model_dump(exclude_unset=True).items():
        setattr(db_income, field, value)

    db.flush()
    db.refresh(db_income)
    raise_if_invalid(validate_taxed_income(TaxedIncomeResponse.model_validate(db_income)))
    return db_income


@router.delete("/{income_id}", status_code=204)
def delete_taxed_income(account_id: int, income_id: int, db: Session = Depends(get_db)):
    db_income = get_owned_or_404(db, TaxedIncome, income_id, account_id, "Taxed income")
    db.delete(db_income)
    return None
