from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import InvestmentAccount, InvestmentContribution
from ..schemas import (
    ContributionCreate,
    InvestmentCreate,
    InvestmentResponse,
    InvestmentUpdate,
)
from ..services.validation import validate_investment
from .deps import get_account_or_404, get_owned_or_404, raise_if_invalid

router = APIRouter()


def _check(db: Session, db_investment: InvestmentAccount) -> InvestmentAccount:
    db.flush()
    db.refresh(db_investment)
    raise_if_invalid(validate_investment(InvestmentResponse.model_validate(db_investment)))
    return db_investment


@router.get("/", response_model=list[InvestmentResponse])
def list_investments(account_id: int, db: Session = Depends(get_db)):
    get_account_or_404(db, account_id)
    return (
        db.query(InvestmentAccount)
        .filter(InvestmentAccount.account_id == account_id)
        .order_by(InvestmentAccount.name)
        .all()
    )


@router.get("/{investment_id}", response_model=InvestmentResponse)
def get_investment(account_id: int, investment_id: int, db: Session = Depends(get_db)):
    return get_owned_or_404(db, InvestmentAccount, investment_id, account_id, "Investment")


@router.post("/", response_model=InvestmentResponse, status_code=201)
def create_investment(
    account_id: int,
    investment: InvestmentCreate,
    db: Session = Depends(get_db)
):
    get_account_or_404(db, account_id)
    db_investment = InvestmentAccount(account_id=account_id, **investment.model_dump())
    db.add(db_investment)
    return _check(db, db_investment)


@router.patch("/{investment_id}", response_model=InvestmentResponse)
def update_investment(
    account_id: int,
    investment_id: int,
    investment: InvestmentUpdate,
    db: Session = Depends(get_db)
):
    db_investment = get_owned_or_404(db, InvestmentAccount, investment_id, account_id, "Investment")

    for field, value in investment.model_dump(exclude_unset=True).items():
        setattr(db_investment, field, value)

    return _check(db, db_investment)


@router.delete("/{investment_id}", status_code=204)
def delete_investment(account_id: int, investment_id: int, db: Session = Depends(get_db)):
    db_investment = get_owned_or_404(db, InvestmentAccount, investment_id, account_id, "Investment")
    db.delete(db_investment)
    return None


# --- Contributions and withdrawals ---

@router.post("/{investment_id}/contributions", response_model=InvestmentResponse, status_code=201)
def add_contribution(
    account_id: int,
    investment_id: int,
    contribution: ContributionCreate,
    db: Session = Depends(get_db)
):
    """Add a one-off or recurring contribution (or withdrawal)."""
    db_investment = get_owned_or_404(db, InvestmentAccount, investment_id, account_id, "Investment")
    db_investment.contributions.append(InvestmentContribution(**contribution.model_dump()))
    return _check(db, db_investment)


@router.delete(
    "/{investment_id}/contributions/{contribution_id}", response_model=InvestmentResponse
)
def delete_contribution(
    account_id: int,
    investment_id: int,
    contribution_id: int,
    db: Session = Depends(get_db)
):
    db_investment = get_owned_or_404(db, InvestmentAccount, investment_id, account_id, "Investment")
    row = db.query(InvestmentContribution).filter(
        InvestmentContribution.id == contribution_id,
        InvestmentContribution.investment_id == investment_id,
    ).first()
    if not row:
        raise HTTPException(status_code=404, detail="Contribution not found")
    db_investment.contributions.remove(row)
    return _check(db, db_investment)
