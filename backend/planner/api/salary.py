from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import RecurringItem, SalaryBenefit, SalaryConfig
from ..schemas import SalaryConfigCreate, SalaryConfigUpdate, SalaryConfigResponse
from ..services.salary_calculator import net_salary_for
from ..services.validation import validate_salary_config
from .deps import get_account_or_404, get_owned_or_404, raise_if_invalid

router = APIRouter()


def _to_response(db_config: SalaryConfig) -> SalaryConfigResponse:
    """Response with the derived net salary filled in."""
    config = SalaryConfigResponse.model_validate(db_config)
    return config.model_copy(update={"net_salary": net_salary_for(config)})


def _check(db: Session, account_id: int, db_config: SalaryConfig) -> SalaryConfigResponse:
    db.flush()
    db.refresh(db_config)
    config = _to_response(db_config)
    errors = validate_salary_config(config)
    if config.linked_recurring_item_id is not None:
        linked = db.query(RecurringItem).filter(
            RecurringItem.id == config.linked_recurring_item_id,
            RecurringItem.account_id == account_id,
        ).first()
        if not linked:
            errors.append(f"Salary {config.id} ({config.name}): linked recurring item not found")
    raise_if_invalid(errors)
    return config


@router.get("/", response_model=list[SalaryConfigResponse])
def list_salary_configs(account_id: int, db: Session = Depends(get_db)):
    """Get all salaries of an account."""
    get_account_or_404(db, account_id)
    configs = (
        db.query(SalaryConfig)
        .filter(SalaryConfig.account_id == account_id)
        .order_by(SalaryConfig.start_date, SalaryConfig.id)
        .all()
    )
    return [_to_response(c) for c in configs]


@router.get("/{config_id}", response_model=SalaryConfigResponse)
def get_salary_config(account_id: int, config_id: int, db: Session = Depends(get_db)):
    return _to_response(get_owned_or_404(db, SalaryConfig, config_id, account_id, "Salary"))


@router.post("/", response_model=SalaryConfigResponse, status_code=201)
def create_salary_config(
    account_id: int,
    config: SalaryConfigCreate,
    db: Session = Depends(get_db)
):
    """Create a salary."""
    get_account_or_404(db, account_id)
    db_config = SalaryConfig(account_id=account_id, **config.model_dump(exclude={"benefits"}))
    db_config.benefits = [SalaryBenefit(**b.model_dump()) for b in config.benefits]
    db.add(db_config)
    return _check(db, account_id, db_config)


@router.patch("/{config_id}", response_model=SalaryConfigResponse)
def update_salary_config(
    account_id: int,
    config_id: int,
    config: SalaryConfigUpdate,
    db: Session = Depends(get_db)
):
    """Update a salary. A benefits list replaces the existing benefits."""
    db_config = get_owned_or_404(db, SalaryConfig, config_id, account_id, "Salary")

    update_data = config.model_dump(exclude_unset=True, exclude={"benefits"})
    for field, value in update_data.items():
        setattr(db_config, field, value)
    if config.benefits is not None:
        db_config.benefits = [SalaryBenefit(**b.model_dump()) for b in config.benefits]

    return _check(db, account_id, db_config)


@router.delete("/{config_id}", status_code=204)
def delete_salary_config(account_id: int, config_id: int, db: Session = Depends(get_db)):
    db_config = get_owned_or_404(db, SalaryConfig, config_id, account_id, "Salary")
    db.delete(db_config)
    return None
