from fastapi import APIRouter

from .books import router as books_router
from .accounts import router as accounts_router
from .recurring import router as recurring_router
from .planned import router as planned_router
from .salary import router as salary_router
from .taxed_income import router as taxed_income_router
from .debts import router as debts_router
from .investments import router as investments_router
from .receivables import router as receivables_router
from .projections import router as projections_router
from .settings import router as settings_router

api_router = APIRouter()

api_router.include_router(books_router, prefix="/books", tags=["books"])
api_router.include_router(accounts_router, prefix="/accounts", tags=["accounts"])
api_router.include_router(settings_router, prefix="/settings", tags=["settings"])

_account = "/accounts/{account_id}"
api_router.include_router(recurring_router, prefix=f"{_account}/recurring", tags=["recurring"])
api_router.include_router(planned_router, prefix=f"{_account}/planned", tags=["planned"])
api_router.include_router(salary_router, prefix=f"{_account}/salary", tags=["salary"])
api_router.include_router(taxed_income_router, prefix=f"{_account}/taxed-income", tags=["taxed-income"])
api_router.include_router(debts_router, prefix=f"{_account}/debts", tags=["debts"])
api_router.include_router(investments_router, prefix=f"{_account}/investments", tags=["investments"])
api_router.include_router(receivables_router, prefix=f"{_account}/receivables", tags=["receivables"])
api_router.include_router(projections_router, prefix=f"{_account}/projection", tags=["projection"])
