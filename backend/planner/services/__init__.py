from .validation import ValidationError, MAX_HORIZON_MONTHS, validate_projection_inputs
from .recurrence import OverrideKey, interval_months, is_scheduled, occurs_in, split_overrides
from .salary_calculator import calculate_net_salary, calculate_net_amount, net_salary_for
from .debt_amortizer import ReferenceRateTable, advance_debt, effective_annual_rate
from .investment_grower import advance_investment, monthly_growth_rate
from .receivable_tracker import advance_receivable
from .month_aggregator import MonthContext, aggregate_month
from .projection_service import (
    calculate_projection,
    calculate_yearly_rollups,
    calculate_net_worth,
    generate_month_list,
    horizon_months,
    unique_categories,
)
from .snapshot_service import AccountNotFound, ProjectionInputs, load_projection_inputs

__all__ = [
    "ValidationError",
    "MAX_HORIZON_MONTHS",
    "validate_projection_inputs",
    "OverrideKey",
    "interval_months",
    "is_scheduled",
    "occurs_in",
    "split_overrides",
    "calculate_net_salary",
    "calculate_net_amount",
    "net_salary_for",
    "ReferenceRateTable",
    "advance_debt",
    "effective_annual_rate",
    "advance_investment",
    "monthly_growth_rate",
    "advance_receivable",
    "MonthContext",
    "aggregate_month",
    "calculate_projection",
    "calculate_yearly_rollups",
    "calculate_net_worth",
    "generate_month_list",
    "horizon_months",
    "unique_categories",
    "AccountNotFound",
    "ProjectionInputs",
    "load_projection_inputs",
]
