import enum


class ItemType(enum.Enum):
    """Direction of a cash flow item."""
    INCOME = "income"
    EXPENSE = "expense"


class Frequency(enum.Enum):
    """How often a scheduled item recurs."""
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"
    CUSTOM = "custom"  # every custom_interval_months


class PlannedKind(enum.Enum):
    """Planned items are either a single event or a repeating series."""
    ONE_OFF = "one-off"
    REPEATING = "repeating"


class ScheduleKind(enum.Enum):
    """Schedule shape for taxed incomes and investment contributions."""
    ONE_OFF = "one-off"
    RECURRING = "recurring"


class ItemKind(enum.Enum):
    """Kind of a projected line item, used for filtering."""
    RECURRING = "recurring"
    ONE_OFF = "one-off"
    REPEATING = "repeating"


class DebtType(enum.Enum):
    AMORTIZED = "amortized"
    FIXED_INSTALLMENT = "fixed-installment"


class InterestModel(enum.Enum):
    NONE = "none"
    FIXED = "fixed"
    VARIABLE = "variable"  # reference rate + margin


class ContributionType(enum.Enum):
    CONTRIBUTION = "contribution"
    WITHDRAWAL = "withdrawal"


class Source(enum.Enum):
    """Where a projected line item came from."""
    RECURRING = "recurring"
    PLANNED_ONE_OFF = "planned-one-off"
    PLANNED_REPEATING = "planned-repeating"
    SALARY = "salary"
    TAXED_INCOME = "taxed-income"
    DEBT_PAYMENT = "debt-payment"
    DEBT_EXTRA_PAYMENT = "debt-extra-payment"


# Sentinel for Account.planning_horizon_months meaning "use custom_end_date"
CUSTOM_HORIZON = -1
