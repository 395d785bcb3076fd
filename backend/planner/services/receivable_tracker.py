from dataclasses import dataclass, field

from ..schemas import ReceivablePosition, ReceivableResponse, YearMonth


@dataclass(frozen=True, slots=True)
class ReceivableState:
    balance: float


@dataclass(frozen=True)
class ReceivableSchedule:
    receivable: ReceivableResponse
    repayments: dict[YearMonth, float] = field(default_factory=dict)

    @classmethod
    def from_receivable(cls, receivable: ReceivableResponse) -> "ReceivableSchedule":
        repayments: dict[YearMonth, float] = {}
        for repayment in receivable.repayments:
            repayments[repayment.date] = repayments.get(repayment.date, 0.0) + repayment.amount
        return cls(receivable=receivable, repayments=repayments)

    @property
    def monthly_interest_rate(self) -> float:
        if not self.receivable.has_interest:
            return 0.0
        return (self.receivable.annual_interest_rate or 0.0) / 100 / 12


def initial_receivable_state(receivable: ReceivableResponse) -> ReceivableState:
    return ReceivableState(receivable.initial_principal)


def advance_receivable(
    schedule: ReceivableSchedule,
    state: ReceivableState,
    month: YearMonth,
    project_expected: bool = True,
) -> tuple[ReceivableState, ReceivablePosition]:
    """
    Accrue interest and apply the month's repayment.

    A recorded repayment wins over the expected one. project_expected is
    False while fast-forwarding through history, where only recorded
    repayments count. The balance floors at zero.
    """
    receivable = schedule.receivable
    starting = state.balance
    if month < receivable.start_date or starting <= 0:
        return state, ReceivablePosition(
            receivable_id=receivable.id,
            name=receivable.name,
            starting_balance=starting,
            ending_balance=starting,
        )

    interest = starting * schedule.monthly_interest_rate
    actual = schedule.repayments.get(month, 0.0)
    if actual > 0:
        repayment = actual
    elif project_expected:
        repayment = receivable.expected_monthly_repayment or 0.0
    else:
        repayment = 0.0

    owed = starting + interest
    repayment = min(repayment, owed)
    ending = max(0.0, owed - repayment)

    position = ReceivablePosition(
        receivable_id=receivable.id,
        name=receivable.name,
        starting_balance=starting,
        interest_accrued=interest,
        repayment=repayment,
        ending_balance=ending,
        is_actual_repayment=actual > 0,
    )
    return ReceivableState(ending), position
