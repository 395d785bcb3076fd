import logging
from dataclasses import dataclass

from ..models.enums import ContributionType
from ..schemas import InvestmentPosition, InvestmentResponse, YearMonth
from .recurrence import is_scheduled

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class InvestmentState:
    valuation: float


def monthly_growth_rate(annual_growth_rate: float) -> float:
    """Monthly rate that compounds to annual_growth_rate (percent) over 12 months."""
    return (1 + annual_growth_rate / 100) ** (1 / 12) - 1


def initial_investment_state(investment: InvestmentResponse) -> InvestmentState:
    return InvestmentState(investment.starting_valuation)


def advance_investment(
    investment: InvestmentResponse, state: InvestmentState, month: YearMonth
) -> tuple[InvestmentState, InvestmentPosition]:
    """
    Grow the valuation by one month, then apply the month's contributions.

    Nothing happens before valuation_date. Valuations are not clamped: a
    negative result is reported through is_negative.
    """
    starting = state.valuation
    if month < investment.valuation_date:
        return state, InvestmentPosition(
            investment_id=investment.id,
            name=investment.name,
            starting_valuation=starting,
            ending_valuation=starting,
            is_negative=starting < 0,
        )

    growth = starting * monthly_growth_rate(investment.annual_growth_rate)
    contributions = 0.0
    withdrawals = 0.0
    for contribution in investment.contributions:
        if not is_scheduled(contribution, month):
            continue
        if contribution.type == ContributionType.CONTRIBUTION:
            contributions += contribution.amount
        else:
            withdrawals += contribution.amount

    ending = starting + growth + contributions - withdrawals
    if ending < 0 <= starting:
        logger.warning(
            "Investment %s (%s): withdrawals exceed valuation in %s (%.2f)",
            investment.id, investment.name, month, ending,
        )

    position = InvestmentPosition(
        investment_id=investment.id,
        name=investment.name,
        starting_valuation=starting,
        growth=growth,
        contributions=contributions,
        withdrawals=withdrawals,
        ending_valuation=ending,
        is_negative=ending < 0,
    )
    return InvestmentState(ending), position
