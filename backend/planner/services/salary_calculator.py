from dataclasses import dataclass
from typing import Iterable

from ..schemas import SalaryConfigResponse, TaxedIncomeResponse
from ..schemas.salary import SalaryBenefitInput

SALARY_CATEGORY = "Salary"


@dataclass(frozen=True, slots=True)
class TaxSettings:
    tax_rate: float = 0.0  # percent
    contributions_rate: float = 0.0  # percent
    other_deductions: float = 0.0


def taxable_base(gross: float, benefits: Iterable[SalaryBenefitInput] = ()) -> float:
    """Gross pay plus taxable benefits in kind."""
    return gross + sum(b.amount for b in benefits if b.is_taxable)


def calculate_net_salary(
    gross_salary: float,
    tax_rate: float,
    contributions_rate: float,
    other_deductions: float = 0.0,
    benefits: Iterable[SalaryBenefitInput] = (),
) -> float:
    """
    Net monthly cash from a salary.

    Taxable benefits raise the tax and contributions base but are not paid
    out, so they are never added to the net figure. Non-taxable benefits
    are informational only.
    """
    base = taxable_base(gross_salary, benefits)
    tax_amount = base * (tax_rate / 100)
    contributions_amount = base * (contributions_rate / 100)
    return gross_salary - tax_amount - contributions_amount - other_deductions


def net_salary_for(config: SalaryConfigResponse) -> float:
    return calculate_net_salary(
        config.gross_salary,
        config.tax_rate,
        config.contributions_rate,
        config.other_deductions,
        config.benefits,
    )


def calculate_net_amount(gross_amount: float, settings: TaxSettings) -> float:
    """Net of a taxed income: same arithmetic as a salary, without benefits."""
    return calculate_net_salary(
        gross_amount,
        settings.tax_rate,
        settings.contributions_rate,
        settings.other_deductions,
    )


def resolve_tax_settings(
    income: TaxedIncomeResponse,
    salary_configs: Iterable[SalaryConfigResponse],
) -> TaxSettings:
    """
    Use the first active salary's rates if asked to, else the custom rates.

    Only rates are borrowed. A salary's fixed monthly deductions never apply
    to a taxed income; its own custom deduction does.
    """
    if income.use_salary_tax_settings:
        for config in salary_configs:
            if config.is_active:
                return TaxSettings(
                    tax_rate=config.tax_rate,
                    contributions_rate=config.contributions_rate,
                    other_deductions=income.custom_other_deductions or 0.0,
                )
    return TaxSettings(
        tax_rate=income.custom_tax_rate or 0.0,
        contributions_rate=income.custom_contributions_rate or 0.0,
        other_deductions=income.custom_other_deductions or 0.0,
    )


def emits_salary_income(config: SalaryConfigResponse) -> bool:
    """A salary linked to a recurring item is already carried by that item."""
    return not (config.is_linked_to_recurring and config.linked_recurring_item_id is not None)
