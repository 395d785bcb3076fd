import pytest

from planner.schemas import SalaryBenefitInput
from planner.services.salary_calculator import (
    TaxSettings,
    calculate_net_amount,
    calculate_net_salary,
    emits_salary_income,
    resolve_tax_settings,
)
from tests.helpers import make_salary, make_taxed_income


def test_net_salary():
    # 3000 - 20% tax - 10% contributions - 50 deductions
    assert calculate_net_salary(3000.0, 20.0, 10.0, 50.0) == pytest.approx(2050.0)


def test_taxable_benefit_widens_base_but_is_not_paid_out():
    benefits = [SalaryBenefitInput(name="Company car", amount=500.0, is_taxable=True)]
    net = calculate_net_salary(3000.0, 20.0, 10.0, 0.0, benefits)
    assert net == pytest.approx(3000.0 - 3500.0 * 0.3)


def test_non_taxable_benefit_is_informational():
    benefits = [SalaryBenefitInput(name="Meal vouchers", amount=200.0)]
    assert calculate_net_salary(3000.0, 20.0, 10.0, 0.0, benefits) == pytest.approx(2100.0)


def test_taxed_income_uses_custom_rates():
    income = make_taxed_income(gross_amount=1000.0, custom_tax_rate=30.0)
    settings = resolve_tax_settings(income, [])
    assert settings == TaxSettings(tax_rate=30.0)
    assert calculate_net_amount(1000.0, settings) == pytest.approx(700.0)


def test_taxed_income_can_borrow_first_active_salary_rates():
    income = make_taxed_income(use_salary_tax_settings=True, custom_tax_rate=None)
    salaries = [
        make_salary(is_active=False, tax_rate=45.0),
        make_salary(tax_rate=25.0, contributions_rate=5.0, other_deductions=0.0),
    ]
    settings = resolve_tax_settings(income, salaries)
    assert settings.tax_rate == 25.0
    assert settings.contributions_rate == 5.0


def test_linked_salary_does_not_emit_its_own_income():
    assert emits_salary_income(make_salary())
    assert not emits_salary_income(make_salary(is_linked_to_recurring=True, linked_recurring_item_id=7))
    # The flag alone is not enough without a link
    assert emits_salary_income(make_salary(is_linked_to_recurring=True))


def test_borrowed_salary_rates_leave_fixed_deductions_behind():
    salary = make_salary(tax_rate=20.0, contributions_rate=10.0, other_deductions=50.0)
    bonus = make_taxed_income(use_salary_tax_settings=True, custom_tax_rate=None)
    settings = resolve_tax_settings(bonus, [salary])

    assert settings == TaxSettings(tax_rate=20.0, contributions_rate=10.0)
    assert calculate_net_amount(1000.0, settings) == pytest.approx(700.0)

    with_own_deduction = make_taxed_income(
        use_salary_tax_settings=True, custom_tax_rate=None, custom_other_deductions=25.0,
    )
    assert resolve_tax_settings(with_own_deduction, [salary]).other_deductions == 25.0
