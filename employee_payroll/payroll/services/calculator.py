import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from rest_framework.exceptions import ValidationError
from employee_payroll.common.exceptions import ExcessiveDeductions

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")

EMPLOYEE_TAX = "Employee Tax"
PENSION = "Pension"
MEDICAL_INSURANCE = "MedicalInsurance"
OTHERS = "Others"
HOUSING = "Housing"
TRANSPORT = "Transport"

# Fallbacks used when a rule is missing from the deduction table. Tax, medical
# and others look like they were meant as percentages, not fractions; they are
# kept unchanged until the business confirms the intended rates.
DEFAULT_RATES = {
    EMPLOYEE_TAX: Decimal("0.30"),
    PENSION: Decimal("0.06"),
    MEDICAL_INSURANCE: Decimal("0.50"),
    OTHERS: Decimal("0.50"),
    HOUSING: Decimal("0.14"),
    TRANSPORT: Decimal("0.14"),
}


@dataclass(frozen=True)
class PayslipBreakdown:
    base_salary: Decimal
    house_amount: Decimal
    transport_amount: Decimal
    employee_taxed_amount: Decimal
    pension_amount: Decimal
    medical_insurance_amount: Decimal
    other_taxed_amount: Decimal
    total_deductions: Decimal
    gross_salary: Decimal
    net_salary: Decimal


def _money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def resolve_rates(rates: dict) -> dict:
    """Fill in every rule missing from ``rates`` with its default."""
    resolved = {}
    for name, default in DEFAULT_RATES.items():
        if name in rates:
            resolved[name] = Decimal(rates[name])
        else:
            logger.warning(f"Deduction rule '{name}' not configured, using default rate {default}")
            resolved[name] = default
    return resolved


def calculate_payslip(base_salary, rates: dict, employee_code: str = "") -> PayslipBreakdown:
    """
    Compute allowances, deductions, gross and net salary from a base salary.

    ``rates`` maps rule names to fractions and must already be resolved
    (see ``resolve_rates``). The deduction check runs on exact values. Each
    component is then rounded to cents and the totals are summed from those.

    Raises ExcessiveDeductions when deductions are larger than gross salary.
    """
    base_salary = Decimal(base_salary)
    if base_salary < 0:
        raise ValidationError({"base_salary": "Base salary must be a non-negative value."})

    house_amount = base_salary * rates[HOUSING]
    transport_amount = base_salary * rates[TRANSPORT]
    gross_salary = base_salary + house_amount + transport_amount

    employee_taxed_amount = base_salary * rates[EMPLOYEE_TAX]
    pension_amount = base_salary * rates[PENSION]
    medical_insurance_amount = base_salary * rates[MEDICAL_INSURANCE]
    other_taxed_amount = base_salary * rates[OTHERS]

    total_deductions = (
        employee_taxed_amount + pension_amount + medical_insurance_amount + other_taxed_amount
    )

    if total_deductions > gross_salary:
        raise ExcessiveDeductions(
            employee_code=employee_code,
            total_deductions=_money(total_deductions),
            gross_salary=_money(gross_salary),
        )

    # Totals are rebuilt from the rounded components so the stored slip adds up.
    base_salary = _money(base_salary)
    house_amount = _money(house_amount)
    transport_amount = _money(transport_amount)
    employee_taxed_amount = _money(employee_taxed_amount)
    pension_amount = _money(pension_amount)
    medical_insurance_amount = _money(medical_insurance_amount)
    other_taxed_amount = _money(other_taxed_amount)

    gross_salary = base_salary + house_amount + transport_amount
    total_deductions = (
        employee_taxed_amount + pension_amount + medical_insurance_amount + other_taxed_amount
    )

    return PayslipBreakdown(
        base_salary=base_salary,
        house_amount=house_amount,
        transport_amount=transport_amount,
        employee_taxed_amount=employee_taxed_amount,
        pension_amount=pension_amount,
        medical_insurance_amount=medical_insurance_amount,
        other_taxed_amount=other_taxed_amount,
        total_deductions=total_deductions,
        gross_salary=gross_salary,
        net_salary=gross_salary - total_deductions,
    )
