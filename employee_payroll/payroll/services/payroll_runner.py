import logging

from django.db import transaction
from django.utils import timezone
from employee_payroll.common.exceptions import Conflict
from employee_payroll.hr.services.employee_service import EmployeeService
from employee_payroll.hr.services.employment_service import find_active_employment
from employee_payroll.payroll.models import Payslip
from employee_payroll.payroll.services.calculator import calculate_payslip, resolve_rates
from employee_payroll.payroll.services.deductions import DeductionService
from employee_payroll.payroll.services.periods import validate_period, lock_period

logger = logging.getLogger(__name__)


def _build_payslip(employee, breakdown, month, year, today):
    return Payslip(
        employee=employee,
        base_salary_at_generation=breakdown.base_salary,
        house_amount=breakdown.house_amount,
        transport_amount=breakdown.transport_amount,
        employee_taxed_amount=breakdown.employee_taxed_amount,
        pension_amount=breakdown.pension_amount,
        medical_insurance_amount=breakdown.medical_insurance_amount,
        other_taxed_amount=breakdown.other_taxed_amount,
        total_deductions=breakdown.total_deductions,
        gross_salary=breakdown.gross_salary,
        net_salary=breakdown.net_salary,
        month=month,
        year=year,
        status=Payslip.Status.PENDING,
        generation_date=today,
    )


@transaction.atomic
def generate_payroll(*, month, year, actor=None):
    """
    Create one PENDING payslip per active employee for (month, year).

    PENDING payslips of the period are replaced; a period holding any PAID
    payslip cannot be regenerated. Employees without an active employment are
    skipped. ExcessiveDeductions for any employee rolls back the whole batch.
    """
    validate_period(month, year)
    period = lock_period(month, year)

    existing = Payslip.objects.filter(month=month, year=year)
    if existing.filter(status=Payslip.Status.PAID).exists():
        raise Conflict(f"Payroll for {month}/{year} is already approved, cannot regenerate.")
    replaced, _ = existing.delete()
    if replaced:
        logger.info(f"Replacing {replaced} pending payslip(s) for {month}/{year}")

    rates = resolve_rates(DeductionService.list_rates())
    today = timezone.localdate()

    payslips = []
    for employee in EmployeeService.list_active():
        employment = find_active_employment(employee)
        if employment is None:
            logger.info(f"Skipping {employee.code}: no active employment")
            continue

        breakdown = calculate_payslip(employment.base_salary, rates, employee_code=employee.code)
        payslips.append(_build_payslip(employee, breakdown, month, year, today))

    created = Payslip.objects.bulk_create(payslips)

    period.last_generated_at = timezone.now()
    period.save(update_fields=["last_generated_at"])

    logger.info(
        f"Generated {len(created)} payslip(s) for {month}/{year} "
        f"by {getattr(actor, 'email', 'system')}"
    )
    return created
