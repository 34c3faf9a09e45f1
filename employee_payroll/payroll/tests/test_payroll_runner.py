from decimal import Decimal

import pytest
from rest_framework.exceptions import ValidationError

from employee_payroll.common.exceptions import Conflict, ExcessiveDeductions
from employee_payroll.hr.models import Employee, Employment
from employee_payroll.payroll.models import Deduction, PayrollPeriod, Payslip
from employee_payroll.payroll.services.payroll_runner import generate_payroll


@pytest.mark.django_db
class TestGeneratePayroll:

    def test_one_pending_payslip_per_active_employee(self, make_employee, make_employment, safe_deductions):
        first = make_employee()
        second = make_employee()
        make_employment(first, base_salary="100000.00")
        make_employment(second, base_salary="50000.00")

        payslips = generate_payroll(month=6, year=2025)

        assert [p.employee_id for p in payslips] == [first.id, second.id]
        assert Payslip.objects.filter(month=6, year=2025).count() == 2
        slip = Payslip.objects.get(employee=first, month=6, year=2025)
        assert slip.status == Payslip.Status.PENDING
        assert slip.base_salary_at_generation == Decimal("100000.00")
        assert slip.gross_salary == Decimal("128000.00")
        assert slip.total_deductions == Decimal("16000.00")
        assert slip.net_salary == Decimal("112000.00")
        assert slip.approval_date is None
        assert PayrollPeriod.objects.get(month=6, year=2025).last_generated_at is not None

    def test_disabled_employees_and_missing_employment_are_skipped(
        self, make_employee, make_employment, safe_deductions
    ):
        paid = make_employee()
        no_contract = make_employee()
        inactive_contract = make_employee()
        disabled = make_employee(status=Employee.Status.DISABLED)
        make_employment(paid)
        make_employment(inactive_contract, status=Employment.Status.INACTIVE)
        make_employment(disabled)

        payslips = generate_payroll(month=1, year=2025)

        assert [p.employee_id for p in payslips] == [paid.id]
        assert not Payslip.objects.filter(employee__in=[no_contract, inactive_contract, disabled]).exists()

    def test_regeneration_replaces_pending_payslips(self, make_employee, make_employment, safe_deductions):
        employee = make_employee()
        employment = make_employment(employee, base_salary="100000.00")
        generate_payroll(month=3, year=2025)

        employment.base_salary = Decimal("200000.00")
        employment.save()
        generate_payroll(month=3, year=2025)

        slips = Payslip.objects.filter(employee=employee, month=3, year=2025)
        assert slips.count() == 1
        assert slips.get().base_salary_at_generation == Decimal("200000.00")

    def test_approved_period_cannot_be_regenerated(self, make_employee, make_employment, safe_deductions):
        employee = make_employee()
        make_employment(employee)
        generate_payroll(month=4, year=2025)
        Payslip.objects.filter(month=4, year=2025).update(status=Payslip.Status.PAID)

        with pytest.raises(Conflict):
            generate_payroll(month=4, year=2025)

        assert Payslip.objects.filter(month=4, year=2025, status=Payslip.Status.PAID).count() == 1

    def test_excessive_deductions_abort_the_whole_batch(self, make_employee, make_employment):
        # no rules configured: default rates push deductions above gross
        first = make_employee()
        make_employment(first, base_salary="100000.00")

        with pytest.raises(ExcessiveDeductions) as exc:
            generate_payroll(month=5, year=2025)

        assert exc.value.employee_code == first.code
        assert not Payslip.objects.filter(month=5, year=2025).exists()

    def test_failed_regeneration_keeps_previous_pending_payslips(
        self, make_employee, make_employment, safe_deductions
    ):
        employee = make_employee()
        make_employment(employee)
        generate_payroll(month=7, year=2025)
        Deduction.objects.filter(name="Employee Tax").update(percentage=Decimal("2.0000"))

        with pytest.raises(ExcessiveDeductions):
            generate_payroll(month=7, year=2025)

        slip = Payslip.objects.get(employee=employee, month=7, year=2025)
        assert slip.net_salary == Decimal("112000.00")

    def test_no_eligible_employees_returns_empty_list(self, safe_deductions):
        assert generate_payroll(month=8, year=2025) == []

    @pytest.mark.parametrize("month,year", [(0, 2025), (13, 2025), (6, 1999)])
    def test_invalid_period_rejected(self, month, year):
        with pytest.raises(ValidationError):
            generate_payroll(month=month, year=year)
