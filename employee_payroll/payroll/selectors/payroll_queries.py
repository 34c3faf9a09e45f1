from rest_framework.exceptions import NotFound
from employee_payroll.payroll.models import Payslip
from employee_payroll.users.permissions.business_permissions import ensure_can_access_employee


def _payslips():
    return Payslip.objects.select_related("employee")


def get_payslip(pk, actor=None):
    try:
        payslip = _payslips().get(pk=pk)
    except Payslip.DoesNotExist:
        raise NotFound(f"Payslip with id {pk} not found.")
    ensure_can_access_employee(actor, payslip.employee, resource="payslips")
    return payslip


def get_employee_payslips(employee, actor=None):
    ensure_can_access_employee(actor, employee, resource="payslips")
    return _payslips().filter(employee=employee).order_by("-year", "-month")


def get_period_payslips(month, year):
    return _payslips().filter(month=month, year=year).order_by("id")
