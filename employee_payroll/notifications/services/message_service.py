import logging

from django.conf import settings
from django.utils import timezone
from rest_framework.exceptions import NotFound
from employee_payroll.notifications.models import Message
from employee_payroll.users.permissions.business_permissions import ensure_can_access_employee

logger = logging.getLogger(__name__)


def compose_salary_message(payslip):
    employee = payslip.employee
    return (
        f"Dear {employee.first_name}, your salary for {payslip.month}/{payslip.year} "
        f"from {settings.PAYROLL_INSTITUTION_NAME} amounting to {payslip.net_salary:.2f} "
        f"{settings.PAYROLL_CURRENCY} has been credited to your account {employee.code} successfully."
    )


class MessageService:

    @staticmethod
    def record_for_payslip(payslip):
        message = Message.objects.create(
            employee=payslip.employee,
            message=compose_salary_message(payslip),
            month=payslip.month,
            year=payslip.year,
            sent_date=timezone.localdate(),
        )
        logger.info(f"Message recorded for {payslip.employee.code} ({payslip.month}/{payslip.year})")
        return message

    @staticmethod
    def get(pk, actor=None):
        try:
            message = Message.objects.select_related("employee").get(pk=pk)
        except Message.DoesNotExist:
            raise NotFound(f"Message with id {pk} not found.")
        ensure_can_access_employee(actor, message.employee, resource="messages")
        return message

    @staticmethod
    def list_for_employee(employee, actor=None):
        ensure_can_access_employee(actor, employee, resource="messages")
        return Message.objects.filter(employee=employee).select_related("employee").order_by("-year", "-month", "-id")
