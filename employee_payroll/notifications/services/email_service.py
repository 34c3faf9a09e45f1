import logging
from smtplib import SMTPException

from django.conf import settings
from templated_mail.mail import BaseEmailMessage
from employee_payroll.common.exceptions import DeliveryError

logger = logging.getLogger(__name__)


def send_payslip_email(payslip, message_text):
    """Email an approved payslip summary to its employee. Raises DeliveryError."""
    employee = payslip.employee
    to = employee.email
    logger.info(f"Preparing payslip email for {employee.code} to {to}")
    try:
        BaseEmailMessage(
            template_name='email/payslip_approved.html',
            context={
                'message': message_text,
                'month': payslip.month,
                'year': payslip.year,
                'gross_salary': f"{payslip.gross_salary:.2f}",
                'total_deductions': f"{payslip.total_deductions:.2f}",
                'net_salary': f"{payslip.net_salary:.2f}",
                'approval_date': payslip.approval_date,
                'institution': settings.PAYROLL_INSTITUTION_NAME,
                'currency': settings.PAYROLL_CURRENCY,
            }
        ).send(to=[to])
    except (SMTPException, OSError) as exc:
        logger.error(f"Failed to send payslip email to {to}: {exc}")
        raise DeliveryError(f"Failed to send email to {to}") from exc
    logger.info(f"Payslip email sent to {to}")
