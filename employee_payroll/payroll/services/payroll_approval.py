import logging

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound
from employee_payroll.common.exceptions import Conflict, DeliveryError
from employee_payroll.notifications.services.email_service import send_payslip_email
from employee_payroll.notifications.services.message_service import MessageService
from employee_payroll.payroll.models import Payslip
from employee_payroll.payroll.services.periods import validate_period, lock_period

logger = logging.getLogger(__name__)


def _notify(pairs):
    for payslip, message in pairs:
        try:
            send_payslip_email(payslip, message.message)
        except DeliveryError as exc:
            logger.warning(f"Payslip {payslip.pk} approved but notification failed: {exc}")


@transaction.atomic
def approve_payroll(*, month, year, actor=None):
    """
    Move every PENDING payslip of (month, year) to PAID and record a message
    for each employee. Emails go out only after the transaction commits, and
    a failed email never undoes the approval.
    """
    validate_period(month, year)
    period = lock_period(month, year)

    payslips = list(
        Payslip.objects.filter(month=month, year=year).select_related("employee__user").order_by("id")
    )
    if not payslips:
        raise NotFound(f"No payslips found for {month}/{year}.")

    if any(not payslip.is_pending for payslip in payslips):
        raise Conflict(f"Payroll for {month}/{year} has already been approved.")

    today = timezone.localdate()
    pairs = []
    for payslip in payslips:
        payslip.mark_paid(today)
        payslip.save(update_fields=["status", "approval_date"])
        pairs.append((payslip, MessageService.record_for_payslip(payslip)))

    period.approved_at = timezone.now()
    period.save(update_fields=["approved_at"])

    transaction.on_commit(lambda: _notify(pairs))

    logger.info(
        f"Approved {len(payslips)} payslip(s) for {month}/{year} "
        f"by {getattr(actor, 'email', 'system')}"
    )
    return payslips
