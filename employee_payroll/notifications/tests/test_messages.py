from smtplib import SMTPException
from unittest.mock import patch

import pytest
from django.core import mail

from employee_payroll.common.exceptions import DeliveryError
from employee_payroll.notifications.models import Message
from employee_payroll.notifications.services.email_service import send_payslip_email
from employee_payroll.notifications.services.message_service import MessageService, compose_salary_message
from employee_payroll.payroll.models import Payslip
from employee_payroll.payroll.services.payroll_runner import generate_payroll


@pytest.fixture
def payslip(employee, make_employment, safe_deductions):
    make_employment(employee, base_salary="100000.00")
    generate_payroll(month=6, year=2025)
    return Payslip.objects.get(employee=employee, month=6, year=2025)


@pytest.mark.django_db
class TestMessageService:

    def test_compose_uses_institution_and_currency(self, payslip, settings):
        settings.PAYROLL_INSTITUTION_NAME = "Acme Ltd"
        settings.PAYROLL_CURRENCY = "USD"

        text = compose_salary_message(payslip)

        assert text == (
            f"Dear Alice, your salary for 6/2025 from Acme Ltd amounting to 112000.00 USD "
            f"has been credited to your account {payslip.employee.code} successfully."
        )

    def test_record_for_payslip(self, payslip):
        message = MessageService.record_for_payslip(payslip)

        assert message.employee == payslip.employee
        assert (message.month, message.year) == (6, 2025)
        assert Message.objects.count() == 1


@pytest.mark.django_db
class TestEmailService:

    def test_sends_templated_email(self, payslip):
        send_payslip_email(payslip, "hello")

        assert len(mail.outbox) == 1
        assert mail.outbox[0].to == [payslip.employee.email]
        assert "hello" in mail.outbox[0].body

    def test_transport_failure_raises_delivery_error(self, payslip):
        with patch("templated_mail.mail.BaseEmailMessage.send", side_effect=SMTPException("down")):
            with pytest.raises(DeliveryError):
                send_payslip_email(payslip, "hello")


@pytest.mark.django_db
class TestMessageEndpoints:

    def test_employee_reads_own_messages(self, api_client, payslip, make_employee):
        own = MessageService.record_for_payslip(payslip)
        other = make_employee()
        other_message = Message.objects.create(employee=other, message="x", month=6, year=2025)
        api_client.force_authenticate(user=payslip.employee.user)

        response = api_client.get(f"/api/messages/{own.id}/")
        assert response.status_code == 200
        assert response.data["employee_code"] == payslip.employee.code

        assert api_client.get(f"/api/messages/{other_message.id}/").status_code == 403

        response = api_client.get(f"/api/messages/employee/{payslip.employee.id}/")
        assert response.status_code == 200
        assert [row["id"] for row in response.data] == [own.id]

        assert api_client.get(f"/api/messages/employee/{other.id}/").status_code == 403

    def test_manager_reads_any_employee_messages(self, api_client, manager, payslip):
        MessageService.record_for_payslip(payslip)
        api_client.force_authenticate(user=manager.user)

        response = api_client.get(f"/api/messages/employee/{payslip.employee.id}/")

        assert response.status_code == 200
        assert len(response.data) == 1

    def test_unknown_message_returns_404(self, api_client, manager):
        api_client.force_authenticate(user=manager.user)

        assert api_client.get("/api/messages/9999/").status_code == 404
