from decimal import Decimal

import pytest
from django.core import mail

from employee_payroll.payroll.models import Deduction, Payslip
from employee_payroll.payroll.services.payroll_runner import generate_payroll


@pytest.mark.django_db
class TestDeductionEndpoints:

    def test_manager_creates_deduction_with_percent_scale(self, api_client, manager):
        api_client.force_authenticate(user=manager.user)

        response = api_client.post(
            "/api/deductions/", {"code": "PEN", "name": "Pension", "percentage": "3"}, format="json"
        )

        assert response.status_code == 201
        assert response.data["percentage"] == "3.00"
        assert Deduction.objects.get(code="PEN").percentage == Decimal("0.0300")

    def test_duplicate_name_returns_409(self, api_client, manager, safe_deductions):
        api_client.force_authenticate(user=manager.user)

        response = api_client.post(
            "/api/deductions/", {"code": "X1", "name": "Pension", "percentage": "3"}, format="json"
        )

        assert response.status_code == 409

    def test_percentage_above_hundred_rejected(self, api_client, manager):
        api_client.force_authenticate(user=manager.user)

        response = api_client.post(
            "/api/deductions/", {"code": "X1", "name": "Solidarity", "percentage": "120"}, format="json"
        )

        assert response.status_code == 400

    def test_update_by_code(self, api_client, manager, safe_deductions):
        api_client.force_authenticate(user=manager.user)

        response = api_client.put(
            "/api/deductions/code/D2/", {"code": "D2", "name": "Pension", "percentage": "5"}, format="json"
        )

        assert response.status_code == 200
        assert Deduction.objects.get(code="D2").percentage == Decimal("0.0500")

    def test_update_unknown_code_returns_404(self, api_client, manager):
        api_client.force_authenticate(user=manager.user)

        response = api_client.put(
            "/api/deductions/code/NOPE/", {"code": "NOPE", "name": "Nope", "percentage": "5"}, format="json"
        )

        assert response.status_code == 404

    def test_admin_can_list_but_not_create(self, api_client, admin, safe_deductions):
        api_client.force_authenticate(user=admin.user)

        assert api_client.get("/api/deductions/").status_code == 200
        response = api_client.post(
            "/api/deductions/", {"code": "X1", "name": "Solidarity", "percentage": "1"}, format="json"
        )
        assert response.status_code == 403

    def test_employee_cannot_list(self, api_client, employee):
        api_client.force_authenticate(user=employee.user)

        assert api_client.get("/api/deductions/").status_code == 403


@pytest.mark.django_db
class TestPayslipEndpoints:

    def test_manager_generates_payroll(self, api_client, manager, employee, make_employment, safe_deductions):
        make_employment(employee, base_salary="100000.00")
        api_client.force_authenticate(user=manager.user)

        response = api_client.post("/api/payslips/generate/", {"month": 6, "year": 2025}, format="json")

        assert response.status_code == 201
        assert len(response.data) == 1
        assert response.data[0]["employee_code"] == employee.code
        assert response.data[0]["net_salary"] == "112000.00"
        assert response.data[0]["status"] == "PENDING"

    def test_generate_with_excessive_deductions_returns_422(self, api_client, manager, employee, make_employment):
        make_employment(employee, base_salary="100000.00")
        api_client.force_authenticate(user=manager.user)

        response = api_client.post("/api/payslips/generate/", {"month": 6, "year": 2025}, format="json")

        assert response.status_code == 422
        assert response.data["employee_code"] == employee.code
        assert not Payslip.objects.exists()

    def test_generate_invalid_month_returns_400(self, api_client, manager):
        api_client.force_authenticate(user=manager.user)

        response = api_client.post("/api/payslips/generate/", {"month": 13, "year": 2025}, format="json")

        assert response.status_code == 400

    def test_employee_cannot_generate(self, api_client, employee):
        api_client.force_authenticate(user=employee.user)

        response = api_client.post("/api/payslips/generate/", {"month": 6, "year": 2025}, format="json")

        assert response.status_code == 403

    def test_admin_approves_and_emails_go_out(
        self, api_client, admin, employee, make_employment, safe_deductions, django_capture_on_commit_callbacks
    ):
        make_employment(employee)
        generate_payroll(month=6, year=2025)
        api_client.force_authenticate(user=admin.user)

        with django_capture_on_commit_callbacks(execute=True):
            response = api_client.put("/api/payslips/approve/6/2025/")

        assert response.status_code == 200
        assert response.data[0]["status"] == "PAID"
        assert len(mail.outbox) == 1

    def test_approve_twice_returns_409(
        self, api_client, admin, employee, make_employment, safe_deductions, django_capture_on_commit_callbacks
    ):
        make_employment(employee)
        generate_payroll(month=6, year=2025)
        api_client.force_authenticate(user=admin.user)

        with django_capture_on_commit_callbacks(execute=True):
            api_client.put("/api/payslips/approve/6/2025/")
        response = api_client.put("/api/payslips/approve/6/2025/")

        assert response.status_code == 409

    def test_approve_empty_period_returns_404(self, api_client, admin):
        api_client.force_authenticate(user=admin.user)

        assert api_client.put("/api/payslips/approve/2/2025/").status_code == 404

    def test_manager_cannot_approve(self, api_client, manager):
        api_client.force_authenticate(user=manager.user)

        assert api_client.put("/api/payslips/approve/6/2025/").status_code == 403

    def test_employee_reads_own_payslip_only(
        self, api_client, make_employee, make_employment, safe_deductions
    ):
        owner = make_employee()
        other = make_employee()
        make_employment(owner)
        make_employment(other)
        generate_payroll(month=6, year=2025)
        own_slip = Payslip.objects.get(employee=owner)
        other_slip = Payslip.objects.get(employee=other)
        api_client.force_authenticate(user=owner.user)

        assert api_client.get(f"/api/payslips/{own_slip.id}/").status_code == 200
        assert api_client.get(f"/api/payslips/{other_slip.id}/").status_code == 403
        assert api_client.get(f"/api/payslips/employee/{owner.id}/").status_code == 200
        assert api_client.get(f"/api/payslips/employee/{other.id}/").status_code == 403

    def test_unknown_payslip_returns_404(self, api_client, manager):
        api_client.force_authenticate(user=manager.user)

        assert api_client.get("/api/payslips/9999/").status_code == 404

    def test_period_listing_for_managers(self, api_client, manager, employee, make_employment, safe_deductions):
        make_employment(employee)
        generate_payroll(month=6, year=2025)
        api_client.force_authenticate(user=manager.user)

        response = api_client.get("/api/payslips/month/6/year/2025/")

        assert response.status_code == 200
        assert [row["employee_id"] for row in response.data] == [employee.id]

    def test_period_listing_forbidden_for_employees(self, api_client, employee):
        api_client.force_authenticate(user=employee.user)

        assert api_client.get("/api/payslips/month/6/year/2025/").status_code == 403

    def test_unauthenticated_requests_rejected(self, api_client):
        assert api_client.get("/api/payslips/month/6/year/2025/").status_code == 401
