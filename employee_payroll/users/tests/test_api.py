import pytest
from rolepermissions.checkers import has_role

from employee_payroll.hr.models import Employee


@pytest.fixture
def registration_payload():
    return {
        "email": "Jean@Payroll.test",
        "password": "Secret123",
        "confirm_password": "Secret123",
        "code": "REG001",
        "first_name": "Jean",
        "last_name": "Habimana",
    }


@pytest.mark.django_db
class TestRegistration:

    def test_register_creates_employee_with_employee_role(self, api_client, registration_payload):
        response = api_client.post("/api/auth/register/", registration_payload, format="json")

        assert response.status_code == 201
        assert response.data["code"] == "REG001"
        employee = Employee.objects.get(code="REG001")
        assert employee.user.email == "jean@payroll.test"
        assert has_role(employee.user, "employee")
        assert not has_role(employee.user, ["manager", "admin"])

    def test_roles_in_payload_are_ignored(self, api_client, registration_payload):
        response = api_client.post(
            "/api/auth/register/", {**registration_payload, "roles": ["admin"]}, format="json"
        )

        assert response.status_code == 201
        assert not has_role(Employee.objects.get(code="REG001").user, "admin")

    def test_password_mismatch(self, api_client, registration_payload):
        registration_payload["confirm_password"] = "Other1234"

        response = api_client.post("/api/auth/register/", registration_payload, format="json")

        assert response.status_code == 400
        assert "confirm_password" in response.data

    def test_weak_password(self, api_client, registration_payload):
        registration_payload["password"] = registration_payload["confirm_password"] = "alllowercase"

        response = api_client.post("/api/auth/register/", registration_payload, format="json")

        assert response.status_code == 400

    def test_duplicate_email_returns_409(self, api_client, employee, registration_payload):
        registration_payload["email"] = employee.email

        response = api_client.post("/api/auth/register/", registration_payload, format="json")

        assert response.status_code == 409
        assert not Employee.objects.filter(code="REG001").exists()


@pytest.mark.django_db
class TestLogin:

    def test_login_returns_tokens_code_and_roles(self, api_client, employee):
        response = api_client.post(
            "/api/auth/login/", {"email": employee.email, "password": "Secret123"}, format="json"
        )

        assert response.status_code == 200
        assert "access" in response.data
        assert "refresh" in response.data
        assert response.data["code"] == employee.code
        assert response.data["email"] == employee.email
        assert response.data["roles"] == ["employee"]

    def test_wrong_password(self, api_client, employee):
        response = api_client.post(
            "/api/auth/login/", {"email": employee.email, "password": "wrong"}, format="json"
        )

        assert response.status_code == 401

    def test_refresh_token(self, api_client, employee):
        login = api_client.post(
            "/api/auth/login/", {"email": employee.email, "password": "Secret123"}, format="json"
        )

        response = api_client.post(
            "/api/auth/token/refresh/", {"refresh": login.data["refresh"]}, format="json"
        )

        assert response.status_code == 200
        assert "access" in response.data

    def test_access_token_authenticates_requests(self, api_client, employee):
        login = api_client.post(
            "/api/auth/login/", {"email": employee.email, "password": "Secret123"}, format="json"
        )
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['access']}")

        assert api_client.get(f"/api/employees/{employee.id}/").status_code == 200
