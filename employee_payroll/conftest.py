from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rolepermissions.roles import assign_role

from employee_payroll.hr.models import Employee, Employment
from employee_payroll.payroll.models import Deduction

User = get_user_model()

SAFE_RATES = {
    "Employee Tax": Decimal("0.10"),
    "Pension": Decimal("0.03"),
    "MedicalInsurance": Decimal("0.02"),
    "Others": Decimal("0.01"),
    "Housing": Decimal("0.14"),
    "Transport": Decimal("0.14"),
}


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_employee(db):
    counter = {"n": 0}

    def _make(role="employee", code=None, first_name="Jane", last_name="Doe", status=Employee.Status.ACTIVE):
        counter["n"] += 1
        n = counter["n"]
        user = User.objects.create_user(email=f"user{n}@payroll.test", password="Secret123")
        if role:
            assign_role(user, role)
        return Employee.objects.create(
            user=user,
            code=code or f"EMP{n:03d}",
            first_name=first_name,
            last_name=last_name,
            status=status,
        )

    return _make


@pytest.fixture
def make_employment(db):
    counter = {"n": 0}

    def _make(employee, base_salary="100000.00", status=Employment.Status.ACTIVE, code=None):
        counter["n"] += 1
        return Employment.objects.create(
            code=code or f"EMPL{counter['n']:03d}",
            employee=employee,
            department="Finance",
            position="Accountant",
            base_salary=Decimal(base_salary),
            status=status,
        )

    return _make


@pytest.fixture
def employee(make_employee):
    return make_employee(role="employee", first_name="Alice", last_name="Uwase")


@pytest.fixture
def manager(make_employee):
    return make_employee(role="manager", first_name="Mark", last_name="Manager")


@pytest.fixture
def admin(make_employee):
    return make_employee(role="admin", first_name="Ada", last_name="Admin")


@pytest.fixture
def safe_deductions(db):
    return [
        Deduction.objects.create(code=f"D{i}", name=name, percentage=pct)
        for i, (name, pct) in enumerate(SAFE_RATES.items(), start=1)
    ]
