from __future__ import annotations
from datetime import date
from decimal import Decimal
from django.utils import timezone
from rest_framework import serializers
import bleach
from ..models import Employee, Employment
from employee_payroll.users.roles.base_roles import ROLE_NAMES
from employee_payroll.users.services.user_service import UserService


def _clean_name(value: str, label: str) -> str:
    cleaned = bleach.clean(value.strip(), tags=[], strip=True)
    if not 2 <= len(cleaned) <= 100:
        raise serializers.ValidationError(f"{label} must be between 2 and 100 characters.")
    return cleaned


class EmployeeSerializer(serializers.ModelSerializer):
    email = serializers.EmailField(max_length=100)
    password = serializers.CharField(write_only=True, required=False, min_length=6, max_length=120)
    roles = serializers.ListField(
        child=serializers.ChoiceField(choices=ROLE_NAMES),
        required=False,
        allow_empty=False,
        write_only=True,
    )

    class Meta:
        model = Employee
        fields = [
            "id",
            "code",
            "first_name",
            "last_name",
            "email",
            "password",
            "mobile",
            "date_of_birth",
            "status",
            "roles",
        ]
        read_only_fields = ["id"]
        # code uniqueness is reported as 409 by the service
        extra_kwargs = {"code": {"validators": []}}

    def to_representation(self, instance: Employee) -> dict:
        data = super().to_representation(instance)
        data["roles"] = UserService.get_role_names(instance.user)
        return data

    def validate_code(self, value: str) -> str:
        cleaned = bleach.clean(value.strip(), tags=[], strip=True)
        if not cleaned:
            raise serializers.ValidationError("Employee code cannot be blank.")
        return cleaned

    def validate_first_name(self, value: str) -> str:
        return _clean_name(value, "First name")

    def validate_last_name(self, value: str) -> str:
        return _clean_name(value, "Last name")

    def validate_email(self, value: str) -> str:
        return bleach.clean(value.strip(), tags=[], strip=True).lower()

    def validate_mobile(self, value: str) -> str:
        return bleach.clean(value.strip(), tags=[], strip=True)

    def validate_date_of_birth(self, value: date | None) -> date | None:
        if value and value > timezone.localdate():
            raise serializers.ValidationError("Date of birth cannot be in the future.")
        return value

    def validate(self, data):
        if self.instance is None and not data.get("password"):
            raise serializers.ValidationError({"password": "Password is required for new employees."})
        return data


class EmploymentSerializer(serializers.ModelSerializer):
    employee_id = serializers.PrimaryKeyRelatedField(
        source="employee", queryset=Employee.objects.all()
    )
    employee_code = serializers.CharField(source="employee.code", read_only=True)
    employee_first_name = serializers.CharField(source="employee.first_name", read_only=True)
    employee_last_name = serializers.CharField(source="employee.last_name", read_only=True)
    joining_date = serializers.DateField()

    class Meta:
        model = Employment
        fields = [
            "id",
            "code",
            "employee_id",
            "employee_code",
            "employee_first_name",
            "employee_last_name",
            "department",
            "position",
            "base_salary",
            "status",
            "joining_date",
        ]
        read_only_fields = ["id"]
        extra_kwargs = {"code": {"validators": []}}
        # Uniqueness of code and of the active employment is checked by EmploymentService.
        validators = []

    def validate_code(self, value: str) -> str:
        cleaned = bleach.clean(value.strip(), tags=[], strip=True)
        if not cleaned:
            raise serializers.ValidationError("Employment code cannot be blank.")
        return cleaned

    def validate_department(self, value: str) -> str:
        return bleach.clean(value.strip(), tags=[], strip=True)

    def validate_position(self, value: str) -> str:
        return bleach.clean(value.strip(), tags=[], strip=True)

    def validate_base_salary(self, value: Decimal) -> Decimal:
        if value < 0:
            raise serializers.ValidationError("Base salary must be a non-negative value.")
        return value

    def validate_joining_date(self, value: date) -> date:
        if value > timezone.localdate():
            raise serializers.ValidationError("Joining date cannot be in the future.")
        return value
