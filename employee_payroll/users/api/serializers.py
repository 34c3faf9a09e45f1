from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework import serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer
import bleach
import logging

from employee_payroll.hr.models import Employee
from employee_payroll.users.services.user_service import UserService

logger = logging.getLogger(__name__)
User = get_user_model()


class UserRegistrationSerializer(serializers.Serializer):
    """Self-registration. Always creates an employee with the ``employee`` role."""
    email = serializers.EmailField(max_length=100)
    password = serializers.CharField(write_only=True, min_length=8, max_length=120)
    confirm_password = serializers.CharField(write_only=True)
    code = serializers.CharField(max_length=50)
    first_name = serializers.CharField(max_length=100)
    last_name = serializers.CharField(max_length=100)
    mobile = serializers.CharField(max_length=20, required=False, allow_blank=True)
    date_of_birth = serializers.DateField(required=False, allow_null=True)

    def validate_email(self, value):
        return bleach.clean(value.strip(), tags=[], strip=True).lower()

    def validate_password(self, value):
        cleaned = bleach.clean(value.strip(), tags=[], strip=True)
        if not any(char.isupper() for char in cleaned):
            raise serializers.ValidationError("Password must contain at least one uppercase letter.")
        if not any(char.isdigit() for char in cleaned):
            raise serializers.ValidationError("Password must contain at least one digit.")
        return cleaned

    def validate_code(self, value):
        cleaned = bleach.clean(value.strip(), tags=[], strip=True)
        if not cleaned:
            raise serializers.ValidationError("Employee code cannot be blank.")
        return cleaned

    def validate_first_name(self, value):
        cleaned = bleach.clean(value.strip(), tags=[], strip=True)
        if len(cleaned) < 2:
            raise serializers.ValidationError("First name must be between 2 and 100 characters.")
        return cleaned

    def validate_last_name(self, value):
        cleaned = bleach.clean(value.strip(), tags=[], strip=True)
        if len(cleaned) < 2:
            raise serializers.ValidationError("Last name must be between 2 and 100 characters.")
        return cleaned

    def validate_mobile(self, value):
        return bleach.clean(value.strip(), tags=[], strip=True)

    def validate_date_of_birth(self, value):
        if value and value > timezone.localdate():
            raise serializers.ValidationError("Date of birth cannot be in the future.")
        return value

    def validate(self, data):
        if data['password'] != data['confirm_password']:
            raise serializers.ValidationError({"confirm_password": "Passwords do not match."})
        return data


class RegisteredEmployeeSerializer(serializers.ModelSerializer):
    email = serializers.EmailField(read_only=True)

    class Meta:
        model = Employee
        fields = ['id', 'code', 'first_name', 'last_name', 'email', 'status']
        read_only_fields = fields


class LoginSerializer(TokenObtainPairSerializer):
    """Adds the caller's employee code, email and roles to the token pair."""

    def validate(self, attrs):
        data = super().validate(attrs)
        employee = getattr(self.user, 'employee_profile', None)
        data['code'] = employee.code if employee else None
        data['email'] = self.user.email
        data['roles'] = UserService.get_role_names(self.user)
        logger.info(f"User logged in: {self.user.email}")
        return data
