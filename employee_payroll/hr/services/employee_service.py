import logging

from django.db import transaction
from rest_framework.exceptions import NotFound
from employee_payroll.common.exceptions import Conflict
from employee_payroll.hr.models import Employee
from employee_payroll.users.permissions.business_permissions import ensure_can_access_employee
from employee_payroll.users.services.user_service import UserService

logger = logging.getLogger(__name__)


class EmployeeService:

    @staticmethod
    def list_active():
        """ACTIVE employees in a stable order, for payroll runs."""
        return Employee.objects.filter(status=Employee.Status.ACTIVE).select_related("user").order_by("id")

    @staticmethod
    def get(pk, actor=None):
        try:
            employee = Employee.objects.select_related("user").get(pk=pk)
        except Employee.DoesNotExist:
            raise NotFound(f"Employee with id {pk} not found.")
        ensure_can_access_employee(actor, employee)
        return employee

    @staticmethod
    def get_by_code(code, actor=None):
        try:
            employee = Employee.objects.select_related("user").get(code=code)
        except Employee.DoesNotExist:
            raise NotFound(f"Employee with code '{code}' not found.")
        ensure_can_access_employee(actor, employee)
        return employee

    @staticmethod
    @transaction.atomic
    def create(*, email, password, code, first_name, last_name, roles=None, actor=None, **profile):
        if Employee.objects.filter(code=code).exists():
            raise Conflict(f"Employee with code '{code}' already exists.")

        user = UserService.create_user(email=email, password=password)
        UserService.assign_roles(user, roles)

        employee = Employee.objects.create(
            user=user,
            code=code,
            first_name=first_name,
            last_name=last_name,
            **profile,
        )
        logger.info(f"Employee {employee.code} created by {getattr(actor, 'email', 'self-registration')}")
        return employee

    @staticmethod
    @transaction.atomic
    def update(employee, *, actor=None, email=None, password=None, roles=None, **changes):
        code = changes.get("code")
        if code and Employee.objects.filter(code=code).exclude(pk=employee.pk).exists():
            raise Conflict(f"Employee code '{code}' is already taken.")

        UserService.update_credentials(employee.user, email=email, password=password)
        if roles:
            UserService.assign_roles(employee.user, roles)

        for field, value in changes.items():
            setattr(employee, field, value)
        employee.save()
        logger.info(f"Employee {employee.code} updated by {getattr(actor, 'email', 'system')}")
        return employee

    @staticmethod
    def disable(employee, actor=None):
        employee.disable()
        logger.info(f"Employee {employee.code} disabled by {getattr(actor, 'email', 'system')}")
        return employee
