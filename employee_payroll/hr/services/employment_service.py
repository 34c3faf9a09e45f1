import logging

from django.db import transaction
from rest_framework.exceptions import NotFound
from employee_payroll.common.exceptions import Conflict
from employee_payroll.hr.models import Employment
from employee_payroll.users.permissions.business_permissions import ensure_can_access_employee

logger = logging.getLogger(__name__)


def find_active_employment(employee):
    return Employment.objects.filter(employee=employee, status=Employment.Status.ACTIVE).first()


class EmploymentService:

    @staticmethod
    def get(pk, actor=None):
        try:
            employment = Employment.objects.select_related("employee").get(pk=pk)
        except Employment.DoesNotExist:
            raise NotFound(f"Employment with id {pk} not found.")
        ensure_can_access_employee(actor, employment.employee, resource="employment records")
        return employment

    @staticmethod
    @transaction.atomic
    def create(*, code, employee, actor=None, **data):
        if Employment.objects.filter(code=code).exists():
            raise Conflict(f"Employment with code '{code}' already exists.")

        status = data.pop("status", Employment.Status.ACTIVE)
        employment = Employment(code=code, employee=employee, **data)
        if status == Employment.Status.ACTIVE:
            employment.activate()
        else:
            employment.deactivate()
        employment.save()
        logger.info(f"Employment {code} created for {employee.code} by {getattr(actor, 'email', 'system')}")
        return employment

    @staticmethod
    @transaction.atomic
    def update(employment, *, actor=None, **changes):
        code = changes.get("code")
        if code and Employment.objects.filter(code=code).exclude(pk=employment.pk).exists():
            raise Conflict(f"Employment code '{code}' is already taken.")

        status = changes.pop("status", employment.status)
        for field, value in changes.items():
            setattr(employment, field, value)
        # Re-checked even when the status is unchanged, the employee may have moved.
        if status == Employment.Status.ACTIVE:
            employment.activate()
        else:
            employment.deactivate()
        employment.save()
        logger.info(f"Employment {employment.code} updated by {getattr(actor, 'email', 'system')}")
        return employment

    @staticmethod
    def delete(employment, actor=None):
        code = employment.code
        employment.delete()
        logger.info(f"Employment {code} deleted by {getattr(actor, 'email', 'system')}")
