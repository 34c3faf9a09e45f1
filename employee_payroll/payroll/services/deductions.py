import logging
from decimal import Decimal

from django.db import transaction
from rest_framework.exceptions import NotFound
from employee_payroll.common.exceptions import Conflict
from employee_payroll.payroll.models import Deduction

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")


def percent_to_fraction(value) -> Decimal:
    return (Decimal(value) / HUNDRED).quantize(Decimal("0.0001"))


def fraction_to_percent(value) -> Decimal:
    return (Decimal(value) * HUNDRED).quantize(Decimal("0.01"))


class DeductionService:

    @staticmethod
    def list_rates() -> dict:
        """Current rule table as ``{name: fraction}``."""
        return {name: pct for name, pct in Deduction.objects.values_list("name", "percentage")}

    @staticmethod
    def get_by_code(code):
        try:
            return Deduction.objects.get(code=code)
        except Deduction.DoesNotExist:
            raise NotFound(f"Deduction with code '{code}' not found.")

    @staticmethod
    def _ensure_unique(code, name, exclude_pk=None):
        qs = Deduction.objects.all()
        if exclude_pk is not None:
            qs = qs.exclude(pk=exclude_pk)
        if qs.filter(code=code).exists():
            raise Conflict(f"Deduction with code '{code}' already exists.")
        if qs.filter(name=name).exists():
            raise Conflict(f"Deduction with name '{name}' already exists.")

    @staticmethod
    @transaction.atomic
    def create(*, code, name, percentage, actor=None):
        """``percentage`` is a fraction here; the API layer converts from 0-100."""
        DeductionService._ensure_unique(code, name)
        deduction = Deduction.objects.create(code=code, name=name, percentage=percentage)
        logger.info(f"Deduction {code} ({name}) created at {percentage} by {getattr(actor, 'email', 'system')}")
        return deduction

    @staticmethod
    @transaction.atomic
    def update(deduction, *, actor=None, **changes):
        code = changes.get("code", deduction.code)
        name = changes.get("name", deduction.name)
        DeductionService._ensure_unique(code, name, exclude_pk=deduction.pk)

        for field, value in changes.items():
            setattr(deduction, field, value)
        deduction.save()
        logger.info(f"Deduction {deduction.code} updated by {getattr(actor, 'email', 'system')}")
        return deduction

    @staticmethod
    def delete(deduction, *, actor=None):
        code = deduction.code
        deduction.delete()
        logger.info(f"Deduction {code} deleted by {getattr(actor, 'email', 'system')}")
