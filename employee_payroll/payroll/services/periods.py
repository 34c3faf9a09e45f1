from rest_framework.exceptions import ValidationError
from employee_payroll.payroll.models import PayrollPeriod

MIN_YEAR = 2000


def validate_period(month, year):
    errors = {}
    if not isinstance(month, int) or not 1 <= month <= 12:
        errors["month"] = "Month must be between 1 and 12."
    if not isinstance(year, int) or year < MIN_YEAR:
        errors["year"] = f"Year must be {MIN_YEAR} or later."
    if errors:
        raise ValidationError(errors)


def lock_period(month, year):
    """Create on first use, then hold a row lock until the transaction ends."""
    PayrollPeriod.objects.get_or_create(month=month, year=year)
    return PayrollPeriod.objects.select_for_update().get(month=month, year=year)
