from rest_framework.exceptions import PermissionDenied
from rolepermissions.checkers import has_role


def is_limited_to_own_records(user) -> bool:
    """Employees without a manager or admin role only see their own data."""
    return has_role(user, 'employee') and not has_role(user, ['manager', 'admin'])


def ensure_can_access_employee(actor, employee, resource="data"):
    """
    Raise PermissionDenied when ``actor`` is an employee-only user looking at
    another employee's records.
    """
    if actor is None or not is_limited_to_own_records(actor):
        return
    if employee.user_id != actor.pk:
        raise PermissionDenied(f"You are not authorized to access other employees' {resource}.")
