from rest_framework import status
from rest_framework.exceptions import APIException


class Conflict(APIException):
    """Request clashes with the current state (duplicate codes, approved periods)."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = "The request conflicts with the current state of the resource."
    default_code = "conflict"


class ExcessiveDeductions(APIException):
    """
    Computed deductions exceed the gross salary of an employee.

    Keeps the figures on the instance so callers and logs can report them.
    """
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_code = "excessive_deductions"

    def __init__(self, employee_code, total_deductions, gross_salary):
        self.employee_code = employee_code
        self.total_deductions = total_deductions
        self.gross_salary = gross_salary
        super().__init__(
            detail={
                "detail": (
                    f"Total deductions ({total_deductions:.2f}) exceed gross salary "
                    f"({gross_salary:.2f}) for employee {employee_code}"
                ),
                "employee_code": employee_code,
                "total_deductions": f"{total_deductions:.2f}",
                "gross_salary": f"{gross_salary:.2f}",
            }
        )


class DeliveryError(Exception):
    """Notification transport failure. Never surfaced to API clients."""
