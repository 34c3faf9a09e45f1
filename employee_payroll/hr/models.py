from django.db import models
from django.db.models import Q
from django.utils import timezone
from employee_payroll.common.exceptions import Conflict
from employee_payroll.users.models import User


class Employee(models.Model):
    class Status(models.TextChoices):
        ACTIVE = "ACTIVE", "Active"
        DISABLED = "DISABLED", "Disabled"

    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='employee_profile')
    code = models.CharField(max_length=50, unique=True)
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    mobile = models.CharField(max_length=20, blank=True)
    date_of_birth = models.DateField(null=True, blank=True)
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.ACTIVE)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.code} - {self.get_full_name()}"

    @property
    def email(self):
        return self.user.email

    @property
    def is_active(self):
        return self.status == self.Status.ACTIVE

    def get_full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    def disable(self):
        """Soft delete: the record stays, it just drops out of payroll runs."""
        self.status = self.Status.DISABLED
        self.save(update_fields=['status', 'updated_at'])

    class Meta:
        ordering = ['id']
        verbose_name = 'Employee'
        verbose_name_plural = 'Employees'


class Employment(models.Model):
    class Status(models.TextChoices):
        ACTIVE = "ACTIVE", "Active"
        INACTIVE = "INACTIVE", "Inactive"

    code = models.CharField(max_length=50, unique=True)
    employee = models.ForeignKey(Employee, on_delete=models.CASCADE, related_name='employments')
    department = models.CharField(max_length=100)
    position = models.CharField(max_length=100)
    base_salary = models.DecimalField(max_digits=12, decimal_places=2)
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.ACTIVE)
    joining_date = models.DateField(default=timezone.localdate)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Employment {self.code} for {self.employee} [{self.status}]"

    @property
    def is_active(self):
        return self.status == self.Status.ACTIVE

    def activate(self):
        """Mark as ACTIVE. An employee may hold only one active employment."""
        others = Employment.objects.filter(employee=self.employee, status=self.Status.ACTIVE)
        if self.pk is not None:
            others = others.exclude(pk=self.pk)
        if others.exists():
            raise Conflict(f"Employee {self.employee.code} already has an active employment.")
        self.status = self.Status.ACTIVE

    def deactivate(self):
        self.status = self.Status.INACTIVE

    class Meta:
        ordering = ['id']
        constraints = [
            models.UniqueConstraint(
                fields=["employee"],
                condition=Q(status="ACTIVE"),
                name="unique_active_employment_per_employee",
            )
        ]
