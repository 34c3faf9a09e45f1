from django.db import models
from employee_payroll.common.exceptions import Conflict
from employee_payroll.hr.models import Employee


class Deduction(models.Model):
    """A named rate applied to base salary. ``percentage`` is a fraction (0.05 == 5%)."""
    code = models.CharField(max_length=50, unique=True)
    name = models.CharField(max_length=100, unique=True)
    percentage = models.DecimalField(max_digits=5, decimal_places=4)

    def __str__(self):
        return f"{self.name} ({self.percentage * 100:.2f}%)"

    class Meta:
        ordering = ['id']


class PayrollPeriod(models.Model):
    """
    One row per (month, year). Generation and approval lock it with
    select_for_update so two runs for the same period never interleave.
    """
    month = models.PositiveSmallIntegerField()
    year = models.PositiveSmallIntegerField()
    last_generated_at = models.DateTimeField(null=True, blank=True)
    approved_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.month:02d}/{self.year}"

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["month", "year"],
                name="unique_payroll_period"
            )
        ]


class Payslip(models.Model):
    class Status(models.TextChoices):
        PENDING = "PENDING", "Pending"
        PAID = "PAID", "Paid"

    employee = models.ForeignKey(Employee, on_delete=models.CASCADE, related_name='payslips')

    base_salary_at_generation = models.DecimalField(max_digits=12, decimal_places=2)
    house_amount = models.DecimalField(max_digits=12, decimal_places=2)
    transport_amount = models.DecimalField(max_digits=12, decimal_places=2)
    employee_taxed_amount = models.DecimalField(max_digits=12, decimal_places=2)
    pension_amount = models.DecimalField(max_digits=12, decimal_places=2)
    medical_insurance_amount = models.DecimalField(max_digits=12, decimal_places=2)
    other_taxed_amount = models.DecimalField(max_digits=12, decimal_places=2)
    total_deductions = models.DecimalField(max_digits=12, decimal_places=2)
    gross_salary = models.DecimalField(max_digits=12, decimal_places=2)
    net_salary = models.DecimalField(max_digits=12, decimal_places=2)

    month = models.PositiveSmallIntegerField()
    year = models.PositiveSmallIntegerField()
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.PENDING)
    generation_date = models.DateField()
    approval_date = models.DateField(null=True, blank=True)

    def __str__(self):
        return f"Payslip {self.month:02d}/{self.year} for {self.employee} [{self.status}]"

    @property
    def is_pending(self):
        return self.status == self.Status.PENDING

    def mark_paid(self, on):
        # PAID is terminal
        if not self.is_pending:
            raise Conflict(f"Payslip {self.pk} is already {self.status}.")
        self.status = self.Status.PAID
        self.approval_date = on

    class Meta:
        ordering = ['id']
        constraints = [
            models.UniqueConstraint(
                fields=["employee", "month", "year"],
                name="unique_payslip_per_employee_period"
            )
        ]
        indexes = [
            models.Index(fields=['month', 'year'], name='payslip_period_idx'),
        ]
