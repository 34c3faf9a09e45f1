from django.db import models
from django.utils import timezone
from employee_payroll.hr.models import Employee


class Message(models.Model):
    """Payroll notification sent to an employee. Rows are only ever appended."""
    employee = models.ForeignKey(Employee, on_delete=models.CASCADE, related_name='messages')
    message = models.TextField()
    month = models.PositiveSmallIntegerField()
    year = models.PositiveSmallIntegerField()
    sent_date = models.DateField(default=timezone.localdate)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['id']
        indexes = [
            models.Index(fields=['employee', 'year', 'month'], name='message_employee_period_idx'),
        ]

    def __str__(self):
        return f"Message to {self.employee}: {self.message[:50]}"
