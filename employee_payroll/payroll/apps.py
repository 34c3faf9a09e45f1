from django.apps import AppConfig


class PayrollConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "employee_payroll.payroll"
    label = "payroll"
    verbose_name = "Payroll"
