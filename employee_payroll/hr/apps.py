from django.apps import AppConfig


class HrConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "employee_payroll.hr"
    label = "hr"
    verbose_name = "Human Resources"
