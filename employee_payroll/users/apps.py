from django.apps import AppConfig


class UsersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "employee_payroll.users"
    label = "users"
    verbose_name = "Users"
