from django.contrib import admin
from employee_payroll.payroll.models import Deduction, PayrollPeriod, Payslip


@admin.register(Deduction)
class DeductionAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "percentage")
    search_fields = ("code", "name")


@admin.register(PayrollPeriod)
class PayrollPeriodAdmin(admin.ModelAdmin):
    list_display = ("month", "year", "last_generated_at", "approved_at")
    ordering = ("-year", "-month")


@admin.register(Payslip)
class PayslipAdmin(admin.ModelAdmin):
    list_display = (
        "employee",
        "month",
        "year",
        "gross_salary",
        "total_deductions",
        "net_salary",
        "status",
        "approval_date",
    )
    list_filter = ("status", "year", "month")
    search_fields = ("employee__code", "employee__user__email")
    readonly_fields = ("generation_date", "approval_date")
