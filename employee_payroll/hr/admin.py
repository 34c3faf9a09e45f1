from django.contrib import admin
from .models import Employee, Employment


class EmploymentInline(admin.TabularInline):
    model = Employment
    extra = 0
    fields = ("code", "department", "position", "base_salary", "status", "joining_date")


@admin.register(Employee)
class EmployeeAdmin(admin.ModelAdmin):
    list_display = ("id", "code", "first_name", "last_name", "user", "status", "created_at")
    search_fields = ("code", "first_name", "last_name", "user__email")
    list_filter = ("status",)
    readonly_fields = ("created_at", "updated_at")
    inlines = [EmploymentInline]


@admin.register(Employment)
class EmploymentAdmin(admin.ModelAdmin):
    list_display = ("id", "code", "employee", "department", "position", "base_salary", "status", "joining_date")
    search_fields = ("code", "employee__code", "employee__user__email", "department")
    list_filter = ("status", "department")
