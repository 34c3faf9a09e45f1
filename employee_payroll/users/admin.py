from django.contrib import admin
from django.contrib.auth import get_user_model
from rolepermissions.admin import RolePermissionsUserAdmin
from rolepermissions.checkers import has_role
from rolepermissions.roles import get_user_roles
from employee_payroll.users.services.user_service import UserService

User = get_user_model()

# Unregister User first
try:
    admin.site.unregister(User)
except admin.sites.NotRegistered:
    pass


@admin.register(User)
class CustomUserAdmin(RolePermissionsUserAdmin):
    ordering = ("email",)
    list_display = ("email", "is_active", "is_staff", "get_roles")
    search_fields = ("email",)
    list_filter = ("is_active", "is_staff")
    actions = ['assign_employee_role', 'assign_manager_role', 'assign_admin_role']

    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        ('Permissions', {'fields': ('is_active', 'is_staff', 'is_superuser')}),
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'password1', 'password2', 'is_active', 'is_staff'),
        }),
    )

    def get_roles(self, obj):
        return ", ".join([role.get_name() for role in get_user_roles(obj)])

    get_roles.short_description = "Roles"

    def _assign_role(self, request, queryset, role_name):
        if not has_role(request.user, 'admin'):
            self.message_user(request, "Only admins can assign roles.", level='error')
            return
        for user in queryset:
            UserService.assign_roles(user, [role_name])
            self.message_user(request, f"Assigned {role_name} role to {user.email}")

    def assign_employee_role(self, request, queryset):
        self._assign_role(request, queryset, 'employee')

    assign_employee_role.short_description = "Assign Employee role"

    def assign_manager_role(self, request, queryset):
        self._assign_role(request, queryset, 'manager')

    assign_manager_role.short_description = "Assign Manager role"

    def assign_admin_role(self, request, queryset):
        self._assign_role(request, queryset, 'admin')

    assign_admin_role.short_description = "Assign Admin role"
