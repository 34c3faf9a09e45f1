from rest_framework.permissions import BasePermission
from rolepermissions.checkers import has_role


class IsAdmin(BasePermission):
    def has_permission(self, request, view):
        return request.user.is_authenticated and has_role(request.user, 'admin')


class IsManager(BasePermission):
    def has_permission(self, request, view):
        return request.user.is_authenticated and has_role(request.user, 'manager')


class IsAdminOrManager(BasePermission):
    def has_permission(self, request, view):
        return (
            request.user.is_authenticated and
            has_role(request.user, ['admin', 'manager'])
        )


class IsAdminManagerOrEmployee(BasePermission):
    """
    Any payroll role may call the endpoint. Employees are further limited to
    their own records by the service layer.
    """
    def has_permission(self, request, view):
        return (
            request.user.is_authenticated and
            has_role(request.user, ['admin', 'manager', 'employee'])
        )
