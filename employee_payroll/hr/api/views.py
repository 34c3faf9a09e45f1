from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rolepermissions.checkers import has_role
from drf_spectacular.utils import extend_schema_view, extend_schema, OpenApiResponse
from ..models import Employee, Employment
from .serializers import EmployeeSerializer, EmploymentSerializer
from employee_payroll.hr.services.employee_service import EmployeeService
from employee_payroll.hr.services.employment_service import EmploymentService
from employee_payroll.users.permissions.drf_permissions import (IsManager, IsAdminOrManager,
                                                                IsAdminManagerOrEmployee)

@extend_schema_view(
    list=extend_schema(
        tags=["Employees"],
        summary="List all employees",
        description="Every employee record, including disabled ones.",
    ),
    retrieve=extend_schema(
        tags=["Employees"],
        summary="Retrieve employee details",
        description="Employees may only read their own record.",
    ),
    create=extend_schema(
        tags=["Employees"],
        summary="Add a new employee",
        description="Creates the login account and the employee record. Roles default to `employee`.",
        responses={201: EmployeeSerializer, 409: OpenApiResponse(description="Duplicate email or code.")},
    ),
    update=extend_schema(
        tags=["Employees"],
        summary="Update employee information",
        description="Password is only changed when provided. Only admins may change roles.",
    ),
    partial_update=extend_schema(
        tags=["Employees"],
        summary="Partially update employee information",
    ),
    destroy=extend_schema(
        tags=["Employees"],
        summary="Disable an employee",
        description="Soft delete: the status becomes DISABLED and the employee drops out of payroll runs.",
    ),
)
class EmployeeViewSet(viewsets.ModelViewSet):
    queryset = Employee.objects.select_related("user").all()
    serializer_class = EmployeeSerializer
    lookup_value_regex = r"\d+"

    def get_permissions(self):
        if self.action == "create":
            return [IsAuthenticated(), IsManager()]
        if self.action in ("retrieve", "by_code"):
            return [IsAuthenticated(), IsAdminManagerOrEmployee()]
        return [IsAuthenticated(), IsAdminOrManager()]

    def retrieve(self, request, *args, **kwargs):
        employee = EmployeeService.get(kwargs["pk"], actor=request.user)
        return Response(self.get_serializer(employee).data)

    def perform_create(self, serializer):
        serializer.instance = EmployeeService.create(actor=self.request.user, **serializer.validated_data)

    def perform_update(self, serializer):
        if "roles" in serializer.validated_data and not has_role(self.request.user, 'admin'):
            raise PermissionDenied("Only admins can change employee roles.")
        serializer.instance = EmployeeService.update(
            serializer.instance, actor=self.request.user, **serializer.validated_data
        )

    def destroy(self, request, *args, **kwargs):
        employee = self.get_object()
        EmployeeService.disable(employee, actor=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        tags=["Employees"],
        summary="Retrieve an employee by code",
        description="Employees may only read their own record.",
        responses={200: EmployeeSerializer, 404: OpenApiResponse(description="Unknown code.")},
    )
    @action(detail=False, methods=["get"], url_path=r"code/(?P<code>[^/]+)")
    def by_code(self, request, code=None):
        employee = EmployeeService.get_by_code(code, actor=request.user)
        return Response(self.get_serializer(employee).data)

@extend_schema_view(
    list=extend_schema(
        tags=["Employments"],
        summary="List all employments",
    ),
    retrieve=extend_schema(
        tags=["Employments"],
        summary="Retrieve an employment",
        description="Employees may only read their own employment records.",
    ),
    create=extend_schema(
        tags=["Employments"],
        summary="Create an employment",
        description="An employee can hold at most one ACTIVE employment.",
        responses={201: EmploymentSerializer, 409: OpenApiResponse(description="Duplicate code or second active employment.")},
    ),
    update=extend_schema(
        tags=["Employments"],
        summary="Update an employment",
    ),
    partial_update=extend_schema(
        tags=["Employments"],
        summary="Partially update an employment",
    ),
    destroy=extend_schema(
        tags=["Employments"],
        summary="Delete an employment",
    ),
)
class EmploymentViewSet(viewsets.ModelViewSet):
    queryset = Employment.objects.select_related("employee").all()
    serializer_class = EmploymentSerializer
    lookup_value_regex = r"\d+"

    def get_permissions(self):
        if self.action == "retrieve":
            return [IsAuthenticated(), IsAdminManagerOrEmployee()]
        return [IsAuthenticated(), IsAdminOrManager()]

    def retrieve(self, request, *args, **kwargs):
        employment = EmploymentService.get(kwargs["pk"], actor=request.user)
        return Response(self.get_serializer(employment).data)

    def perform_create(self, serializer):
        serializer.instance = EmploymentService.create(actor=self.request.user, **serializer.validated_data)

    def perform_update(self, serializer):
        serializer.instance = EmploymentService.update(
            serializer.instance, actor=self.request.user, **serializer.validated_data
        )

    def perform_destroy(self, instance):
        EmploymentService.delete(instance, actor=self.request.user)
