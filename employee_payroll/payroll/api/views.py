from rest_framework import viewsets, mixins, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, extend_schema_view, OpenApiResponse
from employee_payroll.hr.services.employee_service import EmployeeService
from employee_payroll.payroll.api.serializers import (DeductionSerializer, PayrollPeriodSerializer,
                                                      PayslipSerializer)
from employee_payroll.payroll.models import Deduction
from employee_payroll.payroll.selectors.payroll_queries import (get_payslip, get_employee_payslips,
                                                                get_period_payslips)
from employee_payroll.payroll.services.deductions import DeductionService
from employee_payroll.payroll.services.payroll_approval import approve_payroll
from employee_payroll.payroll.services.payroll_runner import generate_payroll
from employee_payroll.users.permissions.drf_permissions import (IsAdmin, IsManager, IsAdminOrManager,
                                                                IsAdminManagerOrEmployee)

@extend_schema_view(
    list=extend_schema(
        tags=["Deductions"],
        summary="List deduction rules",
        description="All deduction and allowance rules. Percentages are returned on a 0-100 scale.",
    ),
    retrieve=extend_schema(
        tags=["Deductions"],
        summary="Retrieve a deduction rule",
    ),
    create=extend_schema(
        tags=["Deductions"],
        summary="Create a deduction rule",
        description="Code and name must both be unique. Send the percentage on a 0-100 scale.",
        responses={201: DeductionSerializer, 409: OpenApiResponse(description="Duplicate code or name.")},
    ),
    destroy=extend_schema(
        tags=["Deductions"],
        summary="Delete a deduction rule",
    ),
)
class DeductionViewSet(mixins.CreateModelMixin,
                       mixins.ListModelMixin,
                       mixins.RetrieveModelMixin,
                       mixins.DestroyModelMixin,
                       viewsets.GenericViewSet):
    queryset = Deduction.objects.all().order_by("id")
    serializer_class = DeductionSerializer
    lookup_value_regex = r"\d+"

    def get_permissions(self):
        if self.action in ("list", "retrieve"):
            return [IsAuthenticated(), IsAdminOrManager()]
        return [IsAuthenticated(), IsManager()]

    def perform_create(self, serializer):
        serializer.instance = DeductionService.create(actor=self.request.user, **serializer.validated_data)

    def perform_destroy(self, instance):
        DeductionService.delete(instance, actor=self.request.user)

    @extend_schema(
        tags=["Deductions"],
        summary="Update a deduction rule by code",
        request=DeductionSerializer,
        responses={200: DeductionSerializer, 404: OpenApiResponse(description="Unknown code.")},
    )
    @action(detail=False, methods=["put"], url_path=r"code/(?P<code>[^/]+)")
    def update_by_code(self, request, code=None):
        deduction = DeductionService.get_by_code(code)
        serializer = self.get_serializer(deduction, data=request.data)
        serializer.is_valid(raise_exception=True)
        deduction = DeductionService.update(deduction, actor=request.user, **serializer.validated_data)
        return Response(self.get_serializer(deduction).data)

class PayslipViewSet(viewsets.GenericViewSet):
    serializer_class = PayslipSerializer
    lookup_value_regex = r"\d+"

    def get_permissions(self):
        if self.action == "generate":
            return [IsAuthenticated(), IsManager()]
        if self.action == "approve":
            return [IsAuthenticated(), IsAdmin()]
        if self.action == "by_period":
            return [IsAuthenticated(), IsAdminOrManager()]
        return [IsAuthenticated(), IsAdminManagerOrEmployee()]

    @extend_schema(
        tags=["Payslips"],
        summary="Retrieve a payslip",
        description="Employees may only read their own payslips.",
        responses={200: PayslipSerializer},
    )
    def retrieve(self, request, pk=None):
        payslip = get_payslip(pk, actor=request.user)
        return Response(self.get_serializer(payslip).data)

    @extend_schema(
        tags=["Payslips"],
        summary="Generate payroll for a period",
        description=(
            "Create a PENDING payslip for every active employee with an active employment. "
            "Pending payslips of the same period are replaced. Fails with 409 once the "
            "period has been approved and with 422 if any employee's deductions exceed "
            "their gross salary."
        ),
        request=PayrollPeriodSerializer,
        responses={
            201: PayslipSerializer(many=True),
            409: OpenApiResponse(description="Period already approved."),
            422: OpenApiResponse(description="Deductions exceed gross salary."),
        },
    )
    @action(detail=False, methods=["post"])
    def generate(self, request):
        period = PayrollPeriodSerializer(data=request.data)
        period.is_valid(raise_exception=True)
        payslips = generate_payroll(actor=request.user, **period.validated_data)
        return Response(self.get_serializer(payslips, many=True).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        tags=["Payslips"],
        summary="Approve payroll for a period",
        description=(
            "Mark every payslip of the period as PAID, record a notification message per "
            "employee and email them once the approval is committed."
        ),
        request=None,
        responses={
            200: PayslipSerializer(many=True),
            404: OpenApiResponse(description="No payslips for the period."),
            409: OpenApiResponse(description="Period already approved."),
        },
    )
    @action(detail=False, methods=["put"], url_path=r"approve/(?P<month>\d+)/(?P<year>\d+)")
    def approve(self, request, month=None, year=None):
        payslips = approve_payroll(month=int(month), year=int(year), actor=request.user)
        return Response(self.get_serializer(payslips, many=True).data)

    @extend_schema(
        tags=["Payslips"],
        summary="List an employee's payslips",
        responses={200: PayslipSerializer(many=True)},
    )
    @action(detail=False, methods=["get"], url_path=r"employee/(?P<employee_id>\d+)")
    def by_employee(self, request, employee_id=None):
        employee = EmployeeService.get(int(employee_id), actor=request.user)
        payslips = get_employee_payslips(employee, actor=request.user)
        return Response(self.get_serializer(payslips, many=True).data)

    @extend_schema(
        tags=["Payslips"],
        summary="List payslips of a period",
        responses={200: PayslipSerializer(many=True)},
    )
    @action(detail=False, methods=["get"], url_path=r"month/(?P<month>\d+)/year/(?P<year>\d+)")
    def by_period(self, request, month=None, year=None):
        payslips = get_period_payslips(int(month), int(year))
        return Response(self.get_serializer(payslips, many=True).data)
