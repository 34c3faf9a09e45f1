from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema
from .serializers import MessageSerializer
from employee_payroll.hr.services.employee_service import EmployeeService
from employee_payroll.notifications.services.message_service import MessageService
from employee_payroll.users.permissions.drf_permissions import IsAdminManagerOrEmployee


class MessageViewSet(viewsets.GenericViewSet):
    """Read-only access to salary notifications. Messages are written by payroll approval."""
    serializer_class = MessageSerializer
    permission_classes = [IsAuthenticated, IsAdminManagerOrEmployee]
    lookup_value_regex = r"\d+"

    @extend_schema(
        tags=["Messages"],
        summary="Retrieve a message",
        description="Employees may only read their own messages.",
        responses={200: MessageSerializer},
    )
    def retrieve(self, request, pk=None):
        message = MessageService.get(pk, actor=request.user)
        return Response(self.get_serializer(message).data)

    @extend_schema(
        tags=["Messages"],
        summary="List an employee's messages",
        description="Newest period first.",
        responses={200: MessageSerializer(many=True)},
    )
    @action(detail=False, methods=["get"], url_path=r"employee/(?P<employee_id>\d+)")
    def by_employee(self, request, employee_id=None):
        employee = EmployeeService.get(int(employee_id), actor=request.user)
        messages = MessageService.list_for_employee(employee, actor=request.user)
        return Response(self.get_serializer(messages, many=True).data)
