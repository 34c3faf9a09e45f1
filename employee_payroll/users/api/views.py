from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.views import TokenObtainPairView
from drf_spectacular.utils import extend_schema, OpenApiResponse
from .serializers import UserRegistrationSerializer, RegisteredEmployeeSerializer, LoginSerializer
from employee_payroll.hr.services.employee_service import EmployeeService
from employee_payroll.users.roles.base_roles import Employee as EmployeeRole
import logging

logger = logging.getLogger(__name__)


@extend_schema(
    tags=["Authentication"],
    summary="Log in",
    description="Exchange email and password for an access/refresh token pair, plus the caller's code and roles.",
)
class LoginView(TokenObtainPairView):
    serializer_class = LoginSerializer


class RegisterView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        tags=["Authentication"],
        summary="Register an employee account",
        description="Public sign-up. New accounts always get the `employee` role.",
        request=UserRegistrationSerializer,
        responses={
            201: RegisteredEmployeeSerializer,
            409: OpenApiResponse(description="Email or employee code already in use."),
        },
    )
    def post(self, request):
        serializer = UserRegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        data.pop('confirm_password')
        employee = EmployeeService.create(roles=[EmployeeRole.role_name], **data)
        logger.info(f"Employee registered: {employee.code}")
        return Response(RegisteredEmployeeSerializer(employee).data, status=status.HTTP_201_CREATED)
