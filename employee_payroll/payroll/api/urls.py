from rest_framework.routers import DefaultRouter
from employee_payroll.payroll.api.views import DeductionViewSet, PayslipViewSet

router = DefaultRouter()
router.register("deductions", DeductionViewSet, basename="deduction")
router.register("payslips", PayslipViewSet, basename="payslip")

urlpatterns = [
    *router.urls,
]
