from rest_framework.routers import DefaultRouter
from .views import EmployeeViewSet, EmploymentViewSet

router = DefaultRouter()
router.register(r'employees', EmployeeViewSet, basename='employee')
router.register(r'employments', EmploymentViewSet, basename='employment')

urlpatterns = router.urls
