from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'recurring'

router = DefaultRouter()
router.register(r'', views.RecurringBillViewSet, basename='recurring-bill')

urlpatterns = [
    # GET    /api/recurring/?group=<id>   - List active schedules of a group
    # POST   /api/recurring/              - Create schedule (admin)
    # GET    /api/recurring/{id}/         - Get schedule
    # PATCH  /api/recurring/{id}/         - Update schedule (admin)
    # DELETE /api/recurring/{id}/         - Deactivate schedule (admin)
    path('', include(router.urls)),
]
