from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'bills'

router = DefaultRouter()
router.register(r'', views.BillViewSet, basename='bill')

urlpatterns = [
    # GET    /api/bills/              - List bills (?group=<id>&status=<status>)
    # POST   /api/bills/              - Create bill
    # GET    /api/bills/{id}/         - Get bill
    # PUT    /api/bills/{id}/         - Update draft bill
    # PATCH  /api/bills/{id}/         - Partial update of draft bill
    # DELETE /api/bills/{id}/         - Cancel bill
    path('', include(router.urls)),
]
