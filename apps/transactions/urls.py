from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'transactions'

router = DefaultRouter()
router.register(r'', views.TransactionViewSet, basename='transaction')

urlpatterns = [
    # GET    /api/transactions/                - List transactions (?group=<id>&status=&type=)
    # POST   /api/transactions/                - Create transaction
    # GET    /api/transactions/{id}/           - Get transaction
    # POST   /api/transactions/{id}/refresh/   - Reconcile with gateway
    path('', include(router.urls)),
]
