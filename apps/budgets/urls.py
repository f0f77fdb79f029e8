from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'budgets'

router = DefaultRouter()
router.register(r'', views.BudgetCategoryViewSet, basename='budget-category')

urlpatterns = [
    # GET    /api/budgets/?group=<id>   - List active categories of a group
    # POST   /api/budgets/              - Create category (admin)
    # GET    /api/budgets/{id}/         - Get category
    # PATCH  /api/budgets/{id}/         - Update category (admin)
    # DELETE /api/budgets/{id}/         - Deactivate category (admin)
    path('', include(router.urls)),
]
