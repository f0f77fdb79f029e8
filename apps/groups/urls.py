from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'groups'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.GroupViewSet, basename='group')

urlpatterns = [
    # Group ViewSet routes
    # GET    /api/groups/              - List user's groups
    # POST   /api/groups/              - Create group
    # GET    /api/groups/{id}/         - Get group details
    # PUT    /api/groups/{id}/         - Update group (admin)
    # PATCH  /api/groups/{id}/         - Partial update (admin)
    # DELETE /api/groups/{id}/         - Deactivate group (admin)

    # Custom group actions
    # GET    /api/groups/{id}/members/              - List members
    # POST   /api/groups/{id}/leave/                - Leave group
    # POST   /api/groups/{id}/invite/               - Issue invite links (admin)
    # POST   /api/groups/{id}/update_member_role/   - Update member role (admin)
    # POST   /api/groups/{id}/remove_member/        - Remove member (admin)

    # Additional endpoints
    path('my/', views.my_groups, name='my-groups'),
    path('join/', views.join_group, name='join'),

    # Include router URLs
    path('', include(router.urls)),
]
