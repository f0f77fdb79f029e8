from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'proposals'

router = DefaultRouter()
router.register(r'', views.ProposalViewSet, basename='proposal')

urlpatterns = [
    # GET    /api/proposals/               - List proposals (?group=<id>&status=<status>)
    # POST   /api/proposals/               - Propose a bill
    # GET    /api/proposals/{id}/          - Get proposal with votes
    # POST   /api/proposals/{id}/vote/     - Cast a vote
    # POST   /api/proposals/{id}/execute/  - Execute approved proposal
    # GET    /api/proposals/{id}/votes/    - List votes
    path('', include(router.urls)),
]
