# ==========================================
# apps/proposals/admin.py
# ==========================================

from django.contrib import admin
from apps.proposals.models import Proposal, Vote


class VoteInline(admin.TabularInline):
    model = Vote
    extra = 0
    fields = ['user', 'vote_type', 'comment', 'voted_at']
    readonly_fields = ['user', 'vote_type', 'comment', 'voted_at']

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Proposal)
class ProposalAdmin(admin.ModelAdmin):
    """Admin interface for Proposals."""

    list_display = [
        'title',
        'group',
        'status',
        'votes_for',
        'votes_against',
        'votes_abstain',
        'voting_deadline',
        'created_at'
    ]
    list_filter = ['status', 'created_at']
    search_fields = ['title', 'group__name', 'bill__title', 'created_by__email']
    # Counters only change through voting
    readonly_fields = ['votes_for', 'votes_against', 'votes_abstain', 'executed_at', 'created_at', 'updated_at']
    inlines = [VoteInline]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('group', 'bill', 'created_by')
