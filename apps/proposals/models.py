# ==========================================
# apps/proposals/models.py
# ==========================================

from django.db import models
import uuid


class ProposalStatus(models.TextChoices):
    PENDING = 'PENDING', 'Pending'
    APPROVED = 'APPROVED', 'Approved'
    REJECTED = 'REJECTED', 'Rejected'
    EXECUTED = 'EXECUTED', 'Executed'
    EXPIRED = 'EXPIRED', 'Expired'
    CANCELLED = 'CANCELLED', 'Cancelled'


class VoteType(models.TextChoices):
    FOR = 'FOR', 'For'
    AGAINST = 'AGAINST', 'Against'
    ABSTAIN = 'ABSTAIN', 'Abstain'


class Proposal(models.Model):
    """
    A request for the group to approve paying one bill.

    A bill has at most one proposal, ever (unique bill).
    Vote counters mirror the Vote rows and are recomputed on every vote.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    bill = models.OneToOneField('bills.Bill', on_delete=models.CASCADE, related_name='proposal')
    group = models.ForeignKey('groups.Group', on_delete=models.CASCADE, related_name='proposals')
    created_by = models.ForeignKey('accounts.User', on_delete=models.PROTECT, related_name='created_proposals')
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    status = models.CharField(max_length=20, choices=ProposalStatus.choices, default=ProposalStatus.PENDING)
    votes_for = models.PositiveIntegerField(default=0)
    votes_against = models.PositiveIntegerField(default=0)
    votes_abstain = models.PositiveIntegerField(default=0)
    voting_deadline = models.DateTimeField()
    executed_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'proposals'
        indexes = [
            models.Index(fields=['group', 'status'], name='proposals_group_i_2b8d51_idx'),
            models.Index(fields=['status', 'voting_deadline'], name='proposals_status_6c0e93_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.title} ({self.status})"

    @property
    def total_votes(self):
        return self.votes_for + self.votes_against + self.votes_abstain


class Vote(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    proposal = models.ForeignKey(Proposal, on_delete=models.CASCADE, related_name='votes')
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='votes')
    vote_type = models.CharField(max_length=10, choices=VoteType.choices)
    comment = models.TextField(blank=True)
    voted_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'votes'
        constraints = [
            models.UniqueConstraint(fields=['proposal', 'user'], name='unique_vote_per_user'),
        ]
        ordering = ['voted_at']

    def __str__(self):
        return f"{self.user} voted {self.vote_type}"
