from django.utils import timezone
from rest_framework import serializers

from apps.accounts.serializers import UserMinimalSerializer
from .models import Proposal, Vote, VoteType
from .services import calculate_approval_percentage


class VoteSerializer(serializers.ModelSerializer):
    user = UserMinimalSerializer(read_only=True)

    class Meta:
        model = Vote
        fields = ['id', 'user', 'vote_type', 'comment', 'voted_at']
        read_only_fields = fields


class ProposalSerializer(serializers.ModelSerializer):
    """Proposal with tallies and the current approval percentage."""

    created_by = UserMinimalSerializer(read_only=True)
    bill_status = serializers.CharField(source='bill.status', read_only=True)
    total_votes = serializers.IntegerField(read_only=True)
    approval_percentage = serializers.SerializerMethodField()

    class Meta:
        model = Proposal
        fields = [
            'id',
            'bill',
            'bill_status',
            'group',
            'created_by',
            'title',
            'description',
            'status',
            'votes_for',
            'votes_against',
            'votes_abstain',
            'total_votes',
            'approval_percentage',
            'voting_deadline',
            'executed_at',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_approval_percentage(self, obj):
        return float(round(calculate_approval_percentage(obj), 2))


class ProposalDetailSerializer(ProposalSerializer):
    votes = VoteSerializer(many=True, read_only=True)

    class Meta(ProposalSerializer.Meta):
        fields = ProposalSerializer.Meta.fields + ['votes']
        read_only_fields = fields


class ProposalCreateSerializer(serializers.Serializer):
    """Input for proposing a bill."""

    bill_id = serializers.UUIDField()
    title = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    voting_deadline = serializers.DateTimeField(required=False)

    def validate_voting_deadline(self, value):
        if value <= timezone.now():
            raise serializers.ValidationError("Voting deadline must be in the future.")
        return value


class CastVoteSerializer(serializers.Serializer):
    """
    Input for voting.

    Either the boolean is_approved (FOR/AGAINST) or an explicit vote_type,
    which is the only way to abstain.
    """

    is_approved = serializers.BooleanField(required=False, allow_null=True, default=None)
    vote_type = serializers.ChoiceField(choices=VoteType.choices, required=False)
    comment = serializers.CharField(required=False, allow_blank=True, default='')

    def validate(self, attrs):
        if attrs.get('is_approved') is None and not attrs.get('vote_type'):
            raise serializers.ValidationError("Provide either is_approved or vote_type.")
        return attrs


class VoteResultSerializer(serializers.Serializer):
    vote = VoteSerializer()
    proposal = ProposalSerializer()
