from rest_framework import viewsets, status, serializers
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.proposals.models import Proposal
from .serializers import (
    ProposalSerializer,
    ProposalDetailSerializer,
    ProposalCreateSerializer,
    CastVoteSerializer,
    VoteSerializer,
    VoteResultSerializer,
)
from .services import (
    create_proposal,
    vote_on_proposal,
    execute_proposal,
    get_proposal_by_id,
    get_group_proposals,
)


class ProposalPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class ProposalViewSet(viewsets.ModelViewSet):
    """
    ViewSet for proposals and voting.

    list: Proposals of the user's groups, or of one group (?group=)
    create: Propose a DRAFT bill
    retrieve: Get a proposal with its votes
    vote: Cast a vote
    execute: Execute an approved proposal (admin or creator)
    """

    serializer_class = ProposalSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = ProposalPagination
    lookup_value_regex = '[0-9a-fA-F-]{36}'
    http_method_names = ['get', 'post', 'head', 'options']

    def get_queryset(self):
        group_id = self.request.query_params.get('group')
        if group_id:
            return get_group_proposals(
                group_id=serializers.UUIDField().run_validation(group_id),
                user=self.request.user,
                status=self.request.query_params.get('status'),
            )
        return (
            Proposal.objects
            .filter(
                group__is_active=True,
                group__memberships__user=self.request.user,
                group__memberships__is_active=True,
            )
            .select_related('bill', 'created_by')
            .distinct()
            .order_by('-created_at')
        )

    def get_serializer_class(self):
        if self.action == 'create':
            return ProposalCreateSerializer
        elif self.action == 'retrieve':
            return ProposalDetailSerializer
        return ProposalSerializer

    @extend_schema(parameters=[
        OpenApiParameter('group', str, description='Only proposals of this group'),
        OpenApiParameter('status', str, description='Filter by proposal status (with group)'),
    ])
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(request=ProposalCreateSerializer, responses={201: ProposalSerializer})
    def create(self, request, *args, **kwargs):
        serializer = ProposalCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        proposal = create_proposal(user=request.user, **serializer.validated_data)
        return Response(ProposalSerializer(proposal).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, *args, **kwargs):
        proposal = get_proposal_by_id(proposal_id=self.kwargs['pk'], user=request.user)
        return Response(ProposalDetailSerializer(proposal).data)

    @extend_schema(request=CastVoteSerializer, responses={201: VoteResultSerializer})
    @action(detail=True, methods=['post'])
    def vote(self, request, pk=None):
        """Cast a vote on the proposal."""
        serializer = CastVoteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        vote = vote_on_proposal(
            user=request.user,
            proposal_id=pk,
            is_approved=serializer.validated_data.get('is_approved'),
            vote_type=serializer.validated_data.get('vote_type'),
            comment=serializer.validated_data['comment'],
        )
        return Response(
            {
                'vote': VoteSerializer(vote).data,
                'proposal': ProposalSerializer(vote.proposal).data,
            },
            status=status.HTTP_201_CREATED
        )

    @extend_schema(request=None, responses={200: ProposalSerializer})
    @action(detail=True, methods=['post'])
    def execute(self, request, pk=None):
        """Execute an approved proposal."""
        proposal = execute_proposal(user=request.user, proposal_id=pk)
        return Response(ProposalSerializer(proposal).data)

    @extend_schema(responses={200: VoteSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def votes(self, request, pk=None):
        """List the votes cast on the proposal."""
        proposal = get_proposal_by_id(proposal_id=pk, user=request.user)
        return Response(VoteSerializer(proposal.votes.all(), many=True).data)
