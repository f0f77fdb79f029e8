from rest_framework import viewsets, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from .serializers import (
    GroupSerializer,
    GroupCreateSerializer,
    GroupUpdateSerializer,
    GroupListSerializer,
    GroupMemberSerializer,
    InviteMembersSerializer,
    InviteSerializer,
    JoinGroupSerializer,
    UpdateMemberRoleSerializer,
    MemberIdSerializer,
)

from apps.groups.services import (
    create_group,
    update_group,
    deactivate_group,
    get_group_by_id,
    get_user_groups,
    require_membership,
    leave_group,
    remove_member,
    get_group_members,
    update_member_role,
    create_invites,
    join_group_with_token,
)


class GroupPagination(PageNumberPagination):
    """Custom pagination for groups."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class GroupViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Group operations.

    All business logic is handled by services; domain errors propagate
    to the API exception handler.

    list: Get all groups the user is an active member of
    create: Create a new group (creator becomes admin)
    retrieve: Get a specific group (members only)
    update / partial_update: Update a group (admin only)
    destroy: Deactivate a group (admin only)
    """

    serializer_class = GroupSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = GroupPagination
    lookup_value_regex = '[0-9a-fA-F-]{36}'
    http_method_names = ['get', 'post', 'put', 'patch', 'delete', 'head', 'options']

    def get_queryset(self):
        """Return only groups where user is an active member."""
        return get_user_groups(user=self.request.user)

    def get_serializer_class(self):
        if self.action == 'list':
            return GroupListSerializer
        elif self.action == 'create':
            return GroupCreateSerializer
        elif self.action in ['update', 'partial_update']:
            return GroupUpdateSerializer
        return GroupSerializer

    def create(self, request, *args, **kwargs):
        """Create a new group."""
        serializer = GroupCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        group = create_group(creator=request.user, **serializer.validated_data)

        output_serializer = GroupSerializer(group, context={'request': request})
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, *args, **kwargs):
        group = get_group_by_id(group_id=self.kwargs['pk'])
        require_membership(user=request.user, group_id=group.id)
        serializer = GroupSerializer(group, context={'request': request})
        return Response(serializer.data)

    def update(self, request, *args, **kwargs):
        serializer = GroupUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        group = update_group(
            group_id=self.kwargs['pk'],
            user=request.user,
            **serializer.validated_data
        )
        return Response(GroupSerializer(group, context={'request': request}).data)

    def partial_update(self, request, *args, **kwargs):
        return self.update(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        """Deactivate a group."""
        deactivate_group(group_id=self.kwargs['pk'], user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['get'])
    def members(self, request, pk=None):
        """Get all active members of the group."""
        memberships = get_group_members(group_id=pk, user=request.user)
        serializer = GroupMemberSerializer(memberships, many=True)
        return Response(serializer.data)

    @extend_schema(request=None, responses={204: None})
    @action(detail=True, methods=['post'])
    def leave(self, request, pk=None):
        """Leave a group."""
        leave_group(group_id=pk, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=InviteMembersSerializer, responses={201: InviteSerializer(many=True)})
    @action(detail=True, methods=['post'])
    def invite(self, request, pk=None):
        """Issue invite links for a list of emails (admin only)."""
        serializer = InviteMembersSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        invites = create_invites(
            group_id=pk,
            inviter=request.user,
            emails=serializer.validated_data['emails']
        )
        return Response(InviteSerializer(invites, many=True).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=UpdateMemberRoleSerializer, responses={200: GroupMemberSerializer})
    @action(detail=True, methods=['post'])
    def update_member_role(self, request, pk=None):
        """Update member's role (admin only)."""
        serializer = UpdateMemberRoleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        membership = update_member_role(
            group_id=pk,
            user_id=serializer.validated_data['user_id'],
            new_role=serializer.validated_data['role'],
            updated_by=request.user
        )
        return Response(GroupMemberSerializer(membership).data)

    @extend_schema(request=MemberIdSerializer, responses={204: None})
    @action(detail=True, methods=['post'])
    def remove_member(self, request, pk=None):
        """Remove a member from the group (admin only)."""
        serializer = MemberIdSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        remove_member(
            group_id=pk,
            user_id=serializer.validated_data['user_id'],
            removed_by=request.user
        )
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    request=JoinGroupSerializer,
    responses={201: GroupMemberSerializer},
    description="Join a group with a signed invite token.",
    tags=['groups'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def join_group(request):
    """Accept an invite token."""
    serializer = JoinGroupSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    membership = join_group_with_token(
        user=request.user,
        token=serializer.validated_data['token']
    )
    return Response(GroupMemberSerializer(membership).data, status=status.HTTP_201_CREATED)


@extend_schema(
    responses={200: GroupListSerializer(many=True)},
    description="Get all groups where the current user is an active member.",
    tags=['groups'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_groups(request):
    """Get all groups where user is a member."""
    groups = get_user_groups(user=request.user)
    serializer = GroupListSerializer(groups, many=True, context={'request': request})
    return Response(serializer.data)
