import re

from rest_framework import serializers

from apps.accounts.serializers import UserMinimalSerializer
from .models import Group, GroupMembership, GroupRole


ADDRESS_RE = re.compile(r'^0x[0-9a-fA-F]{40}$')


def validate_address(value):
    if value and not ADDRESS_RE.match(value):
        raise serializers.ValidationError("Must be a 0x-prefixed 40 hex character address.")
    return value


class GroupMemberSerializer(serializers.ModelSerializer):
    """Detailed member information."""

    user = UserMinimalSerializer(read_only=True)

    class Meta:
        model = GroupMembership
        fields = ['id', 'user', 'role', 'is_active', 'joined_at']
        read_only_fields = fields


class GroupSerializer(serializers.ModelSerializer):
    """Main serializer for groups."""

    member_count = serializers.SerializerMethodField()
    user_role = serializers.SerializerMethodField()

    class Meta:
        model = Group
        fields = [
            'id',
            'name',
            'description',
            'voting_threshold',
            'smart_account_address',
            'member_count',
            'user_role',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_member_count(self, obj):
        """Get number of active members in the group."""
        return obj.active_memberships().count()

    def get_user_role(self, obj):
        """Get current user's role in the group."""
        request = self.context.get('request')
        if request and request.user.is_authenticated:
            return obj.get_user_role(request.user)
        return None


class GroupListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    member_count = serializers.SerializerMethodField()

    class Meta:
        model = Group
        fields = [
            'id',
            'name',
            'description',
            'voting_threshold',
            'member_count',
            'created_at',
        ]
        read_only_fields = fields

    def get_member_count(self, obj):
        return obj.active_memberships().count()


class GroupCreateSerializer(serializers.Serializer):
    """Input for creating a group."""

    name = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    voting_threshold = serializers.IntegerField(min_value=1, max_value=100, required=False)
    member_emails = serializers.ListField(
        child=serializers.EmailField(),
        required=False,
        default=list,
    )
    smart_account_address = serializers.CharField(
        max_length=42, required=False, allow_blank=True, allow_null=True,
        validators=[validate_address],
    )


class GroupUpdateSerializer(serializers.Serializer):
    """Input for updating a group; all fields optional."""

    name = serializers.CharField(max_length=200, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    voting_threshold = serializers.IntegerField(min_value=1, max_value=100, required=False)
    smart_account_address = serializers.CharField(
        max_length=42, required=False, allow_blank=True,
        validators=[validate_address],
    )


class InviteMembersSerializer(serializers.Serializer):
    emails = serializers.ListField(child=serializers.EmailField(), min_length=1)


class InviteSerializer(serializers.Serializer):
    email = serializers.EmailField()
    token = serializers.CharField()
    invite_url = serializers.CharField()


class JoinGroupSerializer(serializers.Serializer):
    """Serializer for joining a group with an invite token."""

    token = serializers.CharField(required=True)


class UpdateMemberRoleSerializer(serializers.Serializer):
    """Serializer for updating member role."""

    user_id = serializers.UUIDField(required=True)
    role = serializers.ChoiceField(choices=GroupRole.choices, required=True)


class MemberIdSerializer(serializers.Serializer):
    user_id = serializers.UUIDField(required=True)
