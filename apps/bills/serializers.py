from decimal import Decimal

from rest_framework import serializers

from apps.accounts.serializers import UserMinimalSerializer
from .models import Bill, BillItem, Currency


class BillItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = BillItem
        fields = ['id', 'description', 'amount', 'quantity']
        read_only_fields = ['id']


class BillItemInputSerializer(serializers.Serializer):
    description = serializers.CharField(max_length=200)
    amount = serializers.DecimalField(max_digits=20, decimal_places=8, min_value=Decimal('0'))
    quantity = serializers.IntegerField(min_value=1, default=1)


class BillSerializer(serializers.ModelSerializer):
    """Full bill representation with items and proposal id."""

    created_by = UserMinimalSerializer(read_only=True)
    items = BillItemSerializer(many=True, read_only=True)
    proposal_id = serializers.SerializerMethodField()

    class Meta:
        model = Bill
        fields = [
            'id',
            'group',
            'created_by',
            'title',
            'description',
            'total_amount',
            'currency',
            'due_date',
            'payee_address',
            'category',
            'attachment_url',
            'status',
            'items',
            'proposal_id',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_proposal_id(self, obj):
        proposal = getattr(obj, 'proposal', None)
        return str(proposal.id) if proposal else None


class BillCreateSerializer(serializers.Serializer):
    """Input for creating a bill."""

    group_id = serializers.UUIDField()
    title = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    total_amount = serializers.DecimalField(
        max_digits=20, decimal_places=8, min_value=Decimal('0.00000001')
    )
    currency = serializers.ChoiceField(choices=Currency.choices, default=Currency.USDC)
    due_date = serializers.DateTimeField(required=False, allow_null=True)
    category_id = serializers.UUIDField(required=False, allow_null=True)
    attachment_url = serializers.URLField(max_length=500, required=False, allow_blank=True)
    payee_address = serializers.RegexField(
        regex=r'^0x[0-9a-fA-F]{40}$',
        error_messages={'invalid': 'Must be a 0x-prefixed 40 hex character address.'},
    )
    items = BillItemInputSerializer(many=True, required=False, default=list)


class BillUpdateSerializer(serializers.Serializer):
    """Input for updating a draft bill. Status is not writable."""

    title = serializers.CharField(max_length=200, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    total_amount = serializers.DecimalField(
        max_digits=20, decimal_places=8, min_value=Decimal('0.00000001'), required=False
    )
    currency = serializers.ChoiceField(choices=Currency.choices, required=False)
    due_date = serializers.DateTimeField(required=False, allow_null=True)
    category_id = serializers.UUIDField(required=False, allow_null=True)
    attachment_url = serializers.URLField(max_length=500, required=False, allow_blank=True)
    payee_address = serializers.RegexField(
        regex=r'^0x[0-9a-fA-F]{40}$',
        required=False,
        error_messages={'invalid': 'Must be a 0x-prefixed 40 hex character address.'},
    )
    items = BillItemInputSerializer(many=True, required=False)
