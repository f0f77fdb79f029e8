from decimal import Decimal

from rest_framework import serializers

from apps.accounts.serializers import UserMinimalSerializer
from apps.bills.models import Currency
from .models import Transaction, TransactionType


class TransactionSerializer(serializers.ModelSerializer):
    sender = UserMinimalSerializer(read_only=True)
    receiver = UserMinimalSerializer(read_only=True)
    intent_id = serializers.CharField(read_only=True)
    destination = serializers.CharField(read_only=True)

    class Meta:
        model = Transaction
        fields = [
            'id',
            'bill',
            'group',
            'sender',
            'receiver',
            'amount',
            'currency',
            'tx_hash',
            'status',
            'type',
            'description',
            'destination',
            'intent_id',
            'metadata',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class TransactionCreateSerializer(serializers.Serializer):
    """Input for creating a transaction."""

    type = serializers.ChoiceField(choices=TransactionType.choices)
    amount = serializers.DecimalField(
        max_digits=20, decimal_places=8, min_value=Decimal('0.00000001'), required=False
    )
    currency = serializers.ChoiceField(choices=Currency.choices, required=False)
    bill_id = serializers.UUIDField(required=False)
    group_id = serializers.UUIDField(required=False)
    receiver_id = serializers.UUIDField(required=False)
    to_address = serializers.RegexField(
        regex=r'^0x[0-9a-fA-F]{40}$',
        required=False,
        error_messages={'invalid': 'Must be a 0x-prefixed 40 hex character address.'},
    )
    description = serializers.CharField(required=False, allow_blank=True, default='')
    metadata = serializers.DictField(required=False)

    def validate(self, attrs):
        if not attrs.get('bill_id') and not attrs.get('group_id'):
            raise serializers.ValidationError("Provide bill_id or group_id.")
        if attrs['type'] != TransactionType.BILL_PAYMENT and 'amount' not in attrs:
            raise serializers.ValidationError({'amount': "This field is required."})
        return attrs
