from decimal import Decimal

from rest_framework import serializers

from apps.bills.models import Currency
from .models import Frequency, RecurringBill


ADDRESS_REGEX = r'^0x[0-9a-fA-F]{40}$'


class RecurringBillSerializer(serializers.ModelSerializer):
    class Meta:
        model = RecurringBill
        fields = [
            'id',
            'group',
            'title',
            'description',
            'amount',
            'currency',
            'payee_address',
            'frequency',
            'start_date',
            'next_due_date',
            'end_date',
            'is_active',
            'auto_propose',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class RecurringBillCreateSerializer(serializers.Serializer):
    group_id = serializers.UUIDField()
    title = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    amount = serializers.DecimalField(max_digits=20, decimal_places=8, min_value=Decimal('0.00000001'))
    currency = serializers.ChoiceField(choices=Currency.choices, default=Currency.USDC)
    payee_address = serializers.RegexField(regex=ADDRESS_REGEX)
    frequency = serializers.ChoiceField(choices=Frequency.choices)
    start_date = serializers.DateTimeField()
    end_date = serializers.DateTimeField(required=False, allow_null=True)
    auto_propose = serializers.BooleanField(default=True)

    def validate(self, attrs):
        end_date = attrs.get('end_date')
        if end_date and end_date <= attrs['start_date']:
            raise serializers.ValidationError({'end_date': "End date must be after start date."})
        return attrs


class RecurringBillUpdateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=200, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    amount = serializers.DecimalField(
        max_digits=20, decimal_places=8, min_value=Decimal('0.00000001'), required=False
    )
    currency = serializers.ChoiceField(choices=Currency.choices, required=False)
    payee_address = serializers.RegexField(regex=ADDRESS_REGEX, required=False)
    frequency = serializers.ChoiceField(choices=Frequency.choices, required=False)
    start_date = serializers.DateTimeField(required=False)
    next_due_date = serializers.DateTimeField(required=False)
    end_date = serializers.DateTimeField(required=False, allow_null=True)
    is_active = serializers.BooleanField(required=False)
    auto_propose = serializers.BooleanField(required=False)
