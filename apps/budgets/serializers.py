from decimal import Decimal

from rest_framework import serializers

from .models import BudgetCategory


COLOR_REGEX = r'^#[0-9a-fA-F]{6}$'


class BudgetCategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = BudgetCategory
        fields = [
            'id',
            'group',
            'name',
            'color',
            'icon',
            'monthly_limit',
            'is_active',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class BudgetCategoryCreateSerializer(serializers.Serializer):
    group_id = serializers.UUIDField()
    name = serializers.CharField(max_length=100)
    color = serializers.RegexField(regex=COLOR_REGEX, required=False, allow_blank=True, default='')
    icon = serializers.CharField(max_length=50, required=False, allow_blank=True, default='')
    monthly_limit = serializers.DecimalField(
        max_digits=20, decimal_places=8, min_value=Decimal('0'), required=False, allow_null=True
    )


class BudgetCategoryUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100, required=False)
    color = serializers.RegexField(regex=COLOR_REGEX, required=False, allow_blank=True)
    icon = serializers.CharField(max_length=50, required=False, allow_blank=True)
    monthly_limit = serializers.DecimalField(
        max_digits=20, decimal_places=8, min_value=Decimal('0'), required=False, allow_null=True
    )
    is_active = serializers.BooleanField(required=False)
