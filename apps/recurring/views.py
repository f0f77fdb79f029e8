from rest_framework import viewsets, status, serializers
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .serializers import (
    RecurringBillSerializer,
    RecurringBillCreateSerializer,
    RecurringBillUpdateSerializer,
)
from .services import (
    create_recurring_bill,
    update_recurring_bill,
    deactivate_recurring_bill,
    get_group_recurring_bills,
    get_recurring_bill_by_id,
)


class RecurringBillViewSet(viewsets.ModelViewSet):
    """
    ViewSet for recurring bill schedules.

    list: Active schedules of a group (?group= required)
    create / update / partial_update / destroy: admin only
    """

    serializer_class = RecurringBillSerializer
    permission_classes = [IsAuthenticated]
    lookup_value_regex = '[0-9a-fA-F-]{36}'

    def get_queryset(self):
        group_id = self.request.query_params.get('group')
        if not group_id:
            raise serializers.ValidationError({'group': "This query parameter is required."})
        return get_group_recurring_bills(
            user=self.request.user,
            group_id=serializers.UUIDField().run_validation(group_id),
        )

    def get_serializer_class(self):
        if self.action == 'create':
            return RecurringBillCreateSerializer
        elif self.action in ['update', 'partial_update']:
            return RecurringBillUpdateSerializer
        return RecurringBillSerializer

    @extend_schema(parameters=[
        OpenApiParameter('group', str, required=True, description='Group whose schedules to list'),
    ])
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(request=RecurringBillCreateSerializer, responses={201: RecurringBillSerializer})
    def create(self, request, *args, **kwargs):
        serializer = RecurringBillCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        recurring = create_recurring_bill(user=request.user, **serializer.validated_data)
        return Response(RecurringBillSerializer(recurring).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, *args, **kwargs):
        recurring = get_recurring_bill_by_id(user=request.user, recurring_id=self.kwargs['pk'])
        return Response(RecurringBillSerializer(recurring).data)

    @extend_schema(request=RecurringBillUpdateSerializer, responses={200: RecurringBillSerializer})
    def update(self, request, *args, **kwargs):
        serializer = RecurringBillUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        recurring = update_recurring_bill(
            user=request.user,
            recurring_id=self.kwargs['pk'],
            **serializer.validated_data
        )
        return Response(RecurringBillSerializer(recurring).data)

    @extend_schema(request=RecurringBillUpdateSerializer, responses={200: RecurringBillSerializer})
    def partial_update(self, request, *args, **kwargs):
        return self.update(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        """Deactivate a schedule."""
        deactivate_recurring_bill(user=request.user, recurring_id=self.kwargs['pk'])
        return Response(status=status.HTTP_204_NO_CONTENT)
