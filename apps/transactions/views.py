from rest_framework import viewsets, status, serializers
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .serializers import TransactionSerializer, TransactionCreateSerializer
from .services import (
    create_transaction,
    refresh_transaction_status,
    get_transaction_by_id,
    get_group_transactions,
    get_user_transactions,
)


class TransactionPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class TransactionViewSet(viewsets.ModelViewSet):
    """
    ViewSet for transactions.

    list: Transactions the user sent, or of one group (?group=)
    create: Record a transaction and submit it to the transfer gateway
    retrieve: Get a transaction (members)
    refresh: Pull the latest status from the gateway
    """

    serializer_class = TransactionSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = TransactionPagination
    lookup_value_regex = '[0-9a-fA-F-]{36}'
    http_method_names = ['get', 'post', 'head', 'options']

    def get_queryset(self):
        group_id = self.request.query_params.get('group')
        if group_id:
            return get_group_transactions(
                group_id=serializers.UUIDField().run_validation(group_id),
                user=self.request.user,
                status=self.request.query_params.get('status'),
                type=self.request.query_params.get('type'),
            )
        return get_user_transactions(user=self.request.user)

    def get_serializer_class(self):
        if self.action == 'create':
            return TransactionCreateSerializer
        return TransactionSerializer

    @extend_schema(parameters=[
        OpenApiParameter('group', str, description='Only transactions of this group'),
        OpenApiParameter('status', str, description='Filter by status (with group)'),
        OpenApiParameter('type', str, description='Filter by type (with group)'),
    ])
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(request=TransactionCreateSerializer, responses={201: TransactionSerializer})
    def create(self, request, *args, **kwargs):
        serializer = TransactionCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        tx = create_transaction(user=request.user, **serializer.validated_data)
        return Response(TransactionSerializer(tx).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, *args, **kwargs):
        tx = get_transaction_by_id(transaction_id=self.kwargs['pk'], user=request.user)
        return Response(TransactionSerializer(tx).data)

    @extend_schema(request=None, responses={200: TransactionSerializer})
    @action(detail=True, methods=['post'])
    def refresh(self, request, pk=None):
        """Reconcile the transaction with the gateway."""
        tx = refresh_transaction_status(user=request.user, transaction_id=pk)
        return Response(TransactionSerializer(tx).data)
