from rest_framework import viewsets, status, serializers
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .serializers import BillSerializer, BillCreateSerializer, BillUpdateSerializer
from .services import (
    create_bill,
    update_bill,
    delete_bill,
    get_bill_by_id,
    get_group_bills,
    get_user_bills,
)


class BillPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class BillViewSet(viewsets.ModelViewSet):
    """
    ViewSet for bills.

    list: Bills of every group the user belongs to, or of one group (?group=)
    create: Create a DRAFT bill (active members)
    retrieve: Get a bill with items (members)
    update / partial_update: Edit a DRAFT bill (creator or admin)
    destroy: Cancel a bill (creator or admin)
    """

    serializer_class = BillSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = BillPagination
    lookup_value_regex = '[0-9a-fA-F-]{36}'

    def get_queryset(self):
        group_id = self.request.query_params.get('group')
        if group_id:
            group_id = serializers.UUIDField().run_validation(group_id)
            return get_group_bills(
                group_id=group_id,
                user=self.request.user,
                status=self.request.query_params.get('status'),
            )
        return get_user_bills(user=self.request.user)

    def get_serializer_class(self):
        if self.action == 'create':
            return BillCreateSerializer
        elif self.action in ['update', 'partial_update']:
            return BillUpdateSerializer
        return BillSerializer

    @extend_schema(parameters=[
        OpenApiParameter('group', str, description='Only bills of this group'),
        OpenApiParameter('status', str, description='Filter by bill status (with group)'),
    ])
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(request=BillCreateSerializer, responses={201: BillSerializer})
    def create(self, request, *args, **kwargs):
        serializer = BillCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        bill = create_bill(user=request.user, **serializer.validated_data)
        return Response(BillSerializer(bill).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, *args, **kwargs):
        bill = get_bill_by_id(bill_id=self.kwargs['pk'], user=request.user)
        return Response(BillSerializer(bill).data)

    @extend_schema(request=BillUpdateSerializer, responses={200: BillSerializer})
    def update(self, request, *args, **kwargs):
        serializer = BillUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        bill = update_bill(bill_id=self.kwargs['pk'], user=request.user, **serializer.validated_data)
        bill = get_bill_by_id(bill_id=bill.id, user=request.user)
        return Response(BillSerializer(bill).data)

    @extend_schema(request=BillUpdateSerializer, responses={200: BillSerializer})
    def partial_update(self, request, *args, **kwargs):
        return self.update(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        """Cancel a bill."""
        delete_bill(bill_id=self.kwargs['pk'], user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)
