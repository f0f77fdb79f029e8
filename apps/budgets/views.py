from rest_framework import viewsets, status, serializers
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .serializers import (
    BudgetCategorySerializer,
    BudgetCategoryCreateSerializer,
    BudgetCategoryUpdateSerializer,
)
from .services import (
    create_budget_category,
    update_budget_category,
    delete_budget_category,
    get_group_categories,
    get_category_by_id,
)


class BudgetCategoryViewSet(viewsets.ModelViewSet):
    """
    Budget categories of a group.

    list / retrieve: any active member (?group= required for list)
    create / update / partial_update / destroy: admin only
    """

    serializer_class = BudgetCategorySerializer
    permission_classes = [IsAuthenticated]
    lookup_value_regex = '[0-9a-fA-F-]{36}'

    def get_queryset(self):
        group_id = self.request.query_params.get('group')
        if not group_id:
            raise serializers.ValidationError({'group': "This query parameter is required."})
        return get_group_categories(
            user=self.request.user,
            group_id=serializers.UUIDField().run_validation(group_id),
        )

    def get_serializer_class(self):
        if self.action == 'create':
            return BudgetCategoryCreateSerializer
        elif self.action in ['update', 'partial_update']:
            return BudgetCategoryUpdateSerializer
        return BudgetCategorySerializer

    @extend_schema(parameters=[
        OpenApiParameter('group', str, required=True, description='Group whose categories to list'),
    ])
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(request=BudgetCategoryCreateSerializer, responses={201: BudgetCategorySerializer})
    def create(self, request, *args, **kwargs):
        serializer = BudgetCategoryCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        category = create_budget_category(user=request.user, **serializer.validated_data)
        return Response(BudgetCategorySerializer(category).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, *args, **kwargs):
        category = get_category_by_id(user=request.user, category_id=self.kwargs['pk'])
        return Response(BudgetCategorySerializer(category).data)

    @extend_schema(request=BudgetCategoryUpdateSerializer, responses={200: BudgetCategorySerializer})
    def update(self, request, *args, **kwargs):
        serializer = BudgetCategoryUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        category = update_budget_category(
            user=request.user,
            category_id=self.kwargs['pk'],
            **serializer.validated_data
        )
        return Response(BudgetCategorySerializer(category).data)

    @extend_schema(request=BudgetCategoryUpdateSerializer, responses={200: BudgetCategorySerializer})
    def partial_update(self, request, *args, **kwargs):
        return self.update(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        """Deactivate a category."""
        delete_budget_category(user=request.user, category_id=self.kwargs['pk'])
        return Response(status=status.HTTP_204_NO_CONTENT)
