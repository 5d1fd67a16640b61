import logging

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, viewsets
from rest_framework.decorators import action

from apps.storefront.conf import get_setting
from apps.storefront.models import AttributeOption, AttributeType, Category, Product
from apps.storefront.services import NavigationContext
from .filters import AttributeTypeFilter, ProductFilter
from .serializers import (
    ActiveFilterSerializer,
    AttributeOptionSerializer,
    AttributeTypeSerializer,
    CategorySerializer,
    FacetSerializer,
    ProductDetailSerializer,
    ProductListSerializer,
)

logger = logging.getLogger(__name__)


class LayeredListingMixin:
    """
    Renders a paginated product listing with its facets and active filters.

    A new NavigationContext is created per call, so availability and
    multiselect lookups are never shared between requests.
    """

    def layered_response(self, request, category=None, search_text=None):
        context = NavigationContext()
        layer = context.create_layer(category=category, search_text=search_text)
        layer.apply_filters(request.query_params)

        queryset = layer.product_collection.get_queryset().order_by('name', 'pk')
        page = self.paginate_queryset(queryset)
        serializer = ProductListSerializer(page, many=True, context={'request': request})
        response = self.get_paginated_response(serializer.data)

        serializer_context = {
            'request': request,
            'links': context.create_link_builder(request),
            'multiselect_config': context.multiselect_config,
        }
        response.data['facets'] = FacetSerializer(
            layer.get_facets(), many=True, context=serializer_context
        ).data
        response.data['active_filters'] = ActiveFilterSerializer(
            layer.state.get_filters(), many=True, context=serializer_context
        ).data

        logger.debug(
            "Layered listing category=%s search=%r filters=%d",
            category.slug if category else None, search_text, len(layer.state)
        )
        return response


class CategoryViewSet(LayeredListingMixin, viewsets.ReadOnlyModelViewSet):
    """
    API endpoint for categories.

    products: layered product listing of a category
    """
    queryset = Category.objects.filter(is_active=True).select_related('parent')
    serializer_class = CategorySerializer
    lookup_field = 'slug'
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['name']
    ordering = ['display_order', 'name']

    @action(detail=True, methods=['get'])
    def products(self, request, slug=None):
        category = self.get_object()
        return self.layered_response(request, category=category)


class ProductViewSet(LayeredListingMixin, viewsets.ReadOnlyModelViewSet):
    """
    API endpoint for products.

    list: List products (plain filters, no facets)
    retrieve: Get product detail with variants
    search: layered listing of a text search
    """
    queryset = Product.objects.listable()
    lookup_field = 'slug'
    filterset_class = ProductFilter
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['name', 'description']
    ordering_fields = ['name', 'created_at']
    ordering = ['name']

    def get_serializer_class(self):
        if self.action == 'retrieve':
            return ProductDetailSerializer
        return ProductListSerializer

    def get_queryset(self):
        queryset = super().get_queryset()
        if self.action == 'retrieve':
            queryset = queryset.prefetch_related(
                'categories',
                'variants__variantattribute_set__attribute_option__attribute_type',
            )
        return queryset

    @action(detail=False, methods=['get'])
    def search(self, request):
        search_text = request.query_params.get(get_setting('SEARCH_VAR'), '').strip()
        return self.layered_response(request, search_text=search_text or None)


class AttributeTypeViewSet(viewsets.ReadOnlyModelViewSet):
    """
    API endpoint for attribute types (Color, Size, etc).
    """
    queryset = AttributeType.objects.prefetch_related('options')
    serializer_class = AttributeTypeSerializer
    lookup_field = 'slug'
    filterset_class = AttributeTypeFilter
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['name']
    ordering = ['display_order', 'name']


class AttributeOptionViewSet(viewsets.ReadOnlyModelViewSet):
    """
    API endpoint for attribute options.
    """
    queryset = AttributeOption.objects.select_related('attribute_type')
    serializer_class = AttributeOptionSerializer
    filter_backends = [DjangoFilterBackend, filters.SearchFilter]
    filterset_fields = ['attribute_type', 'attribute_type__slug']
    search_fields = ['value', 'display_value']
