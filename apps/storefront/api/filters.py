from django_filters import rest_framework as filters

from apps.storefront.models import AttributeType, Product
from apps.storefront.services import VisibilityQueryBuilder


class AttributeTypeFilter(filters.FilterSet):
    """Filter for attribute types, including the inferred variant axes."""

    variant_axis = filters.BooleanFilter(method='filter_variant_axis')

    class Meta:
        model = AttributeType
        fields = ['slug', 'is_filterable', 'is_multiselect_filter']

    def filter_variant_axis(self, queryset, name, value):
        axis_ids = AttributeType.objects.variant_axes().values('pk')
        if value is True:
            return queryset.filter(pk__in=axis_ids)
        elif value is False:
            return queryset.exclude(pk__in=axis_ids)
        return queryset


class ProductFilter(filters.FilterSet):
    """Filter for plain product lists (outside layered navigation)."""

    category = filters.CharFilter(field_name='categories__slug')
    product_type = filters.ChoiceFilter(choices=Product.TYPE_CHOICES)
    in_stock = filters.BooleanFilter(method='filter_in_stock')

    class Meta:
        model = Product
        fields = ['category', 'product_type', 'in_stock']

    def filter_in_stock(self, queryset, name, value):
        visible = VisibilityQueryBuilder.build_predicate({})
        if value is True:
            return queryset.filter(visible)
        elif value is False:
            return queryset.exclude(visible)
        return queryset
