from django.db.models import Min
from rest_framework import serializers

from apps.storefront.models import (
    AttributeOption,
    AttributeType,
    Category,
    Product,
    Variant,
)
from apps.storefront.services import AttributeBoundFilter


# =============================================================================
# Catalog Serializers
# =============================================================================

class AttributeOptionSerializer(serializers.ModelSerializer):
    attribute_type_name = serializers.CharField(
        source='attribute_type.name', read_only=True
    )
    attribute_type_slug = serializers.CharField(
        source='attribute_type.slug', read_only=True
    )

    class Meta:
        model = AttributeOption
        fields = [
            'id', 'attribute_type', 'attribute_type_name', 'attribute_type_slug',
            'value', 'display_value', 'color_hex', 'display_order'
        ]


class AttributeTypeSerializer(serializers.ModelSerializer):
    options = AttributeOptionSerializer(many=True, read_only=True)

    class Meta:
        model = AttributeType
        fields = [
            'id', 'name', 'slug', 'datatype', 'display_order',
            'is_filterable', 'is_multiselect_filter', 'options'
        ]


class CategorySerializer(serializers.ModelSerializer):
    full_path = serializers.CharField(read_only=True)
    parent = serializers.SlugRelatedField(slug_field='slug', read_only=True)

    class Meta:
        model = Category
        fields = ['id', 'name', 'slug', 'parent', 'full_path', 'display_order']


class VariantSerializer(serializers.ModelSerializer):
    attributes = serializers.SerializerMethodField()
    is_in_stock = serializers.BooleanField(read_only=True)

    class Meta:
        model = Variant
        fields = ['id', 'sku', 'name', 'sell_price', 'is_in_stock', 'attributes']

    def get_attributes(self, obj):
        return obj.get_options_dict()


class ProductListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for listings."""
    min_price = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'slug', 'product_type', 'is_in_stock', 'min_price'
        ]

    def get_min_price(self, obj):
        if not obj.is_configurable:
            return str(obj.price) if obj.price is not None else None
        result = obj.variants.in_stock().aggregate(min_price=Min('sell_price'))
        return str(result['min_price']) if result['min_price'] is not None else None


class ProductDetailSerializer(ProductListSerializer):
    variants = VariantSerializer(many=True, read_only=True)
    categories = serializers.SlugRelatedField(slug_field='slug', many=True, read_only=True)

    class Meta(ProductListSerializer.Meta):
        fields = ProductListSerializer.Meta.fields + ['description', 'categories', 'variants']


# =============================================================================
# Layered Navigation Serializers
# =============================================================================

class FacetItemSerializer(serializers.Serializer):
    """
    Facet option with its navigation links.

    Expects a FilterLinkBuilder in context['links']. `url` is declared first:
    building it refreshes the item's is_selected flag.
    """
    url = serializers.SerializerMethodField()
    value = serializers.CharField()
    label = serializers.CharField()
    count = serializers.IntegerField()
    is_selected = serializers.BooleanField()
    remove_url = serializers.SerializerMethodField()

    def get_url(self, obj):
        return self.context['links'].get_url(obj)

    def get_remove_url(self, obj):
        return self.context['links'].get_remove_url(obj)


class FacetSerializer(serializers.Serializer):
    """Serializes a (filter, items) pair returned by Layer.get_facets()."""
    name = serializers.SerializerMethodField()
    request_var = serializers.SerializerMethodField()
    attribute = serializers.SerializerMethodField()
    is_multiselect = serializers.SerializerMethodField()
    items = serializers.SerializerMethodField()

    def get_name(self, obj):
        return obj[0].name

    def get_request_var(self, obj):
        return obj[0].request_var

    def get_attribute(self, obj):
        layer_filter = obj[0]
        if not isinstance(layer_filter, AttributeBoundFilter):
            return None
        attribute = layer_filter.attribute
        return {'id': attribute.pk, 'slug': attribute.slug, 'name': attribute.name}

    def get_is_multiselect(self, obj):
        layer_filter = obj[0]
        if not isinstance(layer_filter, AttributeBoundFilter):
            return False
        return self.context['multiselect_config'].is_multiselect(layer_filter.attribute_id)

    def get_items(self, obj):
        return FacetItemSerializer(obj[1], many=True, context=self.context).data


class ActiveFilterSerializer(serializers.Serializer):
    """Applied filter value, with the link that removes it."""
    name = serializers.SerializerMethodField()
    request_var = serializers.SerializerMethodField()
    value = serializers.CharField()
    label = serializers.CharField()
    remove_url = serializers.SerializerMethodField()

    def get_name(self, obj):
        return obj.filter.name

    def get_request_var(self, obj):
        return obj.filter.request_var

    def get_remove_url(self, obj):
        return self.context['links'].get_remove_url(obj)
