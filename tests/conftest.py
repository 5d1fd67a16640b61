import itertools
from decimal import Decimal

import pytest
from django.utils.text import slugify
from rest_framework.test import APIClient

from apps.storefront.models import (
    AttributeOption,
    AttributeType,
    Category,
    Product,
    Variant,
    VariantAttribute,
)
from apps.storefront.services import DatabaseSearchBackend, NavigationContext


@pytest.fixture
def color(db):
    """Single-select attribute with red and blue options."""
    attribute = AttributeType.objects.create(
        name='Cor', slug='color', datatype='color', display_order=1
    )
    AttributeOption.objects.create(attribute_type=attribute, value='red', display_value='Vermelho', display_order=0)
    AttributeOption.objects.create(attribute_type=attribute, value='blue', display_value='Azul', display_order=1)
    return attribute


@pytest.fixture
def size(db):
    """Multiselect attribute, including the combined XS/S option."""
    attribute = AttributeType.objects.create(
        name='Tamanho', slug='size', display_order=2, is_multiselect_filter=True
    )
    for i, value in enumerate(['XS', 'S', 'XS/S', 'M']):
        AttributeOption.objects.create(attribute_type=attribute, value=value, display_order=i)
    return attribute


@pytest.fixture
def category(db):
    return Category.objects.create(name='Roupas', slug='roupas')


@pytest.fixture
def other_category(db):
    return Category.objects.create(name='Acessórios', slug='acessorios')


@pytest.fixture
def make_product(db):
    counter = itertools.count(1)

    def factory(name=None, categories=(), **kwargs):
        number = next(counter)
        product = Product.objects.create(
            name=name or f'Produto {number}',
            slug=slugify(name) if name else f'produto-{number}',
            **kwargs
        )
        if categories:
            product.categories.add(*categories)
        return product

    return factory


@pytest.fixture
def make_variant(db):
    """make_variant(product, {'color': 'red', 'size': 'M'}, stock=0)"""
    counter = itertools.count(1)

    def factory(product, options=None, stock=10, **kwargs):
        variant = Variant.objects.create(
            product=product,
            sku=f'SKU-{next(counter)}',
            sell_price=kwargs.pop('sell_price', Decimal('99.90')),
            stock_quantity=stock,
            **kwargs
        )
        for slug, value in (options or {}).items():
            option = AttributeOption.objects.get(attribute_type__slug=slug, value=value)
            VariantAttribute.objects.create(variant=variant, attribute_option=option)
        return variant

    return factory


@pytest.fixture
def navigation(db):
    return NavigationContext(backend=DatabaseSearchBackend())


@pytest.fixture
def api_client():
    return APIClient()
