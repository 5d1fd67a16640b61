import pytest
from django.db import DatabaseError
from django.http import QueryDict

from apps.storefront.models import AttributeOption


@pytest.fixture
def sized_catalog(color, size, category, other_category, make_product, make_variant):
    xs = make_product('Blusa', categories=[category])
    make_variant(xs, {'color': 'red', 'size': 'XS'})

    combined = make_product('Vestido', categories=[category])
    make_variant(combined, {'color': 'red', 'size': 'XS/S'})

    small = make_product('Saia', categories=[category])
    make_variant(small, {'color': 'blue', 'size': 'S'})
    make_variant(small, {'color': 'blue', 'size': 'M'}, stock=0)

    elsewhere = make_product('Cinto', categories=[other_category])
    make_variant(elsewhere, {'color': 'red', 'size': 'M'})


def facet_items(navigation, query, category=None, search_text=None, attribute=None):
    layer = navigation.create_layer(category=category, search_text=search_text)
    layer.apply_filters(QueryDict(query))
    return layer.get_attribute_filter(attribute.pk).get_items()


def summary(items):
    return [(item.value, item.count, item.is_selected) for item in items]


@pytest.mark.django_db
def test_selected_size_keeps_combined_option_visible(navigation, category, size, sized_catalog):
    items = facet_items(navigation, 'size=XS', category=category, attribute=size)

    assert summary(items) == [
        ('XS', 1, True),
        ('S', 1, False),
        ('XS/S', 1, False),
    ]


@pytest.mark.django_db
def test_selected_value_without_stock_stays_with_count_one(navigation, category, size, sized_catalog):
    items = facet_items(navigation, 'size=XS,M', category=category, attribute=size)

    assert ('M', 1, True) in summary(items)


@pytest.mark.django_db
def test_search_page_rebuild_uses_store_wide_counts(navigation, size, sized_catalog):
    items = facet_items(navigation, 'size=XS', search_text='a', attribute=size)

    assert [item.value for item in items] == ['XS', 'S', 'XS/S', 'M']


@pytest.mark.django_db
def test_options_with_empty_value_are_never_offered(navigation, category, size, sized_catalog):
    AttributeOption.objects.create(attribute_type=size, value='', display_order=9)

    items = facet_items(navigation, 'size=XS', category=category, attribute=size)

    assert '' not in [item.value for item in items]


@pytest.mark.django_db
def test_inactive_attribute_drops_options_without_stock(navigation, category, size, sized_catalog):
    items = facet_items(navigation, '', category=category, attribute=size)

    assert [item.value for item in items] == ['XS', 'S', 'XS/S']


@pytest.mark.django_db
def test_single_select_attribute_drops_options_without_stock(
    navigation, category, color, make_product, make_variant
):
    bag = make_product('Bolsa', categories=[category])
    make_variant(bag, {'color': 'red'})
    scarf = make_product('Lenço', categories=[category])
    make_variant(scarf, {'color': 'blue'}, stock=0)
    make_variant(scarf, {'color': 'red'})

    layer = navigation.create_layer(category=category)
    items = layer.get_attribute_filter(color.pk).get_items()

    assert summary(items) == [('red', 2, False)]


@pytest.mark.django_db
def test_rebuild_failure_keeps_backend_items(navigation, category, size, sized_catalog, monkeypatch):
    def broken(*args, **kwargs):
        raise DatabaseError('connection lost')

    layer = navigation.create_layer(category=category)
    layer.apply_filters(QueryDict('size=XS'))
    monkeypatch.setattr(navigation.available_options, 'get_counts', broken)

    items = layer.get_attribute_filter(size.pk).get_items()

    assert [item.value for item in items] == ['XS']
