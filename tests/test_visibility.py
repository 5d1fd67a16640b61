import pytest
from django.db import DatabaseError
from django.http import QueryDict

from apps.storefront.models import Product
from apps.storefront.services import VisibilityQueryBuilder


def visible(filters):
    predicate = VisibilityQueryBuilder.build_predicate(filters)
    return set(Product.objects.filter(predicate).values_list('pk', flat=True))


@pytest.fixture
def parent(color, size, make_product, make_variant):
    product = make_product('Camiseta')
    make_variant(product, {'color': 'red', 'size': 'S'})
    make_variant(product, {'color': 'blue', 'size': 'M'}, stock=0)
    return product


@pytest.mark.django_db
def test_parent_with_in_stock_variant_is_visible(parent):
    assert visible({}) == {parent.pk}


@pytest.mark.django_db
def test_filter_matches_only_in_stock_variants(color, parent):
    assert visible({color.pk: ['red']}) == {parent.pk}
    assert visible({color.pk: ['blue']}) == set()


@pytest.mark.django_db
def test_constraints_must_hold_on_one_variant(color, size, parent, make_variant):
    # red from one variant and M from another is not a red M
    make_variant(parent, {'color': 'blue', 'size': 'M'})

    assert visible({color.pk: 'red', size.pk: 'M'}) == set()
    assert visible({color.pk: 'red', size.pk: ['S', 'M']}) == {parent.pk}


@pytest.mark.django_db
def test_parent_without_stock_is_hidden(color, make_product, make_variant):
    sold_out = make_product()
    make_variant(sold_out, {'color': 'red'}, stock=0)
    flagged = make_product(is_in_stock=False)
    make_variant(flagged, {'color': 'red'})
    make_product()

    assert visible({}) == set()


@pytest.mark.django_db
def test_simple_products_follow_their_own_stock_flag(color, make_product):
    in_stock = make_product(product_type=Product.TYPE_SIMPLE)
    make_product(product_type=Product.TYPE_SIMPLE, is_in_stock=False)

    assert visible({}) == {in_stock.pk}
    assert visible({color.pk: 'red'}) == {in_stock.pk}


@pytest.mark.django_db
def test_applying_twice_adds_one_predicate(navigation, category, color, parent):
    parent.categories.add(category)
    layer = navigation.create_layer(category=category)
    collection = layer.product_collection

    navigation.visibility.apply(collection, layer)
    first = collection.get_predicates()
    navigation.visibility.apply(collection, layer)

    assert collection.visibility_applied is True
    assert len(collection.get_predicates()) == 1
    assert collection.get_predicates() == first
    assert collection.get_size() == 1


@pytest.mark.django_db
def test_listing_applies_variant_level_filters(navigation, category, color, size, parent, make_product, make_variant):
    parent.categories.add(category)
    other = make_product('Regata', categories=[category])
    make_variant(other, {'color': 'red', 'size': 'M'})

    layer = navigation.create_layer(category=category)
    layer.apply_filters(QueryDict('color=red&size=M'))

    assert [product.pk for product in layer.product_collection] == [other.pk]


@pytest.mark.django_db
def test_stock_filter_survives_extraction_failure(navigation, category, color, parent, make_product, make_variant, monkeypatch):
    def broken(*args, **kwargs):
        raise DatabaseError('connection lost')

    parent.categories.add(category)
    sold_out = make_product(categories=[category])
    make_variant(sold_out, {'color': 'red'}, stock=0)

    layer = navigation.create_layer(category=category)
    monkeypatch.setattr(navigation.active_filters, 'extract', broken)

    assert layer.product_collection.get_all_ids() == [parent.pk]
