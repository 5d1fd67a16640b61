import pytest
from django.db import DatabaseError
from django.http import QueryDict

from apps.storefront.services import AnyOf, Scope, SelectedValues
from apps.storefront.services.multiselect import get_raw_param


class TestSelectedValues:

    def test_parse_trims_and_drops_empty_and_duplicate_tokens(self):
        assert SelectedValues.parse(' M, ,G,M,') == ['M', 'G']

    def test_parse_accepts_repeated_parameters(self):
        assert SelectedValues.parse(['M,G', 'GG']) == ['M', 'G', 'GG']

    def test_parse_nothing(self):
        assert not SelectedValues.parse(None)
        assert not SelectedValues.parse('')
        assert SelectedValues.parse(',,').encode() is None

    def test_encode_normalizes(self):
        assert SelectedValues.parse('G , M,G').encode() == 'G,M'
        assert SelectedValues.parse('XS/S').encode() == 'XS/S'

    def test_toggle_adds_at_the_end(self):
        assert SelectedValues(['X', 'Y']).toggle('V') == ['X', 'Y', 'V']

    def test_toggle_twice_is_empty(self):
        values = SelectedValues().toggle('V').toggle('V')

        assert len(values) == 0
        assert values.encode() is None

    def test_without_keeps_order(self):
        assert SelectedValues(['X', 'Y', 'Z']).without('Y') == ['X', 'Z']

    def test_contains_compares_as_strings(self):
        assert 38 in SelectedValues(['38'])


def test_get_raw_param_reads_every_value():
    params = QueryDict('size=M&size=G&color=red')

    assert get_raw_param(params, 'size') == ['M', 'G']
    assert get_raw_param(params, 'missing') is None
    assert get_raw_param({'size': 'M,G'}, 'size') == 'M,G'


@pytest.fixture
def stocked(color, size, category, make_product, make_variant):
    product = make_product(categories=[category])
    make_variant(product, {'color': 'red', 'size': 'XS'})
    make_variant(product, {'color': 'blue', 'size': 'S'})
    make_variant(product, {'color': 'blue', 'size': 'M'}, stock=0)
    return product


def apply(layer, attribute, query):
    attribute_filter = layer.get_attribute_filter(attribute.pk)
    attribute_filter.apply(QueryDict(query))
    return attribute_filter


@pytest.mark.django_db
def test_partial_selection_adds_any_of_term(navigation, category, size, stocked):
    layer = navigation.create_layer(category=category)

    apply(layer, size, 'size=XS')

    assert layer.product_collection.criteria.terms == {size.pk: AnyOf(['XS'])}


@pytest.mark.django_db
def test_full_selection_skips_backend_term(navigation, category, size, stocked):
    layer = navigation.create_layer(category=category)

    apply(layer, size, 'size=XS,S')

    assert layer.product_collection.criteria.terms == {}
    assert layer.state.values_for(size.pk) == ['XS', 'S']


@pytest.mark.django_db
def test_should_skip_when_selection_equals_available(navigation, category, size, stocked):
    applier = navigation.multiselect_applier

    assert applier.should_skip(Scope(category.pk), size.pk, SelectedValues(['S', 'XS'])) is True
    assert applier.should_skip(Scope(category.pk), size.pk, SelectedValues(['S'])) is False
    assert applier.should_skip(Scope(), size.pk, SelectedValues(['S', 'XS'])) is False


@pytest.mark.django_db
def test_should_skip_fails_open(navigation, category, size, stocked, monkeypatch):
    def broken(*args, **kwargs):
        raise DatabaseError('connection lost')

    monkeypatch.setattr(navigation.available_options, 'get_available', broken)

    assert navigation.multiselect_applier.should_skip(
        Scope(category.pk), size.pk, SelectedValues(['S', 'XS'])
    ) is False


@pytest.mark.django_db
def test_search_page_always_applies_selection(navigation, size, stocked):
    layer = navigation.create_layer(search_text='Produto')

    apply(layer, size, 'size=XS,S')

    assert layer.product_collection.criteria.terms == {size.pk: AnyOf(['XS', 'S'])}


@pytest.mark.django_db
def test_multiselect_filter_keeps_its_items(navigation, category, size, stocked):
    layer = navigation.create_layer(category=category)

    attribute_filter = apply(layer, size, 'size=XS')

    values = [item.value for item in attribute_filter.get_items()]
    assert 'XS' in values
    assert 'S' in values


@pytest.mark.django_db
def test_single_select_filter_uses_equality_and_hides_items(navigation, category, color, stocked):
    layer = navigation.create_layer(category=category)

    attribute_filter = apply(layer, color, 'color=red')

    assert layer.product_collection.criteria.terms == {color.pk: 'red'}
    assert attribute_filter.get_items() == []
    assert [item.label for item in layer.state.get_filters()] == ['Vermelho']


@pytest.mark.django_db
def test_missing_parameter_does_nothing(navigation, category, size, stocked):
    layer = navigation.create_layer(category=category)

    apply(layer, size, 'color=red')
    apply(layer, size, 'size=,')

    assert layer.product_collection.criteria.terms == {}
    assert len(layer.state) == 0
