import pytest
from django.test import RequestFactory

from apps.storefront.services import FacetItem


@pytest.fixture
def rf():
    return RequestFactory()


@pytest.fixture
def layer(navigation, color, size, category):
    return navigation.create_layer(category=category)


def make_item(layer, attribute, value):
    attribute_filter = layer.get_attribute_filter(attribute.pk)
    return FacetItem(filter=attribute_filter, value=value, label=value, count=1)


@pytest.mark.django_db
def test_multiselect_link_adds_value_and_resets_page(rf, navigation, layer, size):
    links = navigation.create_link_builder(rf.get('/roupas/', {'size': 'XS', 'page': '2'}))
    item = make_item(layer, size, 'S')

    assert links.get_url(item) == '/roupas/?size=XS,S'
    assert item.is_selected is False


@pytest.mark.django_db
def test_multiselect_link_removes_active_value(rf, navigation, layer, size):
    links = navigation.create_link_builder(rf.get('/roupas/', {'size': 'XS'}))
    item = make_item(layer, size, 'XS')

    assert links.get_url(item) == '/roupas/'
    assert item.is_selected is True


@pytest.mark.django_db
def test_combined_option_value_is_kept_whole(rf, navigation, layer, size):
    links = navigation.create_link_builder(rf.get('/roupas/', {'size': 'XS'}))

    assert links.get_url(make_item(layer, size, 'XS/S')) == '/roupas/?size=XS,XS/S'


@pytest.mark.django_db
def test_single_select_link_replaces_value(rf, navigation, layer, color):
    links = navigation.create_link_builder(rf.get('/roupas/', {'color': 'blue'}))

    assert links.get_url(make_item(layer, color, 'red')) == '/roupas/?color=red'


@pytest.mark.django_db
def test_remove_url_drops_only_that_value(rf, navigation, layer, size, color):
    request = rf.get('/roupas/?size=XS,S&color=red')
    links = navigation.create_link_builder(request)

    assert links.get_remove_url(make_item(layer, size, 'S')) == '/roupas/?size=XS&color=red'
    assert links.get_remove_url(make_item(layer, color, 'red')) == '/roupas/?size=XS,S'


@pytest.mark.django_db
def test_swatch_url_toggles_multiselect_values(rf, navigation, layer, size, color):
    links = navigation.create_link_builder(rf.get('/roupas/', {'size': 'XS'}))

    assert links.build_swatch_url('size', 'M') == '/roupas/?size=XS,M'
    assert links.build_swatch_url('size', 'XS') == '/roupas/'
    assert links.build_swatch_url('color', 'red') == '/roupas/?size=XS&color=red'
