import pytest

from apps.storefront.models import AttributeOption, AttributeType, Category


@pytest.fixture
def shop(color, size, category, make_product, make_variant):
    blouse = make_product('Blusa', categories=[category])
    make_variant(blouse, {'color': 'red', 'size': 'XS'})

    dress = make_product('Vestido', categories=[category])
    make_variant(dress, {'color': 'red', 'size': 'XS/S'})

    skirt = make_product('Saia', categories=[category])
    make_variant(skirt, {'color': 'blue', 'size': 'S'})

    sold_out = make_product('Short', categories=[category])
    make_variant(sold_out, {'color': 'blue', 'size': 'M'}, stock=0)


def facet(response, request_var):
    return next(f for f in response.data['facets'] if f['request_var'] == request_var)


def result_names(response):
    return [product['name'] for product in response.data['results']]


@pytest.mark.django_db
def test_category_listing_hides_sold_out_parents(api_client, shop):
    response = api_client.get('/api/categories/roupas/products/')

    assert response.status_code == 200
    assert response.data['count'] == 3
    assert result_names(response) == ['Blusa', 'Saia', 'Vestido']
    assert response.data['active_filters'] == []


@pytest.mark.django_db
def test_category_listing_with_multiselect_filter(api_client, size, shop):
    response = api_client.get('/api/categories/roupas/products/', {'size': 'XS'})

    assert result_names(response) == ['Blusa']

    size_facet = facet(response, 'size')
    assert size_facet['is_multiselect'] is True
    assert size_facet['attribute'] == {'id': size.pk, 'slug': 'size', 'name': 'Tamanho'}

    items = {item['value']: item for item in size_facet['items']}
    assert list(items) == ['XS', 'S', 'XS/S']
    assert items['XS']['is_selected'] is True
    assert items['XS']['url'] == '/api/categories/roupas/products/'
    assert items['XS/S']['url'] == '/api/categories/roupas/products/?size=XS,XS/S'

    active = response.data['active_filters']
    assert [(f['request_var'], f['value']) for f in active] == [('size', 'XS')]
    assert active[0]['remove_url'] == '/api/categories/roupas/products/'


@pytest.mark.django_db
def test_selecting_every_size_lists_everything_in_stock(api_client, shop):
    response = api_client.get('/api/categories/roupas/products/', {'size': 'XS,S,XS/S'})

    assert response.data['count'] == 3


@pytest.mark.django_db
def test_single_select_filter_hides_its_facet(api_client, shop):
    response = api_client.get('/api/categories/roupas/products/', {'color': 'red'})

    assert result_names(response) == ['Blusa', 'Vestido']
    assert 'color' not in [f['request_var'] for f in response.data['facets']]


@pytest.mark.django_db
def test_unknown_category_is_404(api_client, shop):
    assert api_client.get('/api/categories/nada/products/').status_code == 404


@pytest.mark.django_db
def test_search_listing(api_client, shop):
    response = api_client.get('/api/products/search/', {'q': 'saia'})

    assert response.status_code == 200
    assert result_names(response) == ['Saia']
    assert 'cat' not in [f['request_var'] for f in response.data['facets']]


@pytest.mark.django_db
def test_product_list_in_stock_filter(api_client, shop):
    response = api_client.get('/api/products/', {'in_stock': 'true'})

    assert response.data['count'] == 3


@pytest.mark.django_db
def test_product_detail_lists_variant_attributes(api_client, shop):
    response = api_client.get('/api/products/blusa/')

    assert response.status_code == 200
    assert response.data['variants'][0]['attributes'] == {'color': 'red', 'size': 'XS'}
    assert response.data['categories'] == ['roupas']


@pytest.mark.django_db
def test_attribute_types_filters(api_client, shop):
    material = AttributeType.objects.create(name='Material', slug='material', display_order=3)
    AttributeOption.objects.create(attribute_type=material, value='algodao')

    def slugs(params):
        response = api_client.get('/api/attribute-types/', params)
        return [attribute['slug'] for attribute in response.data['results']]

    assert slugs({'variant_axis': 'true'}) == ['color', 'size']
    assert slugs({'variant_axis': 'false'}) == ['material']
    assert slugs({'is_multiselect_filter': 'true'}) == ['size']


@pytest.mark.django_db
def test_attribute_options_by_attribute_slug(api_client, shop):
    response = api_client.get('/api/attribute-options/', {'attribute_type__slug': 'size'})

    assert [option['value'] for option in response.data['results']] == ['XS', 'S', 'XS/S', 'M']


@pytest.mark.django_db
def test_category_list(api_client, shop):
    response = api_client.get('/api/categories/')

    assert [category['slug'] for category in response.data['results']] == ['roupas']


@pytest.mark.django_db
def test_child_category_facet_narrows_listing(api_client, category, shop, make_product, make_variant):
    shirts = Category.objects.create(name='Camisetas', slug='camisetas', parent=category)
    tank_top = make_product('Regata', categories=[category, shirts])
    make_variant(tank_top, {'color': 'red', 'size': 'M'})

    response = api_client.get('/api/categories/roupas/products/')
    category_facet = facet(response, 'cat')

    assert category_facet['attribute'] is None
    assert category_facet['is_multiselect'] is False
    assert [(item['value'], item['count']) for item in category_facet['items']] == [('camisetas', 1)]
    assert category_facet['items'][0]['url'] == '/api/categories/roupas/products/?cat=camisetas'

    response = api_client.get('/api/categories/roupas/products/', {'cat': 'camisetas'})

    assert result_names(response) == ['Regata']
    assert response.data['active_filters'][0]['label'] == 'Camisetas'
