from typing import Optional

from django.utils.module_loading import import_string

from apps.storefront.conf import get_setting
from .active_filters import ActiveFilterExtractor
from .attribute_config import MultiSelectConfig
from .availability import AvailableOptions
from .backend import SearchBackend
from .facets import FacetRebuilder
from .layer import Layer
from .links import FilterLinkBuilder
from .multiselect import MultiSelectApplier
from .visibility import VisibilityQueryBuilder


def get_search_backend() -> SearchBackend:
    backend_class = import_string(get_setting('SEARCH_BACKEND'))
    return backend_class()


class NavigationContext:
    """
    Layered navigation services of one request.

    Every cache (multiselect flags, option availability, variant axes) lives
    on these instances, so nothing stock-dependent outlives the request.
    """

    def __init__(self, backend: Optional[SearchBackend] = None):
        self.backend = backend or get_search_backend()
        self.multiselect_config = MultiSelectConfig()
        self.available_options = AvailableOptions()
        self.active_filters = ActiveFilterExtractor(self.multiselect_config, self.available_options)
        self.multiselect_applier = MultiSelectApplier(self.multiselect_config, self.available_options)
        self.facet_rebuilder = FacetRebuilder(self.multiselect_config, self.available_options)
        self.visibility = VisibilityQueryBuilder(self.active_filters)

    def create_layer(self, category=None, search_text=None) -> Layer:
        return Layer(self, self.backend, category=category, search_text=search_text)

    def create_link_builder(self, request) -> FilterLinkBuilder:
        return FilterLinkBuilder(request, self.multiselect_config)
