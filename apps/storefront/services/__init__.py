from .active_filters import ActiveFilterExtractor, is_noop_selection
from .attribute_config import MultiSelectConfig
from .availability import AvailableOptions
from .backend import AnyOf, DatabaseSearchBackend, SearchBackend, SearchCriteria, SearchResult
from .collection import ProductCollection
from .context import NavigationContext, get_search_backend
from .facets import FacetRebuilder
from .filters import AttributeBoundFilter, AttributeFilter, CategoryFilter, LayerFilter
from .layer import Layer
from .links import FilterLinkBuilder
from .multiselect import DELIMITER, MultiSelectApplier, SelectedValues
from .state import FacetItem, LayerState, Scope
from .visibility import VisibilityQueryBuilder

__all__ = [
    'ActiveFilterExtractor',
    'AnyOf',
    'AttributeBoundFilter',
    'AttributeFilter',
    'AvailableOptions',
    'CategoryFilter',
    'DELIMITER',
    'DatabaseSearchBackend',
    'FacetItem',
    'FacetRebuilder',
    'FilterLinkBuilder',
    'Layer',
    'LayerFilter',
    'LayerState',
    'MultiSelectApplier',
    'MultiSelectConfig',
    'NavigationContext',
    'ProductCollection',
    'Scope',
    'SearchBackend',
    'SearchCriteria',
    'SearchResult',
    'SelectedValues',
    'VisibilityQueryBuilder',
    'get_search_backend',
    'is_noop_selection',
]
