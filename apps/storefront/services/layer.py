from typing import List, Optional

from apps.storefront.models import AttributeType
from .backend import SearchBackend, SearchCriteria
from .collection import ProductCollection
from .filters import AttributeFilter, CategoryFilter, LayerFilter
from .state import FacetItem, LayerState, Scope


class Layer:
    """
    Layered navigation of one listing page.

    A category page has a current category; a search page has search text and
    no category, so its scope has no category either.
    """

    def __init__(
        self,
        context,
        backend: SearchBackend,
        category=None,
        search_text: Optional[str] = None
    ):
        self.context = context
        self.backend = backend
        self.current_category = category
        self.search_text = search_text
        self.state = LayerState()
        self._collection: Optional[ProductCollection] = None
        self._attribute_types = None
        self._filters: Optional[List[LayerFilter]] = None

    @property
    def scope(self) -> Scope:
        return Scope.for_category(self.current_category)

    @property
    def product_collection(self) -> ProductCollection:
        if self._collection is None:
            criteria = SearchCriteria(
                category_ids=[self.current_category.pk] if self.current_category else [],
                text=self.search_text or None,
            )
            collection = ProductCollection(
                self.backend,
                criteria,
                facet_attribute_ids=[attribute.pk for attribute in self.get_attribute_types()],
            )
            collection.add_before_load(
                lambda target: self.context.visibility.apply(target, self)
            )
            self._collection = collection
        return self._collection

    def get_attribute_types(self):
        if self._attribute_types is None:
            self._attribute_types = list(
                AttributeType.objects.filterable().prefetch_related('options')
            )
        return self._attribute_types

    def get_filters(self) -> List[LayerFilter]:
        if self._filters is None:
            filters: List[LayerFilter] = [CategoryFilter(self)]
            filters.extend(
                AttributeFilter(self, attribute) for attribute in self.get_attribute_types()
            )
            self._filters = filters
        return self._filters

    def get_attribute_filter(self, attribute_id) -> Optional[AttributeFilter]:
        for layer_filter in self.get_filters():
            if isinstance(layer_filter, AttributeFilter) and layer_filter.attribute_id == attribute_id:
                return layer_filter
        return None

    def apply_filters(self, params) -> 'Layer':
        for layer_filter in self.get_filters():
            layer_filter.apply(params)
        return self

    def get_facets(self):
        """Return [(filter, items)] for every filter that has items to offer."""
        facets = []
        for layer_filter in self.get_filters():
            items: List[FacetItem] = layer_filter.get_items()
            if items:
                facets.append((layer_filter, items))
        return facets
