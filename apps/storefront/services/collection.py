from typing import Callable, Dict, Iterable, List, Optional

from django.db.models import Q

from apps.storefront.models import Product
from .backend import SearchBackend, SearchCriteria, SearchResult


class ProductCollection:
    """
    Query object behind a product listing.

    Combines the search backend criteria (category, text, attribute terms)
    with ORM predicates added through where(). Before-load hooks run once,
    the first time rows, ids or the size are read. Rows and size are cached
    until invalidate() is called.
    """

    def __init__(
        self,
        backend: SearchBackend,
        criteria: Optional[SearchCriteria] = None,
        facet_attribute_ids: Iterable[int] = ()
    ):
        self.backend = backend
        self.criteria = criteria or SearchCriteria()
        self.facet_attribute_ids = list(facet_attribute_ids)
        self.visibility_applied = False
        self._predicates: List[Q] = []
        self._before_load: List[Callable[['ProductCollection'], None]] = []
        self._prepared = False
        self._result: Optional[SearchResult] = None
        self._items = None
        self._size = None

    # -------------------------------------------------------------------------
    # Building
    # -------------------------------------------------------------------------

    def add_field_filter(self, attribute_id: int, value) -> None:
        self.criteria.terms[attribute_id] = value
        self._result = None
        self.invalidate()

    def add_category_filter(self, category_id: int) -> None:
        self.criteria.category_ids.append(category_id)
        self._result = None
        self.invalidate()

    def where(self, condition: Q) -> None:
        self._predicates.append(condition)
        self.invalidate()

    def get_predicates(self) -> List[Q]:
        return list(self._predicates)

    def add_before_load(self, hook: Callable[['ProductCollection'], None]) -> None:
        self._before_load.append(hook)

    def invalidate(self) -> None:
        """Forget cached rows and size so the next read recomputes them."""
        self._items = None
        self._size = None

    # -------------------------------------------------------------------------
    # Reading
    # -------------------------------------------------------------------------

    @property
    def is_loaded(self) -> bool:
        return self._items is not None

    def get_search_result(self) -> SearchResult:
        if self._result is None:
            self._result = self.backend.search(self.criteria, self.facet_attribute_ids)
        return self._result

    def get_queryset(self):
        self._prepare()
        queryset = Product.objects.filter(pk__in=self.get_search_result().product_ids)
        for predicate in self._predicates:
            queryset = queryset.filter(predicate)
        return queryset

    def get_size(self) -> int:
        if self._size is None:
            self._size = self.get_queryset().count()
        return self._size

    def get_all_ids(self) -> List[int]:
        return list(self.get_queryset().values_list('pk', flat=True))

    def get_facet_counts(self, attribute_id: int) -> Dict[str, int]:
        return self.get_search_result().facets.get(attribute_id, {})

    def load(self) -> 'ProductCollection':
        if self._items is None:
            queryset = self.get_queryset()
            self._items = list(queryset)
        return self

    def __iter__(self):
        return iter(self.load()._items)

    def _prepare(self) -> None:
        if self._prepared:
            return
        self._prepared = True
        for hook in self._before_load:
            hook(self)
