"""
Search backend used by the product listing.

The backend returns candidate product ids and per-option facet counts. Its
facets are naive: they are computed over the already filtered result set and
know nothing about stock. The layered navigation services treat them as
provisional input.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from django.db.models import Count, Exists, OuterRef, Q

from apps.storefront.models import Product, Variant, VariantAttribute

logger = logging.getLogger(__name__)


class AnyOf:
    """
    Explicit "match any of" term.

    A plain list sent as a term means "all of" to the backend, which can never
    match more than one value of a single-valued variant attribute. OR
    selections must always be wrapped in AnyOf.
    """
    __slots__ = ('values',)

    def __init__(self, values: Iterable[Any]):
        self.values = tuple(str(value) for value in values)

    def __iter__(self):
        return iter(self.values)

    def __len__(self):
        return len(self.values)

    def __eq__(self, other):
        return isinstance(other, AnyOf) and self.values == other.values

    def __hash__(self):
        return hash(self.values)

    def __repr__(self):
        return f"AnyOf({list(self.values)!r})"


@dataclass
class SearchCriteria:
    category_ids: List[int] = field(default_factory=list)
    text: Optional[str] = None
    terms: Dict[int, Any] = field(default_factory=dict)


@dataclass
class SearchResult:
    product_ids: List[int]
    facets: Dict[int, Dict[str, int]] = field(default_factory=dict)


class SearchBackend(ABC):

    @abstractmethod
    def search(self, criteria: SearchCriteria, facet_attribute_ids: Iterable[int] = ()) -> SearchResult:
        """Return candidate product ids and naive facet counts for the criteria."""


class DatabaseSearchBackend(SearchBackend):
    """
    Search backend running on the product store tables.

    Behaves like an index of parent documents that aggregate the option
    values of all their variants, in stock or not.
    """

    def search(self, criteria: SearchCriteria, facet_attribute_ids: Iterable[int] = ()) -> SearchResult:
        queryset = self.get_queryset(criteria)
        product_ids = list(queryset.values_list('pk', flat=True))

        facet_attribute_ids = list(facet_attribute_ids)
        facets = self.get_facets(queryset, facet_attribute_ids) if facet_attribute_ids else {}

        logger.debug(
            "Search matched %d products (categories=%s, text=%r, terms=%s)",
            len(product_ids), criteria.category_ids, criteria.text, criteria.terms
        )
        return SearchResult(product_ids=product_ids, facets=facets)

    def get_queryset(self, criteria: SearchCriteria):
        queryset = Product.objects.listable()

        for category_id in criteria.category_ids:
            queryset = queryset.filter(categories=category_id)

        if criteria.text:
            queryset = queryset.filter(
                Q(name__icontains=criteria.text) | Q(description__icontains=criteria.text)
            )

        for attribute_id, value in criteria.terms.items():
            queryset = queryset.filter(self._term_condition(attribute_id, value))

        return queryset

    def get_facets(self, queryset, attribute_ids: List[int]) -> Dict[int, Dict[str, int]]:
        rows = (
            VariantAttribute.objects
            .filter(
                variant__product__in=queryset.values('pk'),
                attribute_option__attribute_type_id__in=attribute_ids,
            )
            .values('attribute_option__attribute_type_id', 'attribute_option__value')
            .annotate(count=Count('variant__product', distinct=True))
            .order_by()
        )

        facets = {attribute_id: {} for attribute_id in attribute_ids}
        for row in rows:
            attribute_id = row['attribute_option__attribute_type_id']
            facets[attribute_id][row['attribute_option__value']] = row['count']
        return facets

    def _term_condition(self, attribute_id, value):
        if isinstance(value, AnyOf):
            return Exists(self._variant_values(attribute_id, value.values))

        if isinstance(value, (list, tuple, set)):
            # "all of": one variant must carry every value at once
            variants = Variant.objects.filter(product=OuterRef('pk'))
            for single in value:
                variants = variants.filter(Exists(
                    VariantAttribute.objects.filter(
                        variant=OuterRef('pk'),
                        attribute_option__attribute_type_id=attribute_id,
                        attribute_option__value=str(single),
                    )
                ))
            return Exists(variants)

        return Exists(self._variant_values(attribute_id, [str(value)]))

    @staticmethod
    def _variant_values(attribute_id, values):
        return VariantAttribute.objects.filter(
            variant__product=OuterRef('pk'),
            attribute_option__attribute_type_id=attribute_id,
            attribute_option__value__in=list(values),
        )
