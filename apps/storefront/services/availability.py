"""
In-stock option availability per attribute and scope.
"""

import logging
from typing import Dict, List, Tuple

from django.db.models import Count

from apps.storefront.models import Product, VariantAttribute, in_stock_q
from .state import Scope

logger = logging.getLogger(__name__)


class AvailableOptions:
    """
    Returns the in-stock option values (and their counts) of an attribute
    within a scope.

    A value counts a parent when the parent is active, in stock, directly
    assigned to the scope's category (when there is one) and has at least one
    in-stock variant carrying the value. Simple products carry no variant
    values and never count.

    Results are cached per attribute and category for the duration of the
    request; stock is read as one consistent snapshot.
    """

    def __init__(self):
        self._cache: Dict[Tuple[int, int], Dict[str, int]] = {}

    def get_counts(self, attribute_id: int, scope: Scope) -> Dict[str, int]:
        """
        Return {option value: in-stock parent count} for the attribute.

        Without a category the count is global, over every parent in the
        store. That query is slower and only meant as a fallback.
        """
        cache_key = (attribute_id, scope.category_id or 0)
        if cache_key not in self._cache:
            self._cache[cache_key] = self._fetch_counts(attribute_id, scope.category_id)
        return self._cache[cache_key]

    def get_available(self, attribute_id: int, scope: Scope) -> List[str]:
        """Return the option values with at least one in-stock parent."""
        return list(self.get_counts(attribute_id, scope))

    def _fetch_counts(self, attribute_id, category_id=None) -> Dict[str, int]:
        queryset = VariantAttribute.objects.filter(
            in_stock_q('variant__'),
            attribute_option__attribute_type_id=attribute_id,
            variant__product__product_type=Product.TYPE_CONFIGURABLE,
            variant__product__is_active=True,
            variant__product__is_in_stock=True,
        )
        if category_id:
            queryset = queryset.filter(variant__product__categories=category_id)

        rows = (
            queryset
            .values('attribute_option__value')
            .annotate(count=Count('variant__product', distinct=True))
            .order_by()
        )

        counts = {
            str(row['attribute_option__value']): row['count']
            for row in rows
            if row['count'] > 0
        }
        logger.debug(
            "Available options for attribute %s in category %s: %s",
            attribute_id, category_id or 'ALL', counts
        )
        return counts
