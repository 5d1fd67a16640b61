"""
Stock-aware visibility of products in a listing.
"""

import logging
from typing import Dict

from django.db import DatabaseError
from django.db.models import Exists, OuterRef, Q

from apps.storefront.models import Product, Variant, VariantAttribute
from .active_filters import ActiveFilterExtractor

logger = logging.getLogger(__name__)


class VisibilityQueryBuilder:
    """
    Filters a product collection by stock.

    - Hides configurable products when all their variants are out of stock
    - When attribute filters are active: shows a configurable product only if
      ONE in-stock variant matches every filter at once

    The predicate is added once per collection; the collection's
    `visibility_applied` flag makes later calls no-ops.
    """

    def __init__(self, active_filters: ActiveFilterExtractor):
        self.active_filters = active_filters

    def apply(self, collection, layer) -> None:
        if collection.visibility_applied or collection.is_loaded:
            return

        try:
            filters = self.active_filters.extract(layer.state, layer.scope)
        except DatabaseError:
            # attribute matching is best effort; stock visibility is not
            logger.warning(
                "Could not read active attribute filters; applying stock filter only",
                exc_info=True
            )
            filters = {}

        collection.where(self.build_predicate(filters))
        collection.visibility_applied = True

    @staticmethod
    def build_predicate(filters: Dict) -> Q:
        """
        Build the inclusion condition for listed products.

        - Simple products: must be in stock
        - Configurable products: must be in stock AND have an in-stock
          variant matching ALL filters, e.g.
          (size = M OR size = G) AND (color = red) on the same variant
        """
        simple = Q(product_type=Product.TYPE_SIMPLE, is_in_stock=True)
        configurable = Q(product_type=Product.TYPE_CONFIGURABLE, is_in_stock=True) & Q(
            Exists(VisibilityQueryBuilder.matching_variants(filters))
        )
        return simple | configurable

    @staticmethod
    def matching_variants(filters: Dict):
        """In-stock variants of the outer product satisfying every filter."""
        variants = Variant.objects.in_stock().filter(product=OuterRef('pk'))

        for attribute_id, value in filters.items():
            values = value if isinstance(value, (list, tuple)) else [value]
            variants = variants.filter(Exists(
                VariantAttribute.objects.filter(
                    variant=OuterRef('pk'),
                    attribute_option__attribute_type_id=attribute_id,
                    attribute_option__value__in=[str(v) for v in values],
                )
            ))

        return variants
