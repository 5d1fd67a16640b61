"""
Correction of the facet options offered by the search backend.
"""

import logging
from typing import Iterable, List, Set

from django.db import DatabaseError

from apps.storefront.models import Product, VariantAttribute, in_stock_q
from .attribute_config import MultiSelectConfig
from .availability import AvailableOptions
from .state import FacetItem

logger = logging.getLogger(__name__)


class FacetRebuilder:
    """
    Adjusts the items of an attribute filter.

    1. Active multiselect attributes: the option list is always rebuilt from
       the attribute's options and the in-stock counts of the scope. Backend
       facets only describe products that already match the selection, so
       selecting "XS" would hide "XS/S" even though parents with "XS/S" are
       listed.

    2. Everything else: options without any in-stock parent among the
       listed products are dropped.
    """

    def __init__(self, multiselect_config: MultiSelectConfig, available_options: AvailableOptions):
        self.multiselect_config = multiselect_config
        self.available_options = available_options

    def adjust(self, attribute_filter, items: List[FacetItem]) -> List[FacetItem]:
        attribute_id = attribute_filter.attribute_id
        layer = attribute_filter.layer

        if (self.multiselect_config.is_multiselect(attribute_id)
                and layer.state.is_active(attribute_id)):
            try:
                return self.rebuild(attribute_filter)
            except DatabaseError:
                logger.warning(
                    "Could not rebuild facet for attribute %s; keeping backend items",
                    attribute_id, exc_info=True
                )
                return items

        if not items:
            return items

        product_ids = layer.product_collection.get_all_ids()
        if not product_ids:
            return items

        try:
            in_stock_values = self.values_with_in_stock_products(
                product_ids, attribute_id, [item.value for item in items]
            )
        except DatabaseError:
            logger.warning(
                "Could not check stock for attribute %s options; keeping backend items",
                attribute_id, exc_info=True
            )
            return items

        return [item for item in items if item.value in in_stock_values]

    def rebuild(self, attribute_filter) -> List[FacetItem]:
        """
        Rebuild the items from every option of the attribute.

        Counts come from the scope's category, or from the whole store when
        there is no category (search pages). Selected values are always kept
        so the user can deselect them.
        """
        attribute_id = attribute_filter.attribute_id
        layer = attribute_filter.layer
        active_values = set(layer.state.values_for(attribute_id))
        counts = self.available_options.get_counts(attribute_id, attribute_filter.scope)

        items = []
        for value, label in attribute_filter.get_option_labels().items():
            if value is None or value == '':
                continue

            value = str(value)
            is_active = value in active_values
            count = counts.get(value, 0)

            if is_active or count > 0:
                items.append(attribute_filter.create_item(
                    value,
                    label,
                    count=max(1, count) if is_active else count,
                    is_selected=is_active,
                ))

        logger.debug(
            "Rebuilt facet for attribute %s: %s",
            attribute_id, [(item.value, item.count) for item in items]
        )
        return items

    def values_with_in_stock_products(
        self,
        product_ids: Iterable[int],
        attribute_id: int,
        values: Iterable[str]
    ) -> Set[str]:
        """Return the values carried by an in-stock variant of an in-stock listed parent."""
        rows = (
            VariantAttribute.objects
            .filter(
                in_stock_q('variant__'),
                variant__product_id__in=list(product_ids),
                variant__product__product_type=Product.TYPE_CONFIGURABLE,
                variant__product__is_in_stock=True,
                attribute_option__attribute_type_id=attribute_id,
                attribute_option__value__in=list(values),
            )
            .values_list('attribute_option__value', flat=True)
            .distinct()
        )
        return {str(value) for value in rows}
