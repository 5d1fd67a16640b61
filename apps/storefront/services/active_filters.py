"""
Detection of the active attribute filters a listing must honor at variant level.
"""

import logging
from typing import Dict, List, Optional, Set, Union

from apps.storefront.models import AttributeType
from .attribute_config import MultiSelectConfig
from .availability import AvailableOptions
from .filters import AttributeBoundFilter
from .state import LayerState, Scope

logger = logging.getLogger(__name__)

FilterValue = Union[str, List[str]]


def is_noop_selection(selected, available) -> bool:
    """
    True when the selection covers every available option.

    Requiring "variant value in available options" is then the same as no
    constraint at all, except that it would still drop parents whose variants
    carry values outside the visible facet or lack the attribute.
    """
    available = {str(value) for value in available}
    if not available:
        return False
    return available.issubset(str(value) for value in selected)


class ActiveFilterExtractor:
    """
    Reduces the page state to {attribute_id: value} or {attribute_id: [values]}.

    Only filters bound to an attribute that distinguishes variants are kept.
    Several applied values on the same attribute collapse into a list (OR).
    Multiselect attributes whose selection covers every in-stock option of
    the current category are removed: the caller must treat them as "no
    constraint on this attribute".
    """

    def __init__(self, multiselect_config: MultiSelectConfig, available_options: AvailableOptions):
        self.multiselect_config = multiselect_config
        self.available_options = available_options
        self._variant_axis_ids: Optional[Set[int]] = None

    def extract(self, state: LayerState, scope: Scope) -> Dict[int, FilterValue]:
        filters: Dict[int, FilterValue] = {}

        for item in state.get_filters():
            if not isinstance(item.filter, AttributeBoundFilter):
                continue

            attribute_id = item.filter.attribute_id
            if not self.is_variant_axis(attribute_id):
                continue

            value = str(item.value)
            if attribute_id in filters:
                current = filters[attribute_id]
                if not isinstance(current, list):
                    current = [current]
                if value not in current:
                    current.append(value)
                filters[attribute_id] = current
            else:
                filters[attribute_id] = value

        for attribute_id in list(filters):
            if not self.multiselect_config.is_multiselect(attribute_id):
                continue

            if not scope.has_category:
                # no category: cannot tell which options are available
                continue

            value = filters[attribute_id]
            selected = value if isinstance(value, list) else [value]
            available = self.available_options.get_available(attribute_id, scope)

            if is_noop_selection(selected, available):
                logger.debug(
                    "Attribute %s selection %s covers all available options; no constraint",
                    attribute_id, selected
                )
                del filters[attribute_id]

        return filters

    def is_variant_axis(self, attribute_id: int) -> bool:
        if self._variant_axis_ids is None:
            self._variant_axis_ids = set(
                AttributeType.objects.variant_axes().values_list('pk', flat=True)
            )
        return attribute_id in self._variant_axis_ids
