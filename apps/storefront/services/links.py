"""
Navigation links for facet items.

For multiselect attributes an item's link toggles its value in the
comma-separated parameter instead of replacing the parameter:
  - value not active: ?size=current,new
  - value active:     ?size=remaining (removed; dropped entirely when empty)
"""

from typing import Dict, Optional

from apps.storefront.conf import get_setting
from apps.storefront.models import AttributeType
from .attribute_config import MultiSelectConfig
from .filters import AttributeBoundFilter
from .multiselect import SelectedValues, get_raw_param
from .state import FacetItem


class FilterLinkBuilder:

    def __init__(self, request, multiselect_config: MultiSelectConfig):
        self.request = request
        self.multiselect_config = multiselect_config
        self.page_var = get_setting('PAGE_VAR')

    def get_url(self, item: FacetItem) -> str:
        """Link applied when the item is clicked; marks `item.is_selected`."""
        request_var = item.filter.request_var

        if not self._is_multiselect_item(item):
            return self.build_url({request_var: item.value, self.page_var: None})

        current = self.current_values(request_var)
        item.is_selected = item.value in current
        return self.build_url({
            request_var: current.toggle(item.value).encode(),
            self.page_var: None,
        })

    def get_remove_url(self, item: FacetItem) -> str:
        """Link removing just this item's value."""
        request_var = item.filter.request_var

        if not self._is_multiselect_item(item):
            return self.build_url({request_var: None})

        current = self.current_values(request_var)
        return self.build_url({request_var: current.without(item.value).encode()})

    def build_swatch_url(self, attribute_slug: str, value) -> str:
        """Toggle link for a swatch, addressed by attribute code."""
        attribute = AttributeType.objects.filter(slug=attribute_slug).first()
        if attribute is None or not self.multiselect_config.is_multiselect(attribute.pk):
            return self.build_url({attribute_slug: str(value), self.page_var: None})

        current = self.current_values(attribute_slug)
        return self.build_url({
            attribute_slug: current.toggle(value).encode(),
            self.page_var: None,
        })

    def current_values(self, request_var: str) -> SelectedValues:
        return SelectedValues.parse(get_raw_param(self.request.GET, request_var))

    def build_url(self, updates: Dict[str, Optional[str]]) -> str:
        """Current URL with `updates` applied; a None value removes the parameter."""
        query = self.request.GET.copy()
        for name, value in updates.items():
            if value is None:
                query.pop(name, None)
            else:
                query[name] = value

        encoded = query.urlencode(safe=',/')
        if not encoded:
            return self.request.path
        return f"{self.request.path}?{encoded}"

    def _is_multiselect_item(self, item: FacetItem) -> bool:
        if not isinstance(item.filter, AttributeBoundFilter):
            return False
        return self.multiselect_config.is_multiselect(item.filter.attribute_id)
