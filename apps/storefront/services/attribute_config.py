from typing import Dict

from apps.storefront.models import AttributeType


class MultiSelectConfig:
    """
    Checks whether an attribute type has multiselect layered navigation enabled.

    Results are memoized per attribute id for the lifetime of the instance,
    which is a single request.
    """

    def __init__(self):
        self._cache: Dict[int, bool] = {}

    def is_multiselect(self, attribute_id: int) -> bool:
        if attribute_id not in self._cache:
            value = AttributeType.objects.filter(pk=attribute_id).values_list(
                'is_multiselect_filter', flat=True
            ).first()
            self._cache[attribute_id] = bool(value)
        return self._cache[attribute_id]
