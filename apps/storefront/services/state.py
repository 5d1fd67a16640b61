"""
Request-scoped layered navigation state: scope, facet items and the list of
applied filters. Everything here is rebuilt on every request.
"""

from dataclasses import dataclass
from typing import Any, List, Optional


@dataclass(frozen=True)
class Scope:
    """Category bounding an availability computation; None on search pages."""
    category_id: Optional[int] = None

    @classmethod
    def for_category(cls, category) -> 'Scope':
        return cls(category.pk if category is not None else None)

    @property
    def has_category(self) -> bool:
        return bool(self.category_id)


@dataclass
class FacetItem:
    """One option of a facet, or one applied filter value."""
    filter: Any
    value: str
    label: str
    count: int = 0
    is_selected: bool = False

    @property
    def attribute_id(self) -> Optional[int]:
        return getattr(self.filter, 'attribute_id', None)


class LayerState:
    """Filters applied on the current page, in the order they were applied."""

    def __init__(self):
        self._items: List[FacetItem] = []

    def add_filter(self, item: FacetItem) -> None:
        self._items.append(item)

    def get_filters(self) -> List[FacetItem]:
        return list(self._items)

    def values_for(self, attribute_id: int) -> List[str]:
        return [
            str(item.value) for item in self._items
            if item.attribute_id == attribute_id
        ]

    def is_active(self, attribute_id: int) -> bool:
        return any(item.attribute_id == attribute_id for item in self._items)

    def __len__(self):
        return len(self._items)
