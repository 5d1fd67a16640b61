"""
Filters of a layered navigation page.

AttributeBoundFilter is the capability the navigation services look for:
anything bound to an attribute type and a scope. Structural filters such as
CategoryFilter do not implement it and are ignored by the variant-level logic.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from django.db.models import Count

from apps.storefront.conf import get_setting
from apps.storefront.models import Category, Product
from .state import FacetItem, Scope


class LayerFilter:
    """Base filter: reads its request variable and offers facet items."""
    request_var: Optional[str] = None

    def __init__(self, layer):
        self.layer = layer
        self._items: Optional[List[FacetItem]] = None

    @property
    def name(self) -> str:
        return self.request_var

    def apply(self, params):
        raise NotImplementedError

    def get_items(self) -> List[FacetItem]:
        if self._items is None:
            self._items = self._init_items()
        return self._items

    def set_items(self, items) -> None:
        self._items = list(items)

    def _init_items(self) -> List[FacetItem]:
        return []

    def create_item(self, value, label, count=0, is_selected=False) -> FacetItem:
        return FacetItem(
            filter=self,
            value=str(value),
            label=label,
            count=count,
            is_selected=is_selected,
        )


class AttributeBoundFilter(ABC):

    @property
    @abstractmethod
    def attribute(self):
        """The AttributeType this filter is bound to."""

    @property
    @abstractmethod
    def scope(self) -> Scope:
        """Scope the filter's availability is computed in."""

    @property
    def attribute_id(self) -> int:
        return self.attribute.pk


class AttributeFilter(LayerFilter, AttributeBoundFilter):
    """
    Filter on one attribute type (?color=red, ?size=M,G).

    apply() goes through the multiselect applier, which falls back to
    apply_single() for single-value attributes.
    """

    def __init__(self, layer, attribute):
        super().__init__(layer)
        self._attribute = attribute
        self._labels: Optional[Dict[str, str]] = None

    @property
    def attribute(self):
        return self._attribute

    @property
    def scope(self) -> Scope:
        return self.layer.scope

    @property
    def request_var(self) -> str:
        return self._attribute.request_var

    @property
    def name(self) -> str:
        return self._attribute.name

    def get_option_labels(self) -> Dict[str, str]:
        if self._labels is None:
            self._labels = self._attribute.get_option_labels()
        return self._labels

    def get_option_label(self, value) -> str:
        return self.get_option_labels().get(str(value), str(value))

    def apply(self, params):
        return self.layer.context.multiselect_applier.apply(self, params)

    def apply_single(self, params):
        """Apply one value as an equality term and hide the facet block."""
        value = params.get(self.request_var)
        if not value:
            return self

        value = str(value)
        self.layer.product_collection.add_field_filter(self.attribute_id, value)
        self.layer.state.add_filter(
            self.create_item(value, self.get_option_label(value), is_selected=True)
        )
        self.set_items([])
        return self

    def _init_items(self) -> List[FacetItem]:
        counts = self.layer.product_collection.get_facet_counts(self.attribute_id)
        items = [
            self.create_item(value, label, counts[value])
            for value, label in self.get_option_labels().items()
            if counts.get(value)
        ]
        return self.layer.context.facet_rebuilder.adjust(self, items)


class CategoryFilter(LayerFilter):
    """Narrows the listing to a child category (?cat=<slug>)."""

    def __init__(self, layer):
        super().__init__(layer)
        self.request_var = get_setting('CATEGORY_VAR')

    @property
    def name(self) -> str:
        return 'Categoria'

    def apply(self, params):
        slug = params.get(self.request_var)
        if not slug:
            return self

        category = Category.objects.filter(slug=slug, is_active=True).first()
        if category is None:
            return self

        self.layer.product_collection.add_category_filter(category.pk)
        self.layer.state.add_filter(
            self.create_item(category.slug, category.name, is_selected=True)
        )
        self.set_items([])
        return self

    def _init_items(self) -> List[FacetItem]:
        parent = self.layer.current_category
        if parent is None:
            return []

        children = list(parent.get_active_children())
        if not children:
            return []

        product_ids = self.layer.product_collection.get_all_ids()
        counts = dict(
            Product.objects
            .filter(pk__in=product_ids, categories__in=children)
            .values('categories')
            .annotate(count=Count('pk', distinct=True))
            .order_by()
            .values_list('categories', 'count')
        )
        return [
            self.create_item(child.slug, child.name, counts[child.pk])
            for child in children
            if counts.get(child.pk)
        ]
