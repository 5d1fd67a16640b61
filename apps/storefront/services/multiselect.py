"""
Multiselect layered navigation.

URL pattern: ?size=M      -> one active value
             ?size=M,G    -> two active values (OR logic)

Selections travel as an ordered, comma-separated list of option values.
SelectedValues is that list at the boundary: parsing trims tokens and drops
empty ones and duplicates, so parse(s).encode() is the normalized form of s.
"""

import logging
from typing import Iterable, Optional

from django.db import DatabaseError

from .active_filters import is_noop_selection
from .attribute_config import MultiSelectConfig
from .availability import AvailableOptions
from .backend import AnyOf
from .state import Scope

logger = logging.getLogger(__name__)

DELIMITER = ','


class SelectedValues:
    """Ordered set of selected option values."""
    __slots__ = ('_values',)

    def __init__(self, values: Iterable = ()):
        ordered = []
        for value in values:
            token = str(value).strip()
            if token and token not in ordered:
                ordered.append(token)
        self._values = tuple(ordered)

    @classmethod
    def parse(cls, raw) -> 'SelectedValues':
        """Parse a raw request value: None, a token, a CSV list, or a list of those."""
        if raw is None:
            return cls()
        if isinstance(raw, (list, tuple)):
            chunks = raw
        else:
            chunks = [raw]

        tokens = []
        for chunk in chunks:
            if chunk is None:
                continue
            tokens.extend(str(chunk).split(DELIMITER))
        return cls(tokens)

    def encode(self) -> Optional[str]:
        """Join for a URL; None when empty so the parameter is dropped."""
        if not self._values:
            return None
        return DELIMITER.join(self._values)

    def toggle(self, value) -> 'SelectedValues':
        value = str(value)
        if value in self._values:
            return self.without(value)
        return SelectedValues(self._values + (value,))

    def without(self, value) -> 'SelectedValues':
        value = str(value)
        return SelectedValues(v for v in self._values if v != value)

    def __contains__(self, value):
        return str(value) in self._values

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def __bool__(self):
        return bool(self._values)

    def __eq__(self, other):
        if isinstance(other, SelectedValues):
            return self._values == other._values
        if isinstance(other, (list, tuple)):
            return list(self._values) == [str(v) for v in other]
        return NotImplemented

    def __hash__(self):
        return hash(self._values)

    def __repr__(self):
        return f"SelectedValues({list(self._values)!r})"


def get_raw_param(params, name):
    """Read every value sent for a parameter (QueryDict or plain dict)."""
    if hasattr(params, 'getlist'):
        values = params.getlist(name)
        return values or None
    return params.get(name)


class MultiSelectApplier:
    """
    Applies attribute filters with multiselect support (single or
    comma-separated values).

    For multiselect attributes the applier always handles the request itself,
    even for a single value, so the filter keeps its items and the facet block
    stays visible for adding or removing further values.

    When the selection covers every in-stock option of the current category
    the backend term is skipped: a terms query would still exclude parents
    whose variants have no value for the attribute or carry values not shown
    in the facet (combined sizes such as "XS/S").
    """

    def __init__(self, multiselect_config: MultiSelectConfig, available_options: AvailableOptions):
        self.multiselect_config = multiselect_config
        self.available_options = available_options

    def apply(self, attribute_filter, params):
        raw = get_raw_param(params, attribute_filter.request_var)
        if raw is None or raw == '':
            return attribute_filter.apply_single(params)

        attribute_id = attribute_filter.attribute_id
        if not self.multiselect_config.is_multiselect(attribute_id):
            return attribute_filter.apply_single(params)

        values = SelectedValues.parse(raw)
        if not values:
            return attribute_filter

        layer = attribute_filter.layer

        if self.should_skip(attribute_filter.scope, attribute_id, values):
            logger.debug(
                "Skipping backend term for attribute %s: %s covers every available option",
                attribute_id, list(values)
            )
        else:
            layer.product_collection.add_field_filter(attribute_id, AnyOf(values))

        # one state item per value: active filters bar and per-value remove links
        for value in values:
            layer.state.add_filter(
                attribute_filter.create_item(
                    value, attribute_filter.get_option_label(value), is_selected=True
                )
            )

        return attribute_filter

    def should_skip(self, scope: Scope, attribute_id: int, values) -> bool:
        """True when applying the selection would be the same as no filter."""
        if not scope.has_category:
            return False

        try:
            available = self.available_options.get_available(attribute_id, scope)
        except DatabaseError:
            logger.warning(
                "Could not read available options for attribute %s; applying filter as is",
                attribute_id, exc_info=True
            )
            return False

        return is_noop_selection(values, available)
