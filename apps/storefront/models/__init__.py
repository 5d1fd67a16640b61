"""
Product store models for the storefront.

Model Hierarchy:
- Category: Hierarchical listing scope
- AttributeType: Dynamic attribute types (Color, Size), flagged for multiselect filtering
- AttributeOption: Values for each attribute type (red, M, XS/S)
- Product: Simple product or configurable parent
- Variant: Individual SKU of a configurable parent, with stock and option values
"""

from .category import Category
from .product import Product
from .attribute import AttributeType, AttributeOption
from .variant import Variant, VariantAttribute, in_stock_q

__all__ = [
    'Category',
    'Product',
    'AttributeType',
    'AttributeOption',
    'Variant',
    'VariantAttribute',
    'in_stock_q',
]
