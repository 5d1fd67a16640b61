"""
Create sample catalog data for the layered navigation.
Run with: python manage.py seed_catalog
"""
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.storefront.models import (
    AttributeOption,
    AttributeType,
    Category,
    Product,
    Variant,
    VariantAttribute,
)

COLORS = [('preto', 'Preto', '#000000'), ('branco', 'Branco', '#FFFFFF'), ('azul', 'Azul', '#0000FF')]
SIZES = ['XS', 'S', 'XS/S', 'M', 'G']


class Command(BaseCommand):
    help = 'Cria dados de exemplo para a vitrine (atributos, categorias e produtos).'

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write("Creating attribute types...")
        color, _ = AttributeType.objects.get_or_create(
            slug='color',
            defaults={'name': 'Cor', 'datatype': 'color', 'display_order': 1}
        )
        size, _ = AttributeType.objects.get_or_create(
            slug='size',
            defaults={
                'name': 'Tamanho', 'datatype': 'text', 'display_order': 2,
                'is_multiselect_filter': True,
            }
        )

        self.stdout.write("Creating attribute options...")
        for i, (value, label, hex_code) in enumerate(COLORS):
            AttributeOption.objects.get_or_create(
                attribute_type=color,
                value=value,
                defaults={'display_value': label, 'color_hex': hex_code, 'display_order': i}
            )
        for i, value in enumerate(SIZES):
            AttributeOption.objects.get_or_create(
                attribute_type=size,
                value=value,
                defaults={'display_value': value, 'display_order': i}
            )

        self.stdout.write("Creating categories...")
        clothes, _ = Category.objects.get_or_create(
            slug='roupas', defaults={'name': 'Roupas', 'display_order': 1}
        )
        shirts, _ = Category.objects.get_or_create(
            slug='camisetas', defaults={'name': 'Camisetas', 'parent': clothes, 'display_order': 1}
        )
        dresses, _ = Category.objects.get_or_create(
            slug='vestidos', defaults={'name': 'Vestidos', 'parent': clothes, 'display_order': 2}
        )

        self.stdout.write("Creating products...")
        shirt = self._product('camiseta-basica', 'Camiseta Básica', [clothes, shirts])
        dress = self._product('vestido-midi', 'Vestido Midi', [clothes, dresses])
        socks = self._product(
            'meia-algodao', 'Meia de Algodão', [clothes],
            product_type=Product.TYPE_SIMPLE, price=Decimal('19.90')
        )

        self.stdout.write("Creating variants...")
        created = 0
        for color_opt in color.options.all():
            for size_opt in size.options.exclude(value='XS/S'):
                sku = f'CAM-{color_opt.value[:3].upper()}-{size_opt.value}'
                # black M shirts are sold out
                stock = 0 if (color_opt.value, size_opt.value) == ('preto', 'M') else 10
                created += self._variant(shirt, sku, [color_opt, size_opt], Decimal('79.90'), stock)

        # the XS/S dress has no stock: the XS/S option must not show up in the size facet
        dress_sizes = {'XS': 5, 'S': 3, 'XS/S': 0}
        for value, stock in dress_sizes.items():
            size_opt = size.options.get(value=value)
            color_opt = color.options.get(value='preto')
            sku = f'VES-{value.replace("/", "")}'
            created += self._variant(dress, sku, [color_opt, size_opt], Decimal('189.90'), stock)

        self.stdout.write(self.style.SUCCESS(
            f"Catalog ready: {Product.objects.count()} products, "
            f"{created} new variants, simple product '{socks.name}'."
        ))

    def _product(self, slug, name, categories, product_type=Product.TYPE_CONFIGURABLE, price=None):
        product, _ = Product.objects.get_or_create(
            slug=slug,
            defaults={'name': name, 'product_type': product_type, 'price': price}
        )
        product.categories.add(*categories)
        return product

    def _variant(self, product, sku, options, price, stock):
        variant, created = Variant.objects.get_or_create(
            sku=sku,
            defaults={
                'product': product,
                'name': f"{product.name} {' '.join(o.display_value or o.value for o in options)}",
                'sell_price': price,
                'stock_quantity': stock,
            }
        )
        if created:
            for option in options:
                VariantAttribute.objects.create(variant=variant, attribute_option=option)
        return int(created)
