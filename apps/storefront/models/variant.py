from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q
from simple_history.models import HistoricalRecords


def in_stock_q(prefix=''):
    """
    Stock condition of a variant as a Q object.

    `prefix` lets the same condition run from a related model, e.g.
    in_stock_q('variant__') on VariantAttribute.
    """
    return Q(**{f'{prefix}is_active': True}) & (
        Q(**{f'{prefix}track_inventory': False})
        | Q(**{f'{prefix}stock_quantity__gt': 0})
        | Q(**{f'{prefix}allow_backorder': True})
    )


class VariantQuerySet(models.QuerySet):

    def in_stock(self):
        return self.filter(in_stock_q())


class Variant(models.Model):
    """
    Individual SKU owned by exactly one configurable product.
    Each variant is a unique combination of attribute options; only its
    stock changes while a listing is being computed.
    """
    product = models.ForeignKey(
        'storefront.Product',
        on_delete=models.CASCADE,
        related_name='variants',
        verbose_name='Produto'
    )
    sku = models.CharField(
        max_length=100,
        unique=True,
        verbose_name='SKU'
    )
    name = models.CharField(
        max_length=255,
        blank=True,
        verbose_name='Nome',
        help_text='Nome personalizado (gerado automaticamente se vazio)'
    )
    sell_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))],
        verbose_name='Preço de venda'
    )

    # Inventory
    stock_quantity = models.IntegerField(
        default=0,
        verbose_name='Quantidade em estoque'
    )
    track_inventory = models.BooleanField(
        default=True,
        verbose_name='Rastrear estoque'
    )
    allow_backorder = models.BooleanField(
        default=False,
        verbose_name='Permitir compra sem estoque'
    )

    is_active = models.BooleanField(
        default=True,
        verbose_name='Ativo'
    )
    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name='Criado em'
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name='Atualizado em'
    )

    attribute_options = models.ManyToManyField(
        'storefront.AttributeOption',
        through='VariantAttribute',
        related_name='variants',
        verbose_name='Opções de atributos'
    )

    history = HistoricalRecords()

    objects = VariantQuerySet.as_manager()

    class Meta:
        ordering = ['product', 'sku']
        verbose_name = 'Variante'
        verbose_name_plural = 'Variantes'

    def __str__(self):
        return self.name or self.sku

    def get_option_value(self, attribute_slug):
        """Get the option value for a specific attribute type."""
        try:
            va = self.variantattribute_set.select_related(
                'attribute_option__attribute_type'
            ).get(attribute_option__attribute_type__slug=attribute_slug)
            return va.attribute_option.value
        except VariantAttribute.DoesNotExist:
            return None

    def get_options_dict(self):
        """Return dict of {attribute_slug: option_value}"""
        return {
            va.attribute_option.attribute_type.slug: va.attribute_option.value
            for va in self.variantattribute_set.select_related(
                'attribute_option__attribute_type'
            )
        }

    @property
    def is_in_stock(self):
        if not self.is_active:
            return False
        if not self.track_inventory:
            return True
        return self.stock_quantity > 0 or self.allow_backorder


class VariantAttribute(models.Model):
    """
    Through model linking Variant to AttributeOption.
    Ensures each variant has only one value per attribute type.
    """
    variant = models.ForeignKey(
        Variant,
        on_delete=models.CASCADE,
        verbose_name='Variante'
    )
    attribute_option = models.ForeignKey(
        'storefront.AttributeOption',
        on_delete=models.CASCADE,
        verbose_name='Opção de Atributo'
    )

    class Meta:
        unique_together = ['variant', 'attribute_option']
        verbose_name = 'Atributo da Variante'
        verbose_name_plural = 'Atributos das Variantes'

    def __str__(self):
        return f"{self.variant.sku} - {self.attribute_option}"

    def save(self, *args, **kwargs):
        # Only one option per attribute type per variant
        VariantAttribute.objects.filter(
            variant=self.variant,
            attribute_option__attribute_type=self.attribute_option.attribute_type
        ).exclude(pk=self.pk).delete()

        super().save(*args, **kwargs)
