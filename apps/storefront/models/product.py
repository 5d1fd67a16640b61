from django.db import models
from django.utils.text import slugify
from simple_history.models import HistoricalRecords


class ProductQuerySet(models.QuerySet):

    def listable(self):
        return self.filter(is_active=True)

    def configurable(self):
        return self.filter(product_type=Product.TYPE_CONFIGURABLE)

    def in_category(self, category_id):
        return self.filter(categories=category_id)


class Product(models.Model):
    """
    Product shown in listings.

    A configurable product is a parent: it has no attribute values of its own
    and is sold through its variants. A simple product is sold as is.
    `is_in_stock` is set externally by stock synchronization.
    """
    TYPE_SIMPLE = 'simple'
    TYPE_CONFIGURABLE = 'configurable'
    TYPE_CHOICES = [
        (TYPE_SIMPLE, 'Simples'),
        (TYPE_CONFIGURABLE, 'Configurável'),
    ]

    name = models.CharField(
        max_length=255,
        verbose_name='Nome'
    )
    slug = models.SlugField(
        max_length=255,
        unique=True,
        verbose_name='Slug'
    )
    description = models.TextField(
        blank=True,
        verbose_name='Descrição'
    )
    product_type = models.CharField(
        max_length=20,
        choices=TYPE_CHOICES,
        default=TYPE_CONFIGURABLE,
        verbose_name='Tipo de produto'
    )
    categories = models.ManyToManyField(
        'Category',
        blank=True,
        related_name='products',
        verbose_name='Categorias'
    )
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        verbose_name='Preço',
        help_text='Somente para produtos simples'
    )
    is_active = models.BooleanField(
        default=True,
        verbose_name='Ativo'
    )
    is_in_stock = models.BooleanField(
        default=True,
        verbose_name='Em estoque'
    )
    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name='Criado em'
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name='Atualizado em'
    )

    history = HistoricalRecords()

    objects = ProductQuerySet.as_manager()

    class Meta:
        ordering = ['name']
        verbose_name = 'Produto'
        verbose_name_plural = 'Produtos'

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify(self.name)
        super().save(*args, **kwargs)

    @property
    def is_configurable(self):
        return self.product_type == self.TYPE_CONFIGURABLE

    @property
    def variant_count(self):
        return self.variants.count()

    @property
    def in_stock_variant_count(self):
        return self.variants.in_stock().count()

    def get_attribute_types(self):
        """Get all attribute types used by this product's variants."""
        from .attribute import AttributeType
        return AttributeType.objects.filter(
            options__variantattribute__variant__product=self
        ).distinct().order_by('display_order')
