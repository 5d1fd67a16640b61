from django.db import models
from django.core.validators import RegexValidator


class AttributeTypeQuerySet(models.QuerySet):

    def filterable(self):
        return self.filter(is_filterable=True)

    def variant_axes(self):
        """
        Attribute types that distinguish variants under a parent.

        The axis set is INFERRED from variant data: any attribute type with
        at least one option assigned to a variant is an axis.
        """
        return self.filter(options__variantattribute__isnull=False).distinct()


class AttributeType(models.Model):
    """
    Dynamic attribute types that can be added at runtime.
    Examples: Color, Size, Length, Material, etc.

    The slug doubles as the request variable of the attribute's filter
    (?size=M,G).
    """
    DATATYPE_CHOICES = [
        ('text', 'Texto'),
        ('number', 'Número'),
        ('decimal', 'Decimal'),
        ('color', 'Cor (Hex)'),
    ]

    name = models.CharField(
        max_length=100,
        verbose_name='Nome'
    )
    slug = models.SlugField(
        max_length=100,
        unique=True,
        verbose_name='Slug'
    )
    datatype = models.CharField(
        max_length=20,
        choices=DATATYPE_CHOICES,
        default='text',
        verbose_name='Tipo de dado'
    )
    display_order = models.PositiveIntegerField(
        default=0,
        verbose_name='Ordem de exibição'
    )
    is_filterable = models.BooleanField(
        default=True,
        verbose_name='Usar na navegação em camadas'
    )
    is_multiselect_filter = models.BooleanField(
        default=False,
        verbose_name='Usar na navegação em camadas com seleção múltipla',
        help_text='Permite selecionar vários valores ao mesmo tempo nos filtros.'
    )

    objects = AttributeTypeQuerySet.as_manager()

    class Meta:
        ordering = ['display_order', 'name']
        verbose_name = 'Tipo de Atributo'
        verbose_name_plural = 'Tipos de Atributos'

    def __str__(self):
        return self.name

    @property
    def request_var(self):
        return self.slug

    def get_option_labels(self):
        """Return {option value: display label} in display order."""
        return {
            option.value: option.get_display_value()
            for option in self.options.all()
        }


class AttributeOption(models.Model):
    """
    Possible values for each attribute type.

    The value is the option's identity: it is what variants carry, what the
    search backend indexes and what travels in the request parameter, so it
    can never contain the selection delimiter.
    """
    hex_color_validator = RegexValidator(
        regex=r'^#[0-9A-Fa-f]{6}$',
        message='Cor deve estar no formato hexadecimal (#RRGGBB)'
    )
    value_validator = RegexValidator(
        regex=r',',
        inverse_match=True,
        message='O valor não pode conter vírgulas'
    )

    attribute_type = models.ForeignKey(
        AttributeType,
        on_delete=models.CASCADE,
        related_name='options',
        verbose_name='Tipo de Atributo'
    )
    value = models.CharField(
        max_length=100,
        validators=[value_validator],
        verbose_name='Valor'
    )
    display_value = models.CharField(
        max_length=100,
        blank=True,
        verbose_name='Valor de exibição',
        help_text='Nome alternativo para exibição (opcional)'
    )
    color_hex = models.CharField(
        max_length=7,
        blank=True,
        validators=[hex_color_validator],
        verbose_name='Cor Hex',
        help_text='Para swatches de cor (#RRGGBB)'
    )
    display_order = models.PositiveIntegerField(
        default=0,
        verbose_name='Ordem de exibição'
    )

    class Meta:
        ordering = ['display_order', 'value']
        unique_together = ['attribute_type', 'value']
        verbose_name = 'Opção de Atributo'
        verbose_name_plural = 'Opções de Atributos'

    def __str__(self):
        return f"{self.attribute_type.name}: {self.get_display_value()}"

    def get_display_value(self):
        return self.display_value or self.value
