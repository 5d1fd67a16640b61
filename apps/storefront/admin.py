from django.contrib import admin
from django.utils.html import format_html
from import_export import resources, fields
from import_export.admin import ImportExportModelAdmin
from import_export.widgets import ForeignKeyWidget
from adminsortable2.admin import SortableAdminMixin, SortableAdminBase, SortableInlineAdminMixin
from simple_history.admin import SimpleHistoryAdmin

from .models import (
    Category,
    Product,
    AttributeType,
    AttributeOption,
    Variant,
    VariantAttribute,
)


# =============================================================================
# Import/Export Resources
# =============================================================================

class VariantResource(resources.ModelResource):
    """Resource for importing/exporting variant stock."""

    product_name = fields.Field(
        column_name='product_name',
        attribute='product',
        widget=ForeignKeyWidget(Product, 'name')
    )

    class Meta:
        model = Variant
        import_id_fields = ['sku']
        fields = (
            'sku', 'product_name', 'name', 'sell_price', 'stock_quantity',
            'track_inventory', 'allow_backorder', 'is_active'
        )
        export_order = fields


# =============================================================================
# Inlines
# =============================================================================

class AttributeOptionInline(SortableInlineAdminMixin, admin.TabularInline):
    model = AttributeOption
    extra = 1
    fields = ['value', 'display_value', 'color_hex', 'display_order']


class VariantAttributeInline(admin.TabularInline):
    model = VariantAttribute
    extra = 1
    autocomplete_fields = ['attribute_option']


class VariantInline(admin.TabularInline):
    model = Variant
    extra = 0
    fields = ['sku', 'name', 'sell_price', 'stock_quantity', 'is_active']
    readonly_fields = ['sku', 'name']
    show_change_link = True
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


# =============================================================================
# Model Admins
# =============================================================================

@admin.register(Category)
class CategoryAdmin(SortableAdminMixin, admin.ModelAdmin):
    list_display = ['name', 'full_path', 'is_active', 'display_order']
    list_filter = ['is_active', 'parent']
    search_fields = ['name', 'slug']
    prepopulated_fields = {'slug': ('name',)}
    autocomplete_fields = ['parent']


@admin.register(Product)
class ProductAdmin(SimpleHistoryAdmin):
    list_display = [
        'name', 'slug', 'product_type', 'variant_count',
        'in_stock_variant_count', 'is_in_stock', 'is_active'
    ]
    list_filter = ['product_type', 'is_active', 'is_in_stock', 'categories']
    search_fields = ['name', 'slug', 'description']
    prepopulated_fields = {'slug': ('name',)}
    readonly_fields = ['variant_count', 'in_stock_variant_count', 'created_at', 'updated_at']
    filter_horizontal = ['categories']
    inlines = [VariantInline]

    fieldsets = (
        (None, {
            'fields': ('name', 'slug', 'product_type', 'description', 'categories')
        }),
        ('Venda', {
            'fields': ('price', 'is_active', 'is_in_stock')
        }),
        ('Informações', {
            'fields': ('variant_count', 'in_stock_variant_count', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )


@admin.register(AttributeType)
class AttributeTypeAdmin(SortableAdminMixin, admin.ModelAdmin):
    list_display = [
        'name', 'slug', 'datatype', 'option_count',
        'is_filterable', 'is_multiselect_filter', 'display_order'
    ]
    list_editable = ['is_filterable', 'is_multiselect_filter', 'display_order']
    list_filter = ['is_filterable', 'is_multiselect_filter']
    search_fields = ['name', 'slug']
    prepopulated_fields = {'slug': ('name',)}
    inlines = [AttributeOptionInline]

    fieldsets = (
        (None, {
            'fields': ('name', 'slug', 'datatype', 'display_order')
        }),
        ('Navegação em camadas', {
            'fields': ('is_filterable', 'is_multiselect_filter')
        }),
    )

    def option_count(self, obj):
        return obj.options.count()
    option_count.short_description = 'Opções'


@admin.register(AttributeOption)
class AttributeOptionAdmin(admin.ModelAdmin):
    list_display = ['value', 'display_value', 'attribute_type', 'color_swatch', 'display_order']
    list_filter = ['attribute_type']
    list_editable = ['display_order']
    search_fields = ['value', 'display_value', 'attribute_type__name']
    autocomplete_fields = ['attribute_type']

    def color_swatch(self, obj):
        if obj.color_hex:
            return format_html(
                '<div style="width: 20px; height: 20px; background-color: {}; '
                'border: 1px solid #ccc; border-radius: 3px;"></div>',
                obj.color_hex
            )
        return '-'
    color_swatch.short_description = 'Cor'


@admin.register(Variant)
class VariantAdmin(SortableAdminBase, ImportExportModelAdmin, SimpleHistoryAdmin):
    resource_class = VariantResource
    list_display = [
        'sku', 'name', 'product', 'sell_price',
        'stock_quantity', 'stock_status', 'is_active'
    ]
    list_filter = ['product', 'is_active', 'track_inventory']
    list_editable = ['sell_price', 'stock_quantity', 'is_active']
    search_fields = ['sku', 'name', 'product__name']
    autocomplete_fields = ['product']
    readonly_fields = ['created_at', 'updated_at', 'is_in_stock']
    inlines = [VariantAttributeInline]
    list_per_page = 50

    fieldsets = (
        (None, {
            'fields': ('product', 'sku', 'name', 'is_active')
        }),
        ('Preços', {
            'fields': ('sell_price',)
        }),
        ('Estoque', {
            'fields': (
                'stock_quantity', 'track_inventory', 'allow_backorder', 'is_in_stock'
            )
        }),
        ('Informações', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    actions = ['mark_in_stock', 'mark_out_of_stock']

    def stock_status(self, obj):
        if not obj.is_active:
            color, label = 'gray', 'Inativa'
        elif not obj.track_inventory:
            color, label = 'blue', 'Não rastreado'
        elif obj.stock_quantity <= 0:
            if obj.allow_backorder:
                color, label = 'orange', 'Sob encomenda'
            else:
                color, label = 'red', 'Sem estoque'
        else:
            color, label = 'green', 'Em estoque'
        return format_html('<span style="color: {};">{}</span>', color, label)
    stock_status.short_description = 'Status Estoque'

    @admin.action(description='Marcar como em estoque (10 unidades)')
    def mark_in_stock(self, request, queryset):
        count = queryset.update(stock_quantity=10)
        self.message_user(request, f'{count} variantes atualizadas.')

    @admin.action(description='Marcar como sem estoque')
    def mark_out_of_stock(self, request, queryset):
        count = queryset.update(stock_quantity=0)
        self.message_user(request, f'{count} variantes atualizadas.')


# =============================================================================
# Admin Site Configuration
# =============================================================================

admin.site.site_header = 'Vitrine Admin'
admin.site.site_title = 'Vitrine'
admin.site.index_title = 'Painel de Administração'
