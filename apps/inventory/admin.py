from django.contrib import admin
from django.db.models import Count, Q

from .models import Plan, Archive, CustomPrice, StockUnit, StockStatus


@admin.register(Plan)
class PlanAdmin(admin.ModelAdmin):
    list_display = ['title', 'active', 'created_at']
    list_filter = ['active']
    search_fields = ['title']


@admin.register(Archive)
class ArchiveAdmin(admin.ModelAdmin):
    """Import batches with their remaining Ready stock."""

    list_display = ['__str__', 'provider', 'plan', 'active', 'ready_count', 'unit_count', 'created_at']
    list_filter = ['active', 'provider', 'plan']

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(
            _unit_count=Count('stock_units'),
            _ready_count=Count('stock_units', filter=Q(stock_units__status=StockStatus.READY)),
        )

    def unit_count(self, obj):
        return obj._unit_count
    unit_count.short_description = 'Units'

    def ready_count(self, obj):
        return obj._ready_count
    ready_count.short_description = 'Ready'


@admin.register(CustomPrice)
class CustomPriceAdmin(admin.ModelAdmin):
    list_display = ['plan', 'provider', 'price', 'seller_price', 'company_price', 'active']
    list_filter = ['active', 'provider']


@admin.register(StockUnit)
class StockUnitAdmin(admin.ModelAdmin):
    list_display = ['serial', 'plan', 'provider', 'seller', 'status', 'hold_id', 'hold_at', 'sold_at']
    list_filter = ['status', 'active', 'provider', 'plan']
    search_fields = ['serial', 'hold_id']
    # Status changes go through the hold / settlement services only
    readonly_fields = ['status', 'hold_id', 'hold_at', 'sold_at', 'seller']
    exclude = ['code']

    def has_add_permission(self, request):
        """Units are created by archive import."""
        return False
