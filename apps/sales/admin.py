from django.contrib import admin
from .models import Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ['id', 'seller', 'provider', 'plan', 'qty', 'total_cost', 'is_activated', 'created_at']
    list_filter = ['provider', 'created_at']
    search_fields = ['hold_id', 'seller__name', 'note']
    readonly_fields = [
        'seller', 'provider', 'agent', 'plan', 'custom_price', 'price', 'seller_price',
        'company_price', 'qty', 'total_cost', 'hold_id', 'items', 'local_card',
        'activated_by', 'activated_at', 'created_at',
    ]

    def has_add_permission(self, request):
        return False
