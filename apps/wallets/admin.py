from django.contrib import admin
from .models import ProviderWalletTransaction, WalletTransaction


@admin.register(WalletTransaction)
class WalletTransactionAdmin(admin.ModelAdmin):
    list_display = ['id', 'seller', 'provider', 'amount', 'source', 'type', 'date']
    list_filter = ['source', 'type', 'provider']
    search_fields = ['seller__name', 'hold_id', 'note']
    readonly_fields = ['seller', 'provider', 'amount', 'source', 'type', 'hold_id', 'date', 'created_at']

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(ProviderWalletTransaction)
class ProviderWalletTransactionAdmin(admin.ModelAdmin):
    list_display = ['id', 'provider', 'amount', 'date']
    list_filter = ['provider']
    search_fields = ['provider__name', 'note']
    readonly_fields = ['provider', 'amount', 'date', 'created_at']

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
