from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import User, Provider, Agent, Seller


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Login identities with their tenant links."""

    list_display = ['username', 'account_type', 'provider', 'seller', 'is_active', 'last_login']
    list_filter = ['account_type', 'is_active', 'is_staff']
    search_fields = ['username', 'display_name']
    ordering = ['username']
    readonly_fields = ['created_at', 'last_login']

    fieldsets = (
        (None, {'fields': ('username', 'password', 'display_name')}),
        ('Account', {'fields': ('account_type', 'capabilities', 'provider', 'agent', 'seller')}),
        ('Permissions', {'fields': ('is_active', 'is_staff', 'is_superuser')}),
        ('Timestamps', {'fields': ('created_at', 'last_login')}),
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('username', 'password1', 'password2', 'account_type', 'provider', 'seller'),
        }),
    )
    filter_horizontal = []


@admin.register(Provider)
class ProviderAdmin(admin.ModelAdmin):
    list_display = ['name', 'active', 'wallet_amount', 'created_at']
    list_filter = ['active']
    search_fields = ['name']
    # Balances change only through the wallet and settlement services
    readonly_fields = ['wallet_amount', 'created_at']


@admin.register(Agent)
class AgentAdmin(admin.ModelAdmin):
    list_display = ['name', 'provider', 'active', 'wallet_amount']
    list_filter = ['active', 'provider']
    search_fields = ['name']
    readonly_fields = ['wallet_amount', 'created_at']


@admin.register(Seller)
class SellerAdmin(admin.ModelAdmin):
    list_display = ['name', 'provider', 'agent', 'active', 'wallet_amount', 'payment_amount', 'hold_id']
    list_filter = ['active', 'provider']
    search_fields = ['name']
    readonly_fields = ['wallet_amount', 'payment_amount', 'hold_id', 'hold_at', 'created_at']
