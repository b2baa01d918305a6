from rest_framework import serializers
from .models import User, Seller


class SellerBalanceSerializer(serializers.ModelSerializer):
    """Seller account as shown on the POS."""

    provider_name = serializers.CharField(source='provider.name', read_only=True)

    class Meta:
        model = Seller
        fields = [
            'id',
            'name',
            'provider',
            'provider_name',
            'agent',
            'active',
            'wallet_amount',
            'payment_amount',
        ]
        read_only_fields = fields


class UserSerializer(serializers.ModelSerializer):
    """Login identity with the seller balance attached when there is one."""

    seller = SellerBalanceSerializer(read_only=True)

    class Meta:
        model = User
        fields = [
            'id',
            'username',
            'display_name',
            'account_type',
            'capabilities',
            'provider',
            'agent',
            'seller',
            'created_at',
            'last_login',
        ]
        read_only_fields = fields


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    username = serializers.CharField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )
    device = serializers.CharField(required=False, allow_blank=True, max_length=128)
