from rest_framework import serializers
from .models import WalletTransaction, TransactionSource


class FundRequestSerializer(serializers.Serializer):
    """Input for funding a seller."""

    seller_id = serializers.UUIDField()
    amount = serializers.IntegerField(min_value=1)
    source = serializers.ChoiceField(
        choices=TransactionSource.choices,
        default=TransactionSource.PROVIDER
    )
    note = serializers.CharField(required=False, allow_blank=True, default='')
    date = serializers.DateTimeField(required=False)


class ResetLockRequestSerializer(serializers.Serializer):
    seller_id = serializers.UUIDField()


class WalletTransactionSerializer(serializers.ModelSerializer):
    seller_name = serializers.CharField(source='seller.name', read_only=True)

    class Meta:
        model = WalletTransaction
        fields = [
            'id', 'seller', 'seller_name', 'provider', 'amount',
            'source', 'type', 'note', 'date', 'created_at',
        ]
        read_only_fields = fields


class FundResponseSerializer(serializers.Serializer):
    transaction_id = serializers.UUIDField(source='transaction.id')
    provider_wallet_amount = serializers.IntegerField()
    seller_wallet_amount = serializers.IntegerField()


class BalancesSerializer(serializers.Serializer):
    provider_wallet_amount = serializers.IntegerField()
    seller_wallet_amount = serializers.IntegerField()


class WalletTransactionFilterSerializer(serializers.Serializer):
    seller = serializers.UUIDField(required=False)


class ProviderFundRequestSerializer(serializers.Serializer):
    """Input for topping up a provider."""

    provider_id = serializers.UUIDField()
    amount = serializers.IntegerField(min_value=1)
    note = serializers.CharField(required=False, allow_blank=True, default='')
    date = serializers.DateTimeField(required=False)


class ProviderFundResponseSerializer(serializers.Serializer):
    transaction_id = serializers.UUIDField(source='transaction.id')
    provider_wallet_amount = serializers.IntegerField()
