from rest_framework import serializers
from apps.inventory.models import CustomPrice
from .models import Payment


class HoldRequestSerializer(serializers.Serializer):
    """Input for reserving stock."""

    price_id = serializers.UUIDField()
    quantity = serializers.IntegerField(default=1)


class StaffHoldRequestSerializer(HoldRequestSerializer):
    seller_id = serializers.UUIDField()


class HoldResponseSerializer(serializers.Serializer):
    hold_token = serializers.CharField()
    price = serializers.IntegerField()
    cost_price = serializers.IntegerField()
    quantity = serializers.IntegerField()
    wallet_amount = serializers.IntegerField()


class SettleRequestSerializer(serializers.Serializer):
    """Input for settling a hold."""

    hold_token = serializers.CharField(max_length=32)
    note = serializers.CharField(required=False, allow_blank=True, default='')


class StaffSettleRequestSerializer(SettleRequestSerializer):
    seller_id = serializers.UUIDField()


class ReceiptSerializer(serializers.Serializer):
    payment_id = serializers.UUIDField()
    price = serializers.IntegerField()
    cost_price = serializers.IntegerField()
    quantity = serializers.IntegerField()
    total_cost = serializers.IntegerField()
    codes = serializers.CharField()
    name = serializers.CharField()
    wallet_amount = serializers.IntegerField()
    note = serializers.CharField(allow_blank=True)
    created_at = serializers.DateTimeField()


class ActivateRequestSerializer(serializers.Serializer):
    """Who activated the card on the customer's side."""

    activated_by = serializers.DictField(allow_empty=False)


class PaymentSerializer(serializers.ModelSerializer):
    """Payment as shown in the seller's history."""

    plan_title = serializers.CharField(source='plan.title', read_only=True)
    codes = serializers.CharField(read_only=True)
    is_activated = serializers.BooleanField(read_only=True)

    class Meta:
        model = Payment
        fields = [
            'id', 'plan', 'plan_title', 'price', 'seller_price', 'qty',
            'total_cost', 'note', 'codes', 'items', 'local_card',
            'activated_by', 'activated_at', 'is_activated', 'created_at',
        ]
        read_only_fields = fields


class RefundResponseSerializer(serializers.Serializer):
    transaction_id = serializers.UUIDField(source='transaction.id')
    refunded = serializers.IntegerField()
    restocked = serializers.IntegerField()
    seller_wallet_amount = serializers.IntegerField()


class CardSerializer(serializers.ModelSerializer):
    """A price the terminal can hold, with its plan's title and cover."""

    name = serializers.CharField(source='plan.title', read_only=True)
    image = serializers.CharField(source='plan.image', read_only=True)

    class Meta:
        model = CustomPrice
        fields = ['id', 'plan', 'name', 'image', 'price', 'seller_price']
        read_only_fields = fields
