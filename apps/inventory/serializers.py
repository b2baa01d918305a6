from rest_framework import serializers
from .models import Archive, StockStatus


class ArchiveRowSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=255)
    serial = serializers.CharField(max_length=255, required=False, allow_blank=True)


class ArchiveImportSerializer(serializers.Serializer):
    """Input for importing a batch of cards."""

    provider = serializers.UUIDField(required=False, help_text="Admins only; providers import into their own tenant")
    plan = serializers.UUIDField()
    note = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')
    rows = ArchiveRowSerializer(many=True, allow_empty=False)


class ArchiveActiveSerializer(serializers.Serializer):
    active = serializers.BooleanField()


class ArchiveSerializer(serializers.ModelSerializer):
    """Archive with per-status unit counts."""

    plan_title = serializers.CharField(source='plan.title', read_only=True)
    total = serializers.SerializerMethodField()
    ready = serializers.SerializerMethodField()

    class Meta:
        model = Archive
        fields = ['id', 'provider', 'plan', 'plan_title', 'active', 'note', 'created_at', 'total', 'ready']
        read_only_fields = fields

    def get_total(self, obj):
        return obj.stock_units.count()

    def get_ready(self, obj):
        return obj.stock_units.filter(status=StockStatus.READY).count()
