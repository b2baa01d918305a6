from django.core.validators import MinValueValidator
from django.db import models
import uuid


class Payment(models.Model):
    """
    Immutable record of a settled hold.

    ``items`` snapshots each delivered unit (code, serial, plan title and
    cover, face price) and ``local_card`` snapshots the price row used, so
    later catalog or price edits never change a receipt. The only field
    written after creation is the activation marker.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    seller = models.ForeignKey(
        'accounts.Seller',
        on_delete=models.PROTECT,
        related_name='payments'
    )
    provider = models.ForeignKey(
        'accounts.Provider',
        on_delete=models.PROTECT,
        related_name='payments'
    )
    agent = models.ForeignKey(
        'accounts.Agent',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='payments'
    )
    plan = models.ForeignKey(
        'inventory.Plan',
        on_delete=models.PROTECT,
        related_name='payments'
    )
    custom_price = models.ForeignKey(
        'inventory.CustomPrice',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='payments'
    )

    # Amounts (integer currency units)
    price = models.BigIntegerField()
    seller_price = models.BigIntegerField()
    company_price = models.BigIntegerField(default=0)
    qty = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    total_cost = models.BigIntegerField()

    note = models.TextField(blank=True)
    hold_id = models.CharField(max_length=32, db_index=True)

    # Snapshots
    items = models.JSONField(default=list)
    local_card = models.JSONField(default=dict)

    # Activation marker
    activated_by = models.JSONField(null=True, blank=True)
    activated_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'payments'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['seller', '-created_at'], name='payments_seller_idx'),
            models.Index(fields=['provider', '-created_at'], name='payments_provider_idx'),
        ]

    def __str__(self):
        return f"Payment {self.pk} - {self.qty} x {self.price}"

    @property
    def codes(self):
        return ", ".join(item.get('code', '') for item in self.items)

    @property
    def is_activated(self):
        return self.activated_at is not None
