from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q
import uuid


class StockStatus(models.TextChoices):
    READY = 'Ready', 'Ready'
    HOLD = 'Hold', 'Hold'
    SOLD = 'Sold', 'Sold'


class Plan(models.Model):
    """Catalog entry (card title and image) shared by every provider."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=200)
    image = models.URLField(blank=True)
    active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'plans'
        ordering = ['title']

    def __str__(self):
        return self.title


class Archive(models.Model):
    """Import batch of stock units for one provider and plan."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    provider = models.ForeignKey(
        'accounts.Provider',
        on_delete=models.PROTECT,
        related_name='archives'
    )
    plan = models.ForeignKey(
        Plan,
        on_delete=models.PROTECT,
        related_name='archives'
    )
    active = models.BooleanField(default=True)
    note = models.CharField(max_length=255, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'archives'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.plan} batch {self.created_at:%Y-%m-%d}"


class CustomPrice(models.Model):
    """
    Provider-scoped price of a plan.

    ``price`` is the face price shown to the end customer, ``seller_price``
    is what the seller's wallet is charged, ``company_price`` is the
    provider's own cost.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    provider = models.ForeignKey(
        'accounts.Provider',
        on_delete=models.PROTECT,
        related_name='custom_prices'
    )
    plan = models.ForeignKey(
        Plan,
        on_delete=models.PROTECT,
        related_name='custom_prices'
    )
    price = models.BigIntegerField(validators=[MinValueValidator(0)])
    seller_price = models.BigIntegerField(validators=[MinValueValidator(0)])
    company_price = models.BigIntegerField(default=0, validators=[MinValueValidator(0)])
    active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'custom_prices'
        constraints = [
            models.UniqueConstraint(
                fields=['provider', 'plan'],
                condition=Q(active=True),
                name='unique_active_price_per_provider_plan',
            ),
        ]

    def __str__(self):
        return f"{self.plan} @ {self.price}"


class StockUnit(models.Model):
    """
    One sellable card.

    Only the status fields ever change after import:
    Ready -> Hold (reservation), Hold -> Ready (expiry), Hold -> Sold
    (settlement), Sold -> Ready (refund). Every transition is a conditional
    bulk update.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    code = models.CharField(max_length=255)
    serial = models.CharField(max_length=255, blank=True)

    status = models.CharField(
        max_length=5,
        choices=StockStatus.choices,
        default=StockStatus.READY
    )
    hold_id = models.CharField(max_length=32, null=True, blank=True)
    hold_at = models.DateTimeField(null=True, blank=True)
    sold_at = models.DateTimeField(null=True, blank=True)

    provider = models.ForeignKey(
        'accounts.Provider',
        on_delete=models.PROTECT,
        related_name='stock_units'
    )
    seller = models.ForeignKey(
        'accounts.Seller',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='stock_units'
    )
    plan = models.ForeignKey(
        Plan,
        on_delete=models.PROTECT,
        related_name='stock_units'
    )
    archive = models.ForeignKey(
        Archive,
        on_delete=models.CASCADE,
        related_name='stock_units'
    )
    active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'stock_units'
        indexes = [
            models.Index(fields=['plan', 'status', 'active'], name='stock_available_idx'),
            models.Index(fields=['hold_id'], name='stock_hold_id_idx'),
            models.Index(fields=['status', 'hold_at'], name='stock_hold_expiry_idx'),
        ]

    def __str__(self):
        return f"{self.serial or self.pk} ({self.status})"
