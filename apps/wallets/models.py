from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
import uuid


class TransactionSource(models.TextChoices):
    PROVIDER = 'PROVIDER', 'Provider'
    ADMIN = 'ADMIN', 'Admin'


class TransactionType(models.TextChoices):
    DEPOSIT = 'DEPOSIT', 'Deposit'
    REFUND = 'REFUND', 'Refund'


class WalletTransaction(models.Model):
    """
    Wallet event crediting a seller.

    DEPOSIT records are fundings: with source PROVIDER the provider's
    balance was debited by the same amount; ADMIN funding comes from
    outside the hierarchy. REFUND records are written when a payment is
    refunded and cannot be reversed. Records are never edited. Deleting a
    deposit goes through the reversal service, which moves the money back.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    seller = models.ForeignKey(
        'accounts.Seller',
        on_delete=models.PROTECT,
        related_name='wallet_transactions'
    )
    provider = models.ForeignKey(
        'accounts.Provider',
        on_delete=models.PROTECT,
        related_name='wallet_transactions'
    )
    amount = models.PositiveBigIntegerField(validators=[MinValueValidator(1)])
    source = models.CharField(
        max_length=10,
        choices=TransactionSource.choices,
        default=TransactionSource.PROVIDER
    )
    type = models.CharField(
        max_length=10,
        choices=TransactionType.choices,
        default=TransactionType.DEPOSIT
    )
    hold_id = models.CharField(max_length=32, db_index=True)
    note = models.TextField(blank=True)
    date = models.DateTimeField(default=timezone.now)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'wallet_transactions'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['provider', '-created_at'], name='wallet_tx_provider_idx'),
            models.Index(fields=['seller', '-created_at'], name='wallet_tx_seller_idx'),
        ]

    def __str__(self):
        return f"{self.get_type_display()} {self.amount} -> {self.seller}"


class ProviderWalletTransaction(models.Model):
    """Admin top-up of a provider's balance, the source of all provider funds."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    provider = models.ForeignKey(
        'accounts.Provider',
        on_delete=models.PROTECT,
        related_name='wallet_topups'
    )
    amount = models.PositiveBigIntegerField(validators=[MinValueValidator(1)])
    note = models.TextField(blank=True)
    date = models.DateTimeField(default=timezone.now)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'provider_wallet_transactions'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['provider', '-created_at'], name='provider_topup_idx'),
        ]

    def __str__(self):
        return f"Top-up {self.amount} -> {self.provider}"
