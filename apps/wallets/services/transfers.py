"""Wallet transfers - funding sellers and providers, reversing a funding."""

import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from django.db import transaction, DatabaseError
from django.db.models import F, QuerySet
from django.utils import timezone

from apps.accounts.models import Provider, Seller
from apps.core.exceptions import (
    InsufficientBalanceError,
    InvalidRequestError,
    NotFoundError,
    TenantMismatchError,
    TransactionFailedError,
)
from apps.wallets.models import (
    ProviderWalletTransaction,
    TransactionSource,
    TransactionType,
    WalletTransaction,
)
from .funding_lock import acquire_funding_lock, release_funding_lock

logger = logging.getLogger(__name__)


def _get_seller(seller_id, provider_id):
    seller = Seller.objects.filter(pk=seller_id).first()
    if seller is None:
        raise NotFoundError("Seller not found")
    if provider_id is not None and seller.provider_id != provider_id:
        raise TenantMismatchError("You can only manage your own sellers")
    return seller


def _wallet_amount(model, pk):
    return model.objects.values_list('wallet_amount', flat=True).get(pk=pk)


def _check_amount(amount):
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise InvalidRequestError("Amount must be a positive integer")


def fund_seller(
    *,
    seller_id: UUID,
    amount: int,
    source: str = TransactionSource.PROVIDER,
    provider_id: Optional[UUID] = None,
    note: str = '',
    date: Optional[datetime] = None
) -> dict:
    """
    Credit a seller's wallet.

    With source PROVIDER the seller's provider is debited by the same
    amount and must cover it. The seller's funding lock serializes
    concurrent fundings: a second call while one is in flight gets
    TransactionInProgressError instead of waiting.

    Args:
        seller_id: Seller to credit
        amount: Positive integer amount
        source: TransactionSource.PROVIDER or TransactionSource.ADMIN
        provider_id: Caller's tenant scope (None for admins)
        note: Free text stored on the record
        date: Business date of the funding (defaults to now)

    Returns:
        dict with transaction, provider_wallet_amount, seller_wallet_amount

    Raises:
        InvalidRequestError: Amount not a positive integer or unknown source
        NotFoundError: Seller doesn't exist
        TenantMismatchError: Seller belongs to another provider
        TransactionInProgressError: Funding lock already held
        InsufficientBalanceError: Provider balance below amount
        TransactionFailedError: The store rejected the unit of work
    """
    _check_amount(amount)

    if source not in TransactionSource.values:
        raise InvalidRequestError("Unknown funding source")

    seller = _get_seller(seller_id, provider_id)
    token = acquire_funding_lock(seller.pk)

    try:
        with transaction.atomic():
            if source == TransactionSource.PROVIDER:
                debited = Provider.objects.filter(
                    pk=seller.provider_id,
                    wallet_amount__gte=amount,
                ).update(wallet_amount=F('wallet_amount') - amount)
                if not debited:
                    raise InsufficientBalanceError(
                        "Provider wallet is not enough",
                        wallet_amount=_wallet_amount(Provider, seller.provider_id),
                    )

            wallet_transaction = WalletTransaction.objects.create(
                seller=seller,
                provider_id=seller.provider_id,
                amount=amount,
                source=source,
                type=TransactionType.DEPOSIT,
                hold_id=token,
                note=note or '',
                date=date or timezone.now(),
            )

            Seller.objects.filter(pk=seller.pk).update(
                wallet_amount=F('wallet_amount') + amount,
            )
    except DatabaseError as exc:
        logger.exception("Funding of seller %s failed", seller.pk)
        raise TransactionFailedError() from exc
    finally:
        release_funding_lock(seller.pk, token)

    logger.info(
        "Seller %s funded with %d from %s (transaction %s)",
        seller.pk, amount, source, wallet_transaction.pk,
    )

    return {
        'transaction': wallet_transaction,
        'provider_wallet_amount': _wallet_amount(Provider, seller.provider_id),
        'seller_wallet_amount': _wallet_amount(Seller, seller.pk),
    }


def reverse_wallet_transaction(*, transaction_id: UUID, provider_id: Optional[UUID] = None) -> dict:
    """
    Undo a funding: debit the seller, re-credit the provider, drop the record.

    Refused when the record is itself a refund, or when the seller has
    already spent part of the amount.

    Returns:
        dict with provider_wallet_amount, seller_wallet_amount

    Raises:
        NotFoundError: Transaction doesn't exist
        TenantMismatchError: Transaction belongs to another provider
        InvalidRequestError: Transaction is a refund
        TransactionInProgressError: Funding lock already held
        InsufficientBalanceError: Seller balance below amount
        TransactionFailedError: The store rejected the unit of work
    """
    wallet_transaction = WalletTransaction.objects.filter(pk=transaction_id).first()
    if wallet_transaction is None:
        raise NotFoundError("Wallet transaction not found")

    if provider_id is not None and wallet_transaction.provider_id != provider_id:
        raise TenantMismatchError("This transaction belongs to another provider")

    if wallet_transaction.type == TransactionType.REFUND:
        raise InvalidRequestError("Refund transactions cannot be reversed")

    seller_id = wallet_transaction.seller_id
    amount = wallet_transaction.amount
    token = acquire_funding_lock(seller_id)

    try:
        with transaction.atomic():
            debited = Seller.objects.filter(
                pk=seller_id,
                wallet_amount__gte=amount,
            ).update(wallet_amount=F('wallet_amount') - amount)
            if not debited:
                raise InsufficientBalanceError(
                    "Seller wallet is below the transaction amount",
                    wallet_amount=_wallet_amount(Seller, seller_id),
                )

            if wallet_transaction.source == TransactionSource.PROVIDER:
                Provider.objects.filter(pk=wallet_transaction.provider_id).update(
                    wallet_amount=F('wallet_amount') + amount,
                )

            deleted, _ = WalletTransaction.objects.filter(pk=wallet_transaction.pk).delete()
            if not deleted:
                raise NotFoundError("Wallet transaction not found")
    except DatabaseError as exc:
        logger.exception("Reversal of wallet transaction %s failed", transaction_id)
        raise TransactionFailedError() from exc
    finally:
        release_funding_lock(seller_id, token)

    logger.info("Wallet transaction %s reversed (%d)", transaction_id, amount)

    return {
        'provider_wallet_amount': _wallet_amount(Provider, wallet_transaction.provider_id),
        'seller_wallet_amount': _wallet_amount(Seller, seller_id),
    }


def fund_provider(
    *,
    provider_id: UUID,
    amount: int,
    note: str = '',
    date: Optional[datetime] = None
) -> dict:
    """
    Top up a provider's wallet from outside the hierarchy (admin only).

    Returns:
        dict with transaction, provider_wallet_amount

    Raises:
        InvalidRequestError: Amount not a positive integer
        NotFoundError: Provider doesn't exist
        TransactionFailedError: The store rejected the unit of work
    """
    _check_amount(amount)

    try:
        with transaction.atomic():
            credited = Provider.objects.filter(pk=provider_id).update(
                wallet_amount=F('wallet_amount') + amount,
            )
            if not credited:
                raise NotFoundError("Provider not found")

            topup = ProviderWalletTransaction.objects.create(
                provider_id=provider_id,
                amount=amount,
                note=note or '',
                date=date or timezone.now(),
            )
    except DatabaseError as exc:
        logger.exception("Top-up of provider %s failed", provider_id)
        raise TransactionFailedError() from exc

    logger.info("Provider %s topped up with %d (transaction %s)", provider_id, amount, topup.pk)

    return {
        'transaction': topup,
        'provider_wallet_amount': _wallet_amount(Provider, provider_id),
    }


def list_wallet_transactions(
    *,
    provider_id: Optional[UUID] = None,
    seller_id: Optional[UUID] = None
) -> QuerySet:
    """Funding records, newest first, optionally narrowed to a provider or seller."""
    queryset = WalletTransaction.objects.select_related('seller', 'provider')
    if provider_id is not None:
        queryset = queryset.filter(provider_id=provider_id)
    if seller_id is not None:
        queryset = queryset.filter(seller_id=seller_id)
    return queryset.order_by('-created_at')
