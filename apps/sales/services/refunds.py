"""Refunds - undoing a sale and putting its cards back on the shelf."""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction, DatabaseError
from django.db.models import F

from apps.accounts.models import Seller
from apps.core.exceptions import (
    InvalidRequestError,
    NotFoundError,
    TenantMismatchError,
    TransactionFailedError,
)
from apps.inventory.models import StockUnit, StockStatus
from apps.sales.models import Payment
from apps.wallets.models import WalletTransaction, TransactionSource, TransactionType

logger = logging.getLogger(__name__)


def refund_payment(*, payment_id: UUID, provider_id: Optional[UUID] = None) -> dict:
    """
    Refund a payment.

    The seller is credited ``company_price * qty``, a REFUND wallet record
    is written, the sold units go back to Ready and the payment is deleted.
    Everything happens in one transaction; deleting the payment first makes
    a concurrent second refund of the same payment fail with NotFoundError.

    Args:
        payment_id: Payment to refund
        provider_id: Caller's tenant scope (None for admins)

    Returns:
        dict with transaction, refunded, restocked, seller_wallet_amount

    Raises:
        NotFoundError: Payment doesn't exist (or was already refunded)
        TenantMismatchError: Payment belongs to another provider
        InvalidRequestError: The payment's units are no longer sold
        TransactionFailedError: The store rejected the unit of work
    """
    payment = Payment.objects.filter(pk=payment_id).first()
    if payment is None:
        raise NotFoundError("Payment not found")

    if provider_id is not None and payment.provider_id != provider_id:
        raise TenantMismatchError("This payment belongs to another provider")

    amount = payment.company_price * payment.qty
    codes = [item.get('code') for item in payment.items]

    try:
        with transaction.atomic():
            deleted, _ = Payment.objects.filter(pk=payment.pk).delete()
            if not deleted:
                raise NotFoundError("Payment not found")

            restocked = StockUnit.objects.filter(
                code__in=codes,
                provider_id=payment.provider_id,
                plan_id=payment.plan_id,
                seller_id=payment.seller_id,
                status=StockStatus.SOLD,
            ).update(
                status=StockStatus.READY,
                seller=None,
                sold_at=None,
            )
            if restocked != payment.qty:
                logger.warning(
                    "Refund of payment %s found %d of %d units sold",
                    payment.pk, restocked, payment.qty,
                )
                raise InvalidRequestError("The payment's cards are no longer sold")

            Seller.objects.filter(pk=payment.seller_id).update(
                wallet_amount=F('wallet_amount') + amount,
            )

            wallet_transaction = WalletTransaction.objects.create(
                seller_id=payment.seller_id,
                provider_id=payment.provider_id,
                amount=amount,
                source=TransactionSource.PROVIDER,
                type=TransactionType.REFUND,
                hold_id=payment.hold_id,
                note=f"Refund of payment {payment.pk}",
            )
    except DatabaseError as exc:
        logger.exception("Refund of payment %s failed", payment_id)
        raise TransactionFailedError() from exc

    logger.info(
        "Payment %s refunded: %d credited to seller %s, %d units back to Ready",
        payment_id, amount, payment.seller_id, restocked,
    )

    return {
        'transaction': wallet_transaction,
        'refunded': amount,
        'restocked': restocked,
        'seller_wallet_amount': Seller.objects.values_list(
            'wallet_amount', flat=True,
        ).get(pk=payment.seller_id),
    }
