"""Payment history and the activation marker."""

from uuid import UUID

from django.db.models import QuerySet
from django.utils import timezone

from apps.core.exceptions import InvalidRequestError, NotFoundError
from apps.sales.models import Payment


def list_seller_payments(*, seller_id: UUID) -> QuerySet:
    """Seller's payments, newest first."""
    return (
        Payment.objects
        .filter(seller_id=seller_id)
        .select_related('plan')
        .order_by('-created_at')
    )


def mark_payment_activated(*, payment_id: UUID, seller_id: UUID, activated_by: dict) -> Payment:
    """
    Attach the activation marker to a payment, once.

    Raises:
        NotFoundError: No such payment for this seller
        InvalidRequestError: Payment already activated
    """
    marked = Payment.objects.filter(
        pk=payment_id,
        seller_id=seller_id,
        activated_at__isnull=True,
    ).update(
        activated_by=activated_by,
        activated_at=timezone.now(),
    )

    if not marked:
        if not Payment.objects.filter(pk=payment_id, seller_id=seller_id).exists():
            raise NotFoundError("Payment not found")
        raise InvalidRequestError("Payment is already activated")

    return Payment.objects.get(pk=payment_id)
