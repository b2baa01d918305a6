"""Per-seller funding lock stored on the seller row."""

import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from django.conf import settings
from django.utils import timezone

from apps.accounts.models import Seller
from apps.core.exceptions import (
    NoActiveHoldError,
    NotFoundError,
    TenantMismatchError,
    TransactionInProgressError,
)
from apps.core.tokens import generate_hold_token

logger = logging.getLogger(__name__)


def acquire_funding_lock(seller_id: UUID) -> str:
    """
    Take the seller's funding lock.

    Returns:
        The lock token, needed to release it

    Raises:
        TransactionInProgressError: Another funding operation holds it
    """
    token = generate_hold_token()
    acquired = Seller.objects.filter(
        pk=seller_id,
        hold_id__isnull=True,
    ).update(hold_id=token, hold_at=timezone.now())

    if not acquired:
        raise TransactionInProgressError()
    return token


def release_funding_lock(seller_id: UUID, token: str) -> bool:
    """Release the lock only if it is still ours."""
    released = Seller.objects.filter(
        pk=seller_id,
        hold_id=token,
    ).update(hold_id=None, hold_at=None)
    return bool(released)


def reset_funding_lock(*, seller_id: UUID, provider_id: Optional[UUID] = None) -> None:
    """
    Force-clear a seller's funding lock (manual recovery).

    Raises:
        NotFoundError: If the seller doesn't exist
        TenantMismatchError: If the seller belongs to another provider
        NoActiveHoldError: If no lock is set
    """
    seller = Seller.objects.filter(pk=seller_id).only('id', 'provider_id').first()
    if seller is None:
        raise NotFoundError("Seller not found")
    if provider_id is not None and seller.provider_id != provider_id:
        raise TenantMismatchError("You can only manage your own sellers")

    cleared = Seller.objects.filter(
        pk=seller_id,
        hold_id__isnull=False,
    ).update(hold_id=None, hold_at=None)

    if not cleared:
        raise NoActiveHoldError()
    logger.info("Funding lock of seller %s reset manually", seller_id)


def sweep_expired_funding_locks(now: Optional[datetime] = None) -> int:
    """
    Clear funding locks older than the hold TTL.

    Returns:
        Number of sellers unlocked
    """
    cutoff = (now or timezone.now()) - settings.HOLD_TTL
    cleared = Seller.objects.filter(
        hold_id__isnull=False,
        hold_at__lte=cutoff,
    ).update(hold_id=None, hold_at=None)
    if cleared:
        logger.info("Released %d stale funding locks", cleared)
    return cleared
