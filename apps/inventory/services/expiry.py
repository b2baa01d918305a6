"""Hold expiry - returning abandoned holds to Ready."""

import logging
from datetime import datetime
from typing import Optional

from django.conf import settings
from django.utils import timezone

from apps.inventory.models import StockUnit, StockStatus

logger = logging.getLogger(__name__)


def hold_cutoff(now: Optional[datetime] = None) -> datetime:
    """Holds stamped at or before this instant are expired."""
    return (now or timezone.now()) - settings.HOLD_TTL


def is_hold_expired(hold_at: datetime, now: Optional[datetime] = None) -> bool:
    return hold_at <= hold_cutoff(now)


def release_hold(*, hold_token: str) -> int:
    """
    Return every unit still held under ``hold_token`` to Ready.

    Returns:
        Number of units released
    """
    return StockUnit.objects.filter(
        hold_id=hold_token,
        status=StockStatus.HOLD,
    ).update(
        status=StockStatus.READY,
        hold_id=None,
        hold_at=None,
        seller=None,
    )


def sweep_expired_holds(now: Optional[datetime] = None) -> int:
    """
    Release every hold older than the hold TTL.

    One conditional bulk update; safe to run concurrently with holds and
    settlements because it only touches rows still in Hold past the cutoff.

    Returns:
        Number of units released
    """
    released = StockUnit.objects.filter(
        status=StockStatus.HOLD,
        hold_at__lte=hold_cutoff(now),
    ).update(
        status=StockStatus.READY,
        hold_id=None,
        hold_at=None,
        seller=None,
    )
    if released:
        logger.info("Released %d expired stock holds", released)
    return released
