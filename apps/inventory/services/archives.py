"""Archive management - bulk stock import, batch status and deletion."""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction

from apps.accounts.models import Provider
from apps.core.exceptions import (
    InvalidRequestError,
    NotFoundError,
    TenantMismatchError,
)
from apps.inventory.models import Archive, Plan, StockUnit, StockStatus

logger = logging.getLogger(__name__)


def _get_scoped_archive(archive_id: UUID, provider_id: Optional[UUID]) -> Archive:
    try:
        archive = Archive.objects.select_for_update().get(pk=archive_id)
    except Archive.DoesNotExist:
        raise NotFoundError("Archive not found")

    if provider_id is not None and archive.provider_id != provider_id:
        raise TenantMismatchError("This archive belongs to another provider")
    return archive


@transaction.atomic
def import_archive(
    *,
    provider_id: UUID,
    plan_id: UUID,
    rows: list[dict],
    note: str = ''
) -> Archive:
    """
    Create an archive batch and its stock units in one go.

    Each row needs a ``code`` (the secret delivered to the buyer) and may
    carry a ``serial``. Units start Ready with no seller.

    Raises:
        InvalidRequestError: No rows, or a row without a code
        NotFoundError: Provider or plan doesn't exist
    """
    if not rows:
        raise InvalidRequestError("Archive has no cards")

    for index, row in enumerate(rows):
        if not str(row.get('code') or '').strip():
            raise InvalidRequestError(f"Row {index + 1} has no code")

    if not Provider.objects.filter(pk=provider_id).exists():
        raise NotFoundError("Provider not found")

    try:
        plan = Plan.objects.get(pk=plan_id)
    except Plan.DoesNotExist:
        raise NotFoundError("Plan not found")

    archive = Archive.objects.create(provider_id=provider_id, plan=plan, note=note)

    StockUnit.objects.bulk_create([
        StockUnit(
            code=str(row['code']).strip(),
            serial=str(row.get('serial') or ''),
            provider_id=provider_id,
            plan=plan,
            archive=archive,
        )
        for row in rows
    ])

    logger.info("Archive %s imported with %d cards of %s", archive.pk, len(rows), plan.title)
    return archive


@transaction.atomic
def set_archive_active(
    *,
    archive_id: UUID,
    active: bool,
    provider_id: Optional[UUID] = None
) -> Archive:
    """
    Enable or disable a batch.

    Units of a disabled batch are never selected for a hold, and held
    units of a disabled batch cannot be settled.
    """
    archive = _get_scoped_archive(archive_id, provider_id)
    archive.active = active
    archive.save(update_fields=['active'])
    return archive


@transaction.atomic
def delete_archive(*, archive_id: UUID, provider_id: Optional[UUID] = None) -> None:
    """
    Delete a batch together with its stock.

    Only allowed while every unit is still Ready. The batch is disabled
    first so no new hold can start on it while the check runs.

    Raises:
        NotFoundError: If the archive doesn't exist
        TenantMismatchError: If it belongs to another provider
        InvalidRequestError: If any unit has been held or sold
    """
    archive = _get_scoped_archive(archive_id, provider_id)

    Archive.objects.filter(pk=archive.pk).update(active=False)

    if StockUnit.objects.filter(archive=archive).exclude(status=StockStatus.READY).exists():
        raise InvalidRequestError("This archive has held or sold cards")

    deleted, _ = StockUnit.objects.filter(archive=archive).delete()
    archive.delete()
    logger.info("Archive %s deleted with %d cards", archive_id, deleted)
