"""Account management service - buyer lookup, seller deactivation and device reset."""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction

from apps.accounts.models import Seller, User
from apps.accounts.signals import account_deactivated
from apps.core.exceptions import (
    AccountInactiveError,
    NotFoundError,
    ProviderInactiveError,
    TenantMismatchError,
)

logger = logging.getLogger(__name__)


def _get_scoped_seller(seller_id: UUID, provider_id: Optional[UUID]) -> Seller:
    try:
        seller = Seller.objects.select_for_update().get(pk=seller_id)
    except Seller.DoesNotExist:
        raise NotFoundError("Seller not found")

    if provider_id is not None and seller.provider_id != provider_id:
        raise TenantMismatchError("You can only manage your own sellers")
    return seller


@transaction.atomic
def deactivate_seller(*, seller_id: UUID, provider_id: Optional[UUID] = None) -> Seller:
    """
    Deactivate a seller and its logins.

    Accounts are never deleted. Connected clients are told to log out via
    the ``account_deactivated`` event, sent only once the change commits.

    Raises:
        NotFoundError: If the seller doesn't exist
        TenantMismatchError: If the seller belongs to another provider
    """
    seller = _get_scoped_seller(seller_id, provider_id)

    seller.active = False
    seller.device = ''
    seller.save(update_fields=['active', 'device'])

    user_ids = list(User.objects.filter(seller=seller).values_list('id', flat=True))
    User.objects.filter(id__in=user_ids).update(is_active=False)

    logger.info("Seller %s deactivated (%d logins)", seller.pk, len(user_ids))
    transaction.on_commit(
        lambda: account_deactivated.send(sender=Seller, account=seller, user_ids=user_ids)
    )
    return seller


@transaction.atomic
def reset_seller_device(*, seller_id: UUID, provider_id: Optional[UUID] = None) -> Seller:
    """Clear the bound login device so the seller can log in elsewhere."""
    seller = _get_scoped_seller(seller_id, provider_id)
    seller.device = ''
    seller.save(update_fields=['device'])
    return seller


def get_active_seller(*, seller_id: UUID) -> Seller:
    """
    Load a buyer for a hold or settlement.

    Always re-read from the store; balances are never cached.

    Raises:
        AccountInactiveError: If the seller is missing or deactivated
        ProviderInactiveError: If the seller's provider is deactivated
    """
    seller = (
        Seller.objects
        .select_related('provider', 'agent')
        .filter(pk=seller_id)
        .first()
    )
    if seller is None or not seller.active:
        raise AccountInactiveError("This account is not active")

    if not seller.provider.active:
        raise ProviderInactiveError("Provider is not active")

    return seller
