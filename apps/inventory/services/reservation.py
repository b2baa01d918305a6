"""Inventory reservation service - time-boxed holds on Ready stock."""

import logging
from uuid import UUID

from django.conf import settings
from django.db import transaction, DatabaseError
from django.utils import timezone

from apps.accounts.services import get_active_seller
from apps.core.exceptions import (
    InvalidRequestError,
    InsufficientBalanceError,
    OutOfStockError,
    PriceNotFoundError,
    QuantityLimitExceededError,
    TenantMismatchError,
    TransactionFailedError,
    UnsupportedQuantityError,
)
from apps.core.tokens import generate_hold_token
from apps.inventory.models import CustomPrice, StockUnit, StockStatus

logger = logging.getLogger(__name__)


def _check_quantity(quantity, bulk_allowed):
    if quantity is None or quantity < 1:
        raise InvalidRequestError("Quantity must be at least 1")

    if not bulk_allowed and quantity > settings.SELLER_MAX_HOLD_QUANTITY:
        raise UnsupportedQuantityError()

    if bulk_allowed and quantity > settings.STAFF_MAX_HOLD_QUANTITY:
        raise QuantityLimitExceededError(
            f"You cannot hold more than {settings.STAFF_MAX_HOLD_QUANTITY} cards at once"
        )


def hold_stock(
    *,
    seller_id: UUID,
    price_id: UUID,
    quantity: int = 1,
    bulk_allowed: bool = False
) -> dict:
    """
    Reserve ``quantity`` Ready units of a price's plan for a seller.

    Validation runs in a fixed order and the first failing check wins:
    price id, quantity, seller active, provider active, price exists,
    price tenant, wallet balance, stock availability.

    The wallet is only checked, never debited; the balance is reserved
    implicitly by not yet being spent. The claim itself is a single
    conditional update on rows still ``active`` and ``Ready``. If it
    touches fewer rows than requested another request won the race: the
    partial claim is rolled back and OutOfStockError is raised.

    Args:
        seller_id: Buyer seller account
        price_id: CustomPrice to buy
        quantity: Number of units
        bulk_allowed: True on the staff path (up to STAFF_MAX_HOLD_QUANTITY)

    Returns:
        dict with hold_token, price, cost_price, quantity, wallet_amount

    Raises:
        InvalidRequestError: Missing price id or quantity below 1
        UnsupportedQuantityError: quantity > 1 on the seller path
        QuantityLimitExceededError: quantity above the staff limit
        AccountInactiveError / ProviderInactiveError: Buyer not usable
        PriceNotFoundError: No active price with this id
        TenantMismatchError: Price belongs to another provider
        InsufficientBalanceError: Wallet below cost * quantity
        OutOfStockError: Not enough Ready units, or the claim lost a race
        TransactionFailedError: The store rejected the claim
    """
    if not price_id:
        raise InvalidRequestError("price_id is required")

    _check_quantity(quantity, bulk_allowed)

    seller = get_active_seller(seller_id=seller_id)

    price = (
        CustomPrice.objects
        .select_related('plan')
        .filter(pk=price_id, active=True)
        .first()
    )
    if price is None:
        raise PriceNotFoundError("No card found")

    if price.provider_id != seller.provider_id:
        raise TenantMismatchError("This card belongs to another provider")

    cost_price = price.seller_price
    if seller.wallet_amount < cost_price * quantity:
        raise InsufficientBalanceError(wallet_amount=seller.wallet_amount)

    candidate_ids = list(
        StockUnit.objects
        .filter(
            plan_id=price.plan_id,
            provider_id=price.provider_id,
            active=True,
            status=StockStatus.READY,
            archive__active=True,
        )
        .order_by('created_at', 'id')
        .values_list('id', flat=True)[:quantity]
    )
    if len(candidate_ids) < quantity:
        raise OutOfStockError()

    hold_token = generate_hold_token()

    try:
        with transaction.atomic():
            claimed = StockUnit.objects.filter(
                id__in=candidate_ids,
                active=True,
                status=StockStatus.READY,
            ).update(
                status=StockStatus.HOLD,
                hold_id=hold_token,
                hold_at=timezone.now(),
                provider_id=seller.provider_id,
                seller_id=seller.pk,
            )
            if claimed != quantity:
                logger.warning(
                    "Hold for seller %s lost a race: claimed %d of %d units",
                    seller.pk, claimed, quantity,
                )
                raise OutOfStockError()
    except DatabaseError as exc:
        logger.exception("Stock claim failed for seller %s", seller.pk)
        raise TransactionFailedError() from exc

    logger.info(
        "Hold %s: %d x %s for seller %s",
        hold_token, quantity, price.plan.title, seller.pk,
    )

    return {
        'hold_token': hold_token,
        'price': price.price,
        'cost_price': cost_price,
        'quantity': quantity,
        'wallet_amount': seller.wallet_amount,
    }
