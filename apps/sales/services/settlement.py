"""Purchase settlement - turning a live hold into a paid sale."""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction, DatabaseError
from django.db.models import F
from django.utils import timezone

from apps.accounts.models import Seller
from apps.accounts.services import get_active_seller
from apps.core.exceptions import (
    ArchiveUnavailableError,
    HoldExpiredError,
    HoldNotFoundError,
    InsufficientBalanceError,
    InvalidRequestError,
    PriceNotFoundError,
    TenantMismatchError,
    TransactionFailedError,
)
from apps.inventory.models import CustomPrice, StockUnit, StockStatus
from apps.inventory.services import is_hold_expired, release_hold
from apps.sales.models import Payment

logger = logging.getLogger(__name__)


def _snapshot_items(units, price):
    return [
        {
            'id': str(price.pk),
            'code': unit.code,
            'serial': unit.serial,
            'status': StockStatus.SOLD,
            'details': {
                'cover': unit.plan.image,
                'price': price.price,
                'title': unit.plan.title,
            },
        }
        for unit in units
    ]


def _snapshot_price(price):
    return {
        'id': str(price.pk),
        'price': price.price,
        'provider_id': str(price.provider_id),
        'seller_price': price.seller_price,
        'company_price': price.company_price,
    }


def settle_hold(
    *,
    seller_id: UUID,
    hold_token: str,
    note: str = '',
    provider_id: Optional[UUID] = None
) -> dict:
    """
    Settle a hold: mark its units Sold, record the payment, debit the seller.

    The cost is computed from the price that is active *now*, not the one
    quoted at hold time; a price change between hold and settle is charged
    at the new price.

    An expired hold is released back to Ready before HoldExpiredError is
    raised; that release is committed even though the call fails.

    The sale itself is one all-or-nothing unit of work. Each write is
    conditional: the units must still be held under this token and the
    wallet must still cover the total. A second settle with the same token
    finds no units and raises HoldNotFoundError, so a hold can never
    produce two payments.

    Args:
        seller_id: Buyer seller account
        hold_token: Token returned by hold_stock
        note: Free text stored on the payment
        provider_id: Staff path only; the seller must belong to it

    Returns:
        Receipt dict: payment_id, price, cost_price, quantity, total_cost,
        codes, name, wallet_amount, note, created_at

    Raises:
        InvalidRequestError: Missing token
        AccountInactiveError / ProviderInactiveError: Buyer not usable
        TenantMismatchError: Seller outside the caller's provider
        ArchiveUnavailableError: A held unit's archive is disabled
        HoldNotFoundError: No units held under this token, or lost race
        HoldExpiredError: Hold older than HOLD_TTL (units released)
        PriceNotFoundError: No active price for the plan
        InsufficientBalanceError: Wallet below the total cost
        TransactionFailedError: The store rejected the unit of work
    """
    if not hold_token:
        raise InvalidRequestError("hold_token is required")

    seller = get_active_seller(seller_id=seller_id)

    if provider_id is not None and seller.provider_id != provider_id:
        raise TenantMismatchError("You can only manage your own sellers")

    units = list(
        StockUnit.objects
        .select_related('plan', 'archive')
        .filter(
            active=True,
            status=StockStatus.HOLD,
            hold_id=hold_token,
            provider_id=seller.provider_id,
            seller_id=seller.pk,
        )
        .order_by('created_at', 'id')
    )

    if any(not unit.archive.active for unit in units):
        raise ArchiveUnavailableError()

    if not units:
        raise HoldNotFoundError()

    now = timezone.now()
    if is_hold_expired(units[0].hold_at, now):
        released = release_hold(hold_token=hold_token)
        logger.info("Hold %s expired, %d units back to Ready", hold_token, released)
        raise HoldExpiredError()

    plan = units[0].plan
    price = CustomPrice.objects.filter(
        active=True,
        provider_id=seller.provider_id,
        plan_id=plan.pk,
    ).first()
    if price is None:
        raise PriceNotFoundError("No custom price found for this plan")

    quantity = len(units)
    total_cost = price.seller_price * quantity

    if seller.wallet_amount < total_cost:
        raise InsufficientBalanceError(
            "Insufficient wallet balance",
            wallet_amount=seller.wallet_amount,
        )

    unit_ids = [unit.pk for unit in units]

    try:
        with transaction.atomic():
            sold = StockUnit.objects.filter(
                id__in=unit_ids,
                hold_id=hold_token,
                status=StockStatus.HOLD,
            ).update(
                status=StockStatus.SOLD,
                hold_id=None,
                hold_at=None,
                sold_at=now,
            )
            if sold != quantity:
                logger.warning(
                    "Settle of hold %s lost a race: %d of %d units still held",
                    hold_token, sold, quantity,
                )
                raise HoldNotFoundError()

            debited = Seller.objects.filter(
                pk=seller.pk,
                wallet_amount__gte=total_cost,
            ).update(
                wallet_amount=F('wallet_amount') - total_cost,
                payment_amount=F('payment_amount') + total_cost,
            )
            if not debited:
                current = Seller.objects.values_list('wallet_amount', flat=True).get(pk=seller.pk)
                raise InsufficientBalanceError(
                    "Insufficient wallet balance",
                    wallet_amount=current,
                )

            payment = Payment.objects.create(
                seller=seller,
                provider_id=seller.provider_id,
                agent_id=seller.agent_id,
                plan=plan,
                custom_price=price,
                price=price.price,
                seller_price=price.seller_price,
                company_price=price.company_price,
                qty=quantity,
                total_cost=total_cost,
                note=note or '',
                hold_id=hold_token,
                items=_snapshot_items(units, price),
                local_card=_snapshot_price(price),
            )
    except DatabaseError as exc:
        logger.exception("Settlement of hold %s failed", hold_token)
        raise TransactionFailedError() from exc

    seller.refresh_from_db(fields=['wallet_amount', 'payment_amount'])
    logger.info(
        "Hold %s settled as payment %s: %d x %s, %d charged to seller %s",
        hold_token, payment.pk, quantity, plan.title, total_cost, seller.pk,
    )

    return {
        'payment_id': payment.pk,
        'price': payment.price,
        'cost_price': payment.seller_price,
        'quantity': payment.qty,
        'total_cost': total_cost,
        'codes': payment.codes,
        'name': plan.title or 'Unknown Plan',
        'wallet_amount': seller.wallet_amount,
        'note': payment.note,
        'created_at': payment.created_at,
    }
