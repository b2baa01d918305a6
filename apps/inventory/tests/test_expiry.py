"""Tests for hold expiry and the stock sweep."""

from datetime import timedelta

import pytest
from django.utils import timezone

from apps.inventory.models import StockUnit, StockStatus
from apps.inventory.services import (
    hold_cutoff,
    is_hold_expired,
    release_hold,
    sweep_expired_holds,
)


def put_on_hold(unit, seller, token, age):
    StockUnit.objects.filter(pk=unit.pk).update(
        status=StockStatus.HOLD,
        hold_id=token,
        hold_at=timezone.now() - age,
        seller=seller,
    )


class TestTtlBoundary:

    def test_exactly_ttl_old_is_expired(self, settings):
        settings.HOLD_TTL = timedelta(minutes=30)
        now = timezone.now()

        assert is_hold_expired(now - timedelta(minutes=30), now) is True
        assert is_hold_expired(now - timedelta(minutes=29, seconds=59), now) is False

    def test_cutoff_follows_setting(self, settings):
        settings.HOLD_TTL = timedelta(minutes=5)
        now = timezone.now()

        assert hold_cutoff(now) == now - timedelta(minutes=5)


@pytest.mark.django_db
class TestSweepExpiredHolds:

    def test_expired_hold_returns_to_ready(self, seller, unit):
        put_on_hold(unit, seller, 'aaaa0000-aaaa0000', timedelta(minutes=31))

        assert sweep_expired_holds() == 1

        unit.refresh_from_db()
        assert unit.status == StockStatus.READY
        assert unit.hold_id is None
        assert unit.hold_at is None
        assert unit.seller_id is None

    def test_fresh_hold_is_kept(self, seller, unit):
        put_on_hold(unit, seller, 'aaaa0000-aaaa0000', timedelta(minutes=10))

        assert sweep_expired_holds() == 0

        unit.refresh_from_db()
        assert unit.status == StockStatus.HOLD

    def test_sold_units_are_never_touched(self, seller, unit):
        StockUnit.objects.filter(pk=unit.pk).update(
            status=StockStatus.SOLD,
            sold_at=timezone.now() - timedelta(days=2),
            seller=seller,
        )

        assert sweep_expired_holds() == 0

        unit.refresh_from_db()
        assert unit.status == StockStatus.SOLD
        assert unit.seller_id == seller.pk

    def test_sweep_is_idempotent(self, seller, make_units):
        first, second = make_units(2)
        put_on_hold(first, seller, 'aaaa0000-aaaa0000', timedelta(hours=2))
        put_on_hold(second, seller, 'bbbb0000-bbbb0000', timedelta(minutes=45))

        assert sweep_expired_holds() == 2
        assert sweep_expired_holds() == 0

    def test_explicit_now(self, seller, unit):
        put_on_hold(unit, seller, 'aaaa0000-aaaa0000', timedelta(minutes=10))

        assert sweep_expired_holds(now=timezone.now() + timedelta(minutes=25)) == 1


@pytest.mark.django_db
class TestReleaseHold:

    def test_release_only_matching_token(self, seller, make_units):
        mine, other = make_units(2)
        put_on_hold(mine, seller, 'aaaa0000-aaaa0000', timedelta(minutes=1))
        put_on_hold(other, seller, 'bbbb0000-bbbb0000', timedelta(minutes=1))

        assert release_hold(hold_token='aaaa0000-aaaa0000') == 1

        other.refresh_from_db()
        assert other.status == StockStatus.HOLD
