"""
Service tests for wallet funding.

Tests cover:
- Funding from a provider and from an admin
- Admin top-ups of a provider
- The per-seller funding lock (conflict, sweep, reset)
- Reversal rules
- Rollback when the store fails
- Concurrent fundings of one seller
"""

import re
import threading
from datetime import timedelta
from unittest.mock import patch

import pytest
from django.db import DatabaseError, connection
from django.test import TransactionTestCase
from django.utils import timezone

from apps.accounts.models import Provider, Seller
from apps.core.exceptions import (
    InsufficientBalanceError,
    InvalidRequestError,
    NoActiveHoldError,
    NotFoundError,
    PosError,
    TenantMismatchError,
    TransactionFailedError,
    TransactionInProgressError,
)
from apps.wallets.models import (
    ProviderWalletTransaction,
    TransactionSource,
    TransactionType,
    WalletTransaction,
)
from apps.wallets.services import (
    fund_provider,
    fund_seller,
    list_wallet_transactions,
    reset_funding_lock,
    reverse_wallet_transaction,
    sweep_expired_funding_locks,
)


def lock_seller(seller, age=timedelta(0)):
    Seller.objects.filter(pk=seller.pk).update(
        hold_id='cafe0000-cafe0000',
        hold_at=timezone.now() - age,
    )


# =============================================================================
# Funding
# =============================================================================

@pytest.mark.django_db
class TestFundSeller:

    def test_fund_from_provider(self, seller, provider):
        result = fund_seller(seller_id=seller.pk, amount=1000, note='cash drop')

        assert result['provider_wallet_amount'] == 9000
        assert result['seller_wallet_amount'] == 2000

        record = result['transaction']
        assert record.amount == 1000
        assert record.source == TransactionSource.PROVIDER
        assert record.type == TransactionType.DEPOSIT
        assert record.provider_id == provider.pk
        assert re.fullmatch(r'[0-9a-f]{8}-[0-9a-f]{8}', record.hold_id)

    def test_lock_is_released_after_funding(self, seller):
        fund_seller(seller_id=seller.pk, amount=100)

        seller.refresh_from_db()
        assert seller.hold_id is None
        assert seller.hold_at is None

    def test_consecutive_fundings_succeed(self, seller):
        fund_seller(seller_id=seller.pk, amount=100)
        result = fund_seller(seller_id=seller.pk, amount=200)

        assert result['seller_wallet_amount'] == 1300
        assert WalletTransaction.objects.count() == 2

    def test_admin_source_leaves_provider_alone(self, seller, provider):
        result = fund_seller(seller_id=seller.pk, amount=500, source=TransactionSource.ADMIN)

        assert result['provider_wallet_amount'] == 10000
        assert result['seller_wallet_amount'] == 1500

    def test_provider_balance_too_low(self, seller, provider):
        Provider.objects.filter(pk=provider.pk).update(wallet_amount=50)

        with pytest.raises(InsufficientBalanceError) as exc_info:
            fund_seller(seller_id=seller.pk, amount=100)

        assert exc_info.value.wallet_amount == 50
        seller.refresh_from_db()
        assert seller.wallet_amount == 1000
        assert seller.hold_id is None
        assert not WalletTransaction.objects.exists()

    @pytest.mark.parametrize('amount', [0, -5, 10.5, '100', True])
    def test_invalid_amount(self, seller, amount):
        with pytest.raises(InvalidRequestError):
            fund_seller(seller_id=seller.pk, amount=amount)

    def test_unknown_source(self, seller):
        with pytest.raises(InvalidRequestError):
            fund_seller(seller_id=seller.pk, amount=10, source='GIFT')

    def test_unknown_seller(self, db):
        with pytest.raises(NotFoundError):
            fund_seller(seller_id='00000000-0000-0000-0000-000000000000', amount=10)

    def test_foreign_seller(self, other_seller, provider):
        with pytest.raises(TenantMismatchError):
            fund_seller(seller_id=other_seller.pk, amount=10, provider_id=provider.pk)

    def test_store_failure_rolls_back_and_unlocks(self, seller, provider):
        with patch(
            'apps.wallets.services.transfers.WalletTransaction.objects.create',
            side_effect=DatabaseError('deadlock detected'),
        ):
            with pytest.raises(TransactionFailedError):
                fund_seller(seller_id=seller.pk, amount=100)

        provider.refresh_from_db()
        seller.refresh_from_db()
        assert provider.wallet_amount == 10000
        assert seller.wallet_amount == 1000
        assert seller.hold_id is None


@pytest.mark.django_db
class TestFundProvider:

    def test_top_up(self, provider):
        result = fund_provider(provider_id=provider.pk, amount=2500, note='wire 42')

        assert result['provider_wallet_amount'] == 12500
        record = result['transaction']
        assert record.amount == 2500
        assert record.note == 'wire 42'
        assert ProviderWalletTransaction.objects.filter(provider=provider).count() == 1

    def test_top_up_then_fund_seller(self, provider, seller):
        Provider.objects.filter(pk=provider.pk).update(wallet_amount=0)
        with pytest.raises(InsufficientBalanceError):
            fund_seller(seller_id=seller.pk, amount=300)

        fund_provider(provider_id=provider.pk, amount=300)

        result = fund_seller(seller_id=seller.pk, amount=300)
        assert result['provider_wallet_amount'] == 0
        assert result['seller_wallet_amount'] == 1300

    @pytest.mark.parametrize('amount', [0, -1, 2.5, True])
    def test_invalid_amount(self, provider, amount):
        with pytest.raises(InvalidRequestError):
            fund_provider(provider_id=provider.pk, amount=amount)

        provider.refresh_from_db()
        assert provider.wallet_amount == 10000

    def test_unknown_provider(self, db):
        with pytest.raises(NotFoundError):
            fund_provider(provider_id='00000000-0000-0000-0000-000000000000', amount=10)

        assert not ProviderWalletTransaction.objects.exists()

    def test_store_failure_rolls_back(self, provider):
        with patch(
            'apps.wallets.services.transfers.ProviderWalletTransaction.objects.create',
            side_effect=DatabaseError('deadlock detected'),
        ):
            with pytest.raises(TransactionFailedError):
                fund_provider(provider_id=provider.pk, amount=100)

        provider.refresh_from_db()
        assert provider.wallet_amount == 10000


# =============================================================================
# Funding lock
# =============================================================================

@pytest.mark.django_db
class TestFundingLock:

    def test_in_flight_funding_blocks_another(self, seller, provider):
        lock_seller(seller)

        with pytest.raises(TransactionInProgressError):
            fund_seller(seller_id=seller.pk, amount=100)

        provider.refresh_from_db()
        assert provider.wallet_amount == 10000
        seller.refresh_from_db()
        assert seller.hold_id == 'cafe0000-cafe0000'

    def test_sweep_releases_stale_lock(self, seller):
        lock_seller(seller, age=timedelta(minutes=31))

        assert sweep_expired_funding_locks() == 1
        assert fund_seller(seller_id=seller.pk, amount=100)['seller_wallet_amount'] == 1100

    def test_sweep_keeps_recent_lock(self, seller):
        lock_seller(seller, age=timedelta(minutes=5))

        assert sweep_expired_funding_locks() == 0
        with pytest.raises(TransactionInProgressError):
            fund_seller(seller_id=seller.pk, amount=100)

    def test_reset_clears_lock(self, seller):
        lock_seller(seller)

        reset_funding_lock(seller_id=seller.pk)

        assert fund_seller(seller_id=seller.pk, amount=100)['seller_wallet_amount'] == 1100

    def test_reset_without_lock(self, seller):
        with pytest.raises(NoActiveHoldError):
            reset_funding_lock(seller_id=seller.pk)

    def test_reset_foreign_seller(self, other_seller, provider):
        lock_seller(other_seller)

        with pytest.raises(TenantMismatchError):
            reset_funding_lock(seller_id=other_seller.pk, provider_id=provider.pk)


# =============================================================================
# Reversal
# =============================================================================

@pytest.mark.django_db
class TestReverseWalletTransaction:

    def test_reverse_provider_funding(self, seller, provider):
        record = fund_seller(seller_id=seller.pk, amount=400)['transaction']

        result = reverse_wallet_transaction(transaction_id=record.pk)

        assert result == {'provider_wallet_amount': 10000, 'seller_wallet_amount': 1000}
        assert not WalletTransaction.objects.filter(pk=record.pk).exists()

    def test_reverse_admin_funding(self, seller, provider):
        record = fund_seller(
            seller_id=seller.pk, amount=400, source=TransactionSource.ADMIN,
        )['transaction']

        result = reverse_wallet_transaction(transaction_id=record.pk)

        assert result == {'provider_wallet_amount': 10000, 'seller_wallet_amount': 1000}

    def test_refund_cannot_be_reversed(self, seller, provider):
        record = WalletTransaction.objects.create(
            seller=seller, provider=provider, amount=50,
            type=TransactionType.REFUND, hold_id='beef0000-beef0000',
        )

        with pytest.raises(InvalidRequestError):
            reverse_wallet_transaction(transaction_id=record.pk)

    def test_spent_funds_cannot_be_reversed(self, seller, provider):
        record = fund_seller(seller_id=seller.pk, amount=400)['transaction']
        Seller.objects.filter(pk=seller.pk).update(wallet_amount=300)

        with pytest.raises(InsufficientBalanceError) as exc_info:
            reverse_wallet_transaction(transaction_id=record.pk)

        assert exc_info.value.wallet_amount == 300
        provider.refresh_from_db()
        assert provider.wallet_amount == 9600
        assert WalletTransaction.objects.filter(pk=record.pk).exists()

    def test_reverse_during_funding(self, seller):
        record = fund_seller(seller_id=seller.pk, amount=400)['transaction']
        lock_seller(seller)

        with pytest.raises(TransactionInProgressError):
            reverse_wallet_transaction(transaction_id=record.pk)

    def test_foreign_transaction(self, seller, other_provider):
        record = fund_seller(seller_id=seller.pk, amount=400)['transaction']

        with pytest.raises(TenantMismatchError):
            reverse_wallet_transaction(transaction_id=record.pk, provider_id=other_provider.pk)

    def test_unknown_transaction(self, db):
        with pytest.raises(NotFoundError):
            reverse_wallet_transaction(transaction_id='00000000-0000-0000-0000-000000000000')


@pytest.mark.django_db
class TestListWalletTransactions:

    def test_scoped_to_provider(self, seller, other_seller, provider):
        fund_seller(seller_id=seller.pk, amount=10)
        fund_seller(seller_id=other_seller.pk, amount=20)

        mine = list_wallet_transactions(provider_id=provider.pk)

        assert [t.amount for t in mine] == [10]
        assert list_wallet_transactions().count() == 2


# =============================================================================
# Concurrency
# =============================================================================

class TestFundingConcurrency(TransactionTestCase):
    """Concurrent fundings of one seller against real transactions."""

    def setUp(self):
        self.provider = Provider.objects.create(name='Race Provider', wallet_amount=100000)
        self.seller = Seller.objects.create(name='Racer', provider=self.provider)

    def test_concurrent_fundings_never_double_credit(self):
        funded = []
        rejected = []

        def fund_in_thread():
            try:
                funded.append(fund_seller(seller_id=self.seller.pk, amount=100))
            except PosError as exc:
                rejected.append(exc)
            except DatabaseError as exc:
                rejected.append(exc)
            finally:
                connection.close()

        threads = [threading.Thread(target=fund_in_thread) for _ in range(5)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(funded) + len(rejected) == 5
        recorded = WalletTransaction.objects.count()
        assert recorded >= len(funded)

        # Every credit has exactly one record and one provider debit
        self.seller.refresh_from_db()
        self.provider.refresh_from_db()
        assert self.seller.wallet_amount == 100 * recorded
        assert self.provider.wallet_amount == 100000 - 100 * recorded

    def test_in_progress_then_success(self):
        """A lost race is reported, and a later funding goes through."""
        Seller.objects.filter(pk=self.seller.pk).update(hold_id='cafe0000-cafe0000', hold_at=timezone.now())

        with pytest.raises(TransactionInProgressError):
            fund_seller(seller_id=self.seller.pk, amount=100)

        Seller.objects.filter(pk=self.seller.pk).update(hold_id=None, hold_at=None)
        assert fund_seller(seller_id=self.seller.pk, amount=100)['seller_wallet_amount'] == 100
