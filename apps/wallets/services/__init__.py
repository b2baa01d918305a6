"""
Wallet services - Business logic layer.

- Funding a seller from its provider (or an admin)
- Topping up a provider (admin)
- Reversing a funding
- The per-seller funding lock and its sweep
"""

from .funding_lock import (
    acquire_funding_lock,
    release_funding_lock,
    reset_funding_lock,
    sweep_expired_funding_locks,
)

from .transfers import (
    fund_seller,
    fund_provider,
    reverse_wallet_transaction,
    list_wallet_transactions,
)

__all__ = [
    # Funding lock
    'acquire_funding_lock',
    'release_funding_lock',
    'reset_funding_lock',
    'sweep_expired_funding_locks',
    # Transfers
    'fund_seller',
    'fund_provider',
    'reverse_wallet_transaction',
    'list_wallet_transactions',
]
