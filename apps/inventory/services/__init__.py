"""
Inventory services - Business logic layer.

This package contains the stock side of the POS:
- Time-boxed holds on Ready stock
- Hold expiry and the periodic sweep
- Archive (import batch) management
- The per-provider price catalog
"""

from .reservation import hold_stock

from .expiry import (
    hold_cutoff,
    is_hold_expired,
    release_hold,
    sweep_expired_holds,
)

from .archives import (
    import_archive,
    set_archive_active,
    delete_archive,
)

from .catalog import list_provider_prices

__all__ = [
    # Reservation
    'hold_stock',
    # Expiry
    'hold_cutoff',
    'is_hold_expired',
    'release_hold',
    'sweep_expired_holds',
    # Archives
    'import_archive',
    'set_archive_active',
    'delete_archive',
    # Catalog
    'list_provider_prices',
]
