import pytest
from apps.accounts.notifications import connection_registry


@pytest.fixture
def registry():
    """Process-wide connection registry, emptied around each test."""
    connection_registry.clear()
    yield connection_registry
    connection_registry.clear()


@pytest.fixture
def inbox(registry, seller_user):
    """Record pushes delivered to the seller's live connection."""
    received = []
    registry.register(seller_user.id, lambda event, payload: received.append((event, payload)))
    return received
