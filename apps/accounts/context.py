"""Pre-authorized caller identity handed from views to services."""

from dataclasses import dataclass, field
from typing import Optional
from uuid import UUID

from .models import AccountType


@dataclass(frozen=True)
class CallerContext:
    """
    Who is calling, and within which tenant.

    Built once at the API boundary from the authenticated user. Services
    trust it and never re-derive permissions.
    """

    account_id: UUID
    account_type: str
    provider_id: Optional[UUID] = None
    seller_id: Optional[UUID] = None
    capabilities: frozenset = field(default_factory=frozenset)

    @classmethod
    def from_user(cls, user):
        return cls(
            account_id=user.id,
            account_type=user.account_type,
            provider_id=user.provider_id,
            seller_id=user.seller_id,
            capabilities=frozenset(user.capabilities or []),
        )

    @property
    def is_admin(self):
        return self.account_type == AccountType.ADMIN

    @property
    def tenant_scope(self):
        """Provider the caller is confined to; ``None`` means every tenant."""
        if self.is_admin:
            return None
        return self.provider_id
