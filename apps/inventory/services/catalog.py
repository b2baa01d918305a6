"""Price catalog as seen from a POS terminal."""

from uuid import UUID

from django.db.models import QuerySet

from apps.inventory.models import CustomPrice


def list_provider_prices(*, provider_id: UUID) -> QuerySet:
    """Active prices of a provider whose plan is still offered, by plan title."""
    return (
        CustomPrice.objects
        .filter(provider_id=provider_id, active=True, plan__active=True)
        .select_related('plan')
        .order_by('plan__title')
    )
