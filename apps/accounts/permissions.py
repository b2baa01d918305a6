"""
Capability checks for the API boundary.

Views declare what the caller must be able to do; services receive an
already authorized ``CallerContext`` and never look at capabilities.
"""
from rest_framework.permissions import BasePermission

from .models import AccountType


class IsSellerAccount(BasePermission):
    """
    Caller is a POS seller login with an active seller account attached.

    Usage:
        @permission_classes([IsAuthenticated, IsSellerAccount])
        def hold(request):
            ...
    """

    message = 'Only seller accounts can use the POS.'

    def has_permission(self, request, view):
        user = request.user
        return bool(
            user
            and user.is_authenticated
            and user.account_type == AccountType.SELLER
            and user.seller_id is not None
        )


class IsStaffAccount(BasePermission):
    """Caller is an admin or provider login."""

    message = 'Only admin and provider accounts can perform this action.'

    def has_permission(self, request, view):
        user = request.user
        if not (user and user.is_authenticated):
            return False
        if user.account_type == AccountType.ADMIN:
            return True
        return user.account_type == AccountType.PROVIDER and user.provider_id is not None


class IsAdminAccount(BasePermission):
    """Caller is an admin login."""

    message = 'Only admin accounts can perform this action.'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.account_type == AccountType.ADMIN)


def capability_required(capability):
    """
    Build a permission class requiring ``capability``.

    Usage:
        permission_classes = [IsAuthenticated, IsStaffAccount,
                              capability_required('create_seller_wallet')]
    """

    class HasCapability(BasePermission):
        message = f'No permission to {capability.replace("_", " ")}.'

        def has_permission(self, request, view):
            user = request.user
            return bool(user and user.is_authenticated and user.has_capability(capability))

    HasCapability.__name__ = f'HasCapability[{capability}]'
    return HasCapability
