"""User authentication service."""

from typing import Optional

from django.db import transaction
from django.contrib.auth import get_user_model
from django.utils import timezone

from apps.accounts.models import Seller
from .exceptions import InvalidCredentialsError, InactiveAccountError, DeviceMismatchError

User = get_user_model()


@transaction.atomic
def authenticate_user(*, username: str, password: str, device: Optional[str] = None) -> User:
    """
    Authenticate user with username and password.

    Seller logins are bound to a single device: the first login that sends
    a device id binds it, later logins must present the same id until the
    binding is reset.

    Args:
        username: User's username
        password: User's password
        device: Client device identifier (POS terminals send one)

    Returns:
        Authenticated User instance

    Raises:
        InvalidCredentialsError: If credentials are invalid
        InactiveAccountError: If the user or its seller is deactivated
        DeviceMismatchError: If the seller is bound to another device
    """
    try:
        user = (
            User.objects
            .select_for_update()
            .select_related('seller')
            .get(username=username)
        )
    except User.DoesNotExist:
        raise InvalidCredentialsError("Invalid username or password")

    if not user.check_password(password):
        raise InvalidCredentialsError("Invalid username or password")

    if not user.is_active:
        raise InactiveAccountError("Account is deactivated")

    seller = user.seller
    if seller is not None:
        if not seller.active:
            raise InactiveAccountError("Account is deactivated")

        if device:
            # Bind only if still unbound; a concurrent login may have won
            bound = Seller.objects.filter(pk=seller.pk, device='').update(device=device)
            if not bound:
                current = Seller.objects.values_list('device', flat=True).get(pk=seller.pk)
                if current != device:
                    raise DeviceMismatchError("This account is already in use on another device")

    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])

    return user
