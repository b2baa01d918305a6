"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    InvalidCredentialsError,
    InactiveAccountError,
    DeviceMismatchError,
)
from .user_authentication import authenticate_user
from .account_management import deactivate_seller, reset_seller_device, get_active_seller

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'DeviceMismatchError',
    # Services
    'authenticate_user',
    'deactivate_seller',
    'reset_seller_device',
    'get_active_seller',
]
