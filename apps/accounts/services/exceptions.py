"""Domain-specific exceptions for accounts services."""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class InvalidCredentialsError(AccountsServiceError):
    """Raised when authentication credentials are invalid."""
    pass


class InactiveAccountError(AccountsServiceError):
    """Raised when the user or its seller account is deactivated."""
    pass


class DeviceMismatchError(AccountsServiceError):
    """Raised when a seller logs in from a device other than the bound one."""
    pass
