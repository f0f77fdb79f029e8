"""Registration, login and profile services."""

from .exceptions import (
    AccountsServiceError,
    UserRegistrationError,
    InvalidCredentialsError,
    InactiveAccountError,
    AccountLockedError,
    IncorrectPasswordError,
)
from .user_registration import register_user
from .user_authentication import authenticate_user
from .profile import update_profile, change_password

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'UserRegistrationError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'AccountLockedError',
    'IncorrectPasswordError',
    # Services
    'register_user',
    'authenticate_user',
    'update_profile',
    'change_password',
]
