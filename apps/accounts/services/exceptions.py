"""Errors raised by the accounts services."""
from rest_framework import status

from apps.common.exceptions import ConflictError, RoomyServiceError


class AccountsServiceError(RoomyServiceError):
    pass


class UserRegistrationError(ConflictError):
    """Email or username is already taken."""
    default_detail = 'A user with this email or username already exists.'
    default_code = 'registration_conflict'


class InvalidCredentialsError(AccountsServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = 'Invalid email or password.'
    default_code = 'invalid_credentials'


class InactiveAccountError(AccountsServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Account is deactivated.'
    default_code = 'inactive_account'


class AccountLockedError(AccountsServiceError):
    """Too many failed logins; the account refuses logins until the lock lapses."""
    status_code = status.HTTP_423_LOCKED
    default_detail = 'Account is temporarily locked after too many failed login attempts.'
    default_code = 'account_locked'


class IncorrectPasswordError(AccountsServiceError):
    """The current password given for a password change is wrong."""
    default_detail = 'Current password is incorrect.'
    default_code = 'incorrect_password'
