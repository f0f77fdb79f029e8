"""Email/password login with a failed-attempt lockout."""

import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone

from .exceptions import AccountLockedError, InactiveAccountError, InvalidCredentialsError

User = get_user_model()

logger = logging.getLogger(__name__)


def authenticate_user(*, email: str, password: str, now=None) -> User:
    """
    Check an email/password pair and record the outcome on the user row.

    A wrong password is counted even though the call fails, so the row
    update is committed before the error is raised. Once the count reaches
    MAX_LOGIN_ATTEMPTS the account is locked for LOGIN_LOCKOUT_MINUTES;
    during that window the correct password is refused too.

    Args:
        email: Login email, matched case-insensitively
        password: Raw password
        now: Clock override for tests

    Returns:
        The authenticated user with last_login updated

    Raises:
        InvalidCredentialsError: Unknown email or wrong password
        AccountLockedError: Account is inside a lockout window, or this
            failure opened one
        InactiveAccountError: Password is right but the account is deactivated
    """
    now = now or timezone.now()
    failure = None

    with transaction.atomic():
        try:
            user = User.objects.select_for_update().get(email__iexact=email)
        except User.DoesNotExist:
            raise InvalidCredentialsError()

        if user.is_locked(now):
            raise AccountLockedError()

        if not user.check_password(password):
            locked = user.register_failed_login(
                max_attempts=settings.MAX_LOGIN_ATTEMPTS,
                lockout_minutes=settings.LOGIN_LOCKOUT_MINUTES,
                now=now,
            )
            user.save(update_fields=['failed_login_attempts', 'locked_until'])
            if locked:
                logger.warning(
                    "Locked user %s until %s after %d failed logins",
                    user.id, user.locked_until, user.failed_login_attempts,
                )
                failure = AccountLockedError()
            else:
                failure = InvalidCredentialsError()
        elif not user.is_active:
            raise InactiveAccountError()
        else:
            user.clear_failed_logins()
            user.last_login = now
            user.save(update_fields=['failed_login_attempts', 'locked_until', 'last_login'])

    if failure is not None:
        raise failure

    return user
