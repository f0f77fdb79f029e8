"""Self-service profile changes."""

import logging

from django.contrib.auth import get_user_model

from .exceptions import IncorrectPasswordError

User = get_user_model()

logger = logging.getLogger(__name__)


def update_profile(*, user: User, display_name: str) -> User:
    user.display_name = display_name.strip()
    user.save(update_fields=['display_name'])
    return user


def change_password(*, user: User, current_password: str, new_password: str) -> User:
    """
    Replace the user's password after checking the current one.

    The new password is expected to have passed Django's password
    validators already; this only verifies ownership and stores the hash.

    Raises:
        IncorrectPasswordError: current_password does not match
    """
    if not user.check_password(current_password):
        raise IncorrectPasswordError()

    user.set_password(new_password)
    user.save(update_fields=['password'])
    logger.info("User %s changed their password", user.id)
    return user
