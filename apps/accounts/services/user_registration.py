"""User registration service."""

import logging

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from .exceptions import UserRegistrationError

User = get_user_model()

logger = logging.getLogger(__name__)


def register_user(
    *,
    email: str,
    username: str,
    password: str,
    display_name: str = ""
) -> User:
    """
    Register a new user.

    Email and username are both unique; the database constraint is the
    final arbiter when two registrations race.

    Args:
        email: User's email address
        username: Public handle shown to group members
        password: User's password (will be hashed)
        display_name: Optional display name

    Returns:
        Created User instance

    Raises:
        UserRegistrationError: If the email or username is already taken
    """
    email = User.objects.normalize_email(email)

    if User.objects.filter(email__iexact=email).exists():
        raise UserRegistrationError("A user with this email already exists")
    if User.objects.filter(username__iexact=username).exists():
        raise UserRegistrationError("A user with this username already exists")

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                email=email,
                username=username,
                password=password,
                display_name=display_name
            )
    except IntegrityError:
        raise UserRegistrationError("A user with this email or username already exists")

    logger.info("Registered user %s", user.id)
    return user
