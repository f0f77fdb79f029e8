import uuid
from datetime import timedelta

from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
from django.utils import timezone


class UserManager(BaseUserManager):
    """Manager that keys accounts on email and derives a handle when none is given."""

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('Email is required')

        email = self.normalize_email(email)
        extra_fields.setdefault('username', email.split('@')[0])
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)

        if not extra_fields['is_staff'] or not extra_fields['is_superuser']:
            raise ValueError('Superuser must have is_staff=True and is_superuser=True')

        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """
    A person who can belong to expense groups.

    Login is by email. Repeated failed logins lock the account for a
    while; the counter resets on the next successful login.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, max_length=255, db_index=True)
    username = models.CharField(max_length=50, unique=True)
    display_name = models.CharField(max_length=100, blank=True)

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    # Login lockout
    failed_login_attempts = models.PositiveSmallIntegerField(default=0)
    locked_until = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    last_login = models.DateTimeField(null=True, blank=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['username']

    class Meta:
        db_table = 'users'
        indexes = [
            models.Index(fields=['email'], name='users_email_4b85f2_idx'),
            models.Index(fields=['created_at'], name='users_created_6541e9_idx'),
        ]

    def __str__(self):
        return self.email

    def get_display_name(self):
        return self.display_name or self.username

    def is_locked(self, now=None) -> bool:
        """True while a lockout window is still open."""
        if self.locked_until is None:
            return False
        return self.locked_until > (now or timezone.now())

    def register_failed_login(self, *, max_attempts: int, lockout_minutes: int, now=None) -> bool:
        """
        Count one failed login and open a lockout window once the limit is hit.

        A lapsed lock starts a fresh count.

        Returns:
            True if this failure locked the account
        """
        now = now or timezone.now()
        if self.locked_until is not None and self.locked_until <= now:
            self.clear_failed_logins()
        self.failed_login_attempts += 1
        if self.failed_login_attempts >= max_attempts:
            self.locked_until = now + timedelta(minutes=lockout_minutes)
            return True
        return False

    def clear_failed_logins(self):
        self.failed_login_attempts = 0
        self.locked_until = None
