from datetime import timedelta

import pytest
from django.utils import timezone

from apps.accounts.models import User
from apps.accounts.services import (
    register_user,
    authenticate_user,
    update_profile,
    change_password,
    UserRegistrationError,
    InvalidCredentialsError,
    InactiveAccountError,
    AccountLockedError,
    IncorrectPasswordError,
)


@pytest.mark.django_db
class TestRegisterUser:

    def test_creates_user_with_hashed_password(self):
        user = register_user(
            email='Jane@Example.com',
            username='jane',
            password='SecurePass123!',
            display_name='Jane',
        )

        assert user.email == 'Jane@example.com'
        assert user.check_password('SecurePass123!')
        assert user.failed_login_attempts == 0

    def test_email_taken_case_insensitive(self, user):
        with pytest.raises(UserRegistrationError):
            register_user(email=user.email.upper(), username='different', password='SecurePass123!')

        assert User.objects.count() == 1

    def test_username_taken(self, user):
        with pytest.raises(UserRegistrationError):
            register_user(email='fresh@example.com', username='TESTUSER', password='SecurePass123!')

    def test_display_name_falls_back_to_username(self):
        user = register_user(email='x@example.com', username='xavier', password='SecurePass123!')
        assert user.get_display_name() == 'xavier'


@pytest.mark.django_db
class TestAuthenticateUser:

    def test_success_updates_last_login(self, user):
        authenticated = authenticate_user(email=user.email, password='TestPass123!')

        assert authenticated.id == user.id
        assert authenticated.last_login is not None

    def test_email_is_case_insensitive(self, user):
        assert authenticate_user(email='TESTUSER@example.com', password='TestPass123!') == user

    def test_unknown_email(self, db):
        with pytest.raises(InvalidCredentialsError):
            authenticate_user(email='ghost@example.com', password='TestPass123!')

    def test_inactive_account(self, user_inactive):
        with pytest.raises(InactiveAccountError):
            authenticate_user(email=user_inactive.email, password='TestPass123!')

    def test_inactive_account_wrong_password_is_invalid_credentials(self, user_inactive):
        with pytest.raises(InvalidCredentialsError):
            authenticate_user(email=user_inactive.email, password='nope')


@pytest.mark.django_db
class TestLoginLockout:

    @pytest.fixture(autouse=True)
    def lockout_after_three(self, settings):
        settings.MAX_LOGIN_ATTEMPTS = 3
        settings.LOGIN_LOCKOUT_MINUTES = 30

    def _fail(self, user, times, now=None):
        for _ in range(times):
            with pytest.raises((InvalidCredentialsError, AccountLockedError)):
                authenticate_user(email=user.email, password='wrong', now=now)

    def test_failed_attempt_is_recorded(self, user):
        with pytest.raises(InvalidCredentialsError):
            authenticate_user(email=user.email, password='wrong')

        user.refresh_from_db()
        assert user.failed_login_attempts == 1
        assert user.locked_until is None

    def test_limit_locks_account(self, user):
        now = timezone.now()
        self._fail(user, 2, now=now)

        with pytest.raises(AccountLockedError):
            authenticate_user(email=user.email, password='wrong', now=now)

        user.refresh_from_db()
        assert user.failed_login_attempts == 3
        assert user.locked_until == now + timedelta(minutes=30)

    def test_correct_password_refused_while_locked(self, user):
        now = timezone.now()
        self._fail(user, 3, now=now)

        with pytest.raises(AccountLockedError):
            authenticate_user(email=user.email, password='TestPass123!', now=now + timedelta(minutes=29))

    def test_lock_lapses(self, user):
        now = timezone.now()
        self._fail(user, 3, now=now)

        authenticated = authenticate_user(
            email=user.email, password='TestPass123!', now=now + timedelta(minutes=31),
        )

        assert authenticated.failed_login_attempts == 0
        assert authenticated.locked_until is None

    def test_failure_after_lapse_starts_fresh_count(self, user):
        now = timezone.now()
        self._fail(user, 3, now=now)

        with pytest.raises(InvalidCredentialsError):
            authenticate_user(email=user.email, password='wrong', now=now + timedelta(minutes=31))

        user.refresh_from_db()
        assert user.failed_login_attempts == 1

    def test_success_resets_counter(self, user):
        self._fail(user, 2)

        authenticate_user(email=user.email, password='TestPass123!')

        user.refresh_from_db()
        assert user.failed_login_attempts == 0


@pytest.mark.django_db
class TestProfile:

    def test_update_display_name(self, user):
        update_profile(user=user, display_name='  Testy  ')

        user.refresh_from_db()
        assert user.display_name == 'Testy'

    def test_change_password(self, user):
        change_password(user=user, current_password='TestPass123!', new_password='BrandNew456!')

        user.refresh_from_db()
        assert user.check_password('BrandNew456!')

    def test_change_password_wrong_current(self, user):
        with pytest.raises(IncorrectPasswordError):
            change_password(user=user, current_password='nope', new_password='BrandNew456!')

        user.refresh_from_db()
        assert user.check_password('TestPass123!')
