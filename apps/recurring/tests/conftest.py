import pytest
from datetime import datetime, timezone as dt_timezone
from decimal import Decimal

from apps.recurring.models import Frequency, RecurringBill


@pytest.fixture
def monthly_rent(group):
    """Monthly rent schedule, first due on 1 Oct 2026."""
    return RecurringBill.objects.create(
        group=group,
        title='Rent',
        description='Monthly rent',
        amount=Decimal('900.00'),
        currency='USDC',
        payee_address='0x' + 'cd' * 20,
        frequency=Frequency.MONTHLY,
        start_date=datetime(2026, 9, 1, 9, 0, tzinfo=dt_timezone.utc),
        next_due_date=datetime(2026, 10, 1, 9, 0, tzinfo=dt_timezone.utc),
    )
