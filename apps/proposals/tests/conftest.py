import pytest

from apps.proposals.services import create_proposal


@pytest.fixture
def proposal(draft_bill, group_admin):
    """Pending proposal for the Rent bill, deadline in DEFAULT_VOTING_PERIOD_DAYS."""
    return create_proposal(
        user=group_admin,
        bill_id=draft_bill.id,
        title='Approve October rent',
    )
