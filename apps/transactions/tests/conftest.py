import pytest
from datetime import timedelta
from unittest.mock import patch

from django.utils import timezone

from apps.bills.models import BillStatus
from apps.proposals.models import Proposal, ProposalStatus
from apps.transactions.services.exceptions import TransferGatewayError
from apps.transactions.services.gateway import (
    INTENT_PENDING,
    IntentStatus,
    TransferGateway,
)


class FakeGateway(TransferGateway):
    """Records calls; status and failures are set by the test."""

    def __init__(self):
        self.created = []
        self.status = IntentStatus(status=INTENT_PENDING)
        self.fail = False

    def create_intent(self, destination, amount_minor_units, chain_params):
        if self.fail:
            raise TransferGatewayError()
        self.created.append((destination, amount_minor_units, chain_params))
        return f"intent_{len(self.created)}"

    def get_intent_status(self, intent_id):
        if self.fail:
            raise TransferGatewayError()
        return self.status


@pytest.fixture
def gateway():
    fake = FakeGateway()
    with patch(
        'apps.transactions.services.transaction_management.get_transfer_gateway',
        return_value=fake,
    ):
        yield fake


@pytest.fixture
def payable_bill(draft_bill, group_admin):
    """Rent bill that was voted through and executed."""
    draft_bill.status = BillStatus.APPROVED
    draft_bill.save()
    Proposal.objects.create(
        bill=draft_bill,
        group=draft_bill.group,
        created_by=group_admin,
        title='Rent',
        status=ProposalStatus.EXECUTED,
        votes_for=2,
        voting_deadline=timezone.now() + timedelta(days=7),
        executed_at=timezone.now(),
    )
    return draft_bill
