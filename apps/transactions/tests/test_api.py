import pytest
from uuid import uuid4

from django.urls import reverse
from rest_framework import status

from apps.bills.models import BillStatus
from apps.transactions.models import Transaction, TransactionStatus
from apps.transactions.services.gateway import INTENT_COMPLETED, IntentStatus


@pytest.mark.django_db
class TestTransactionCreate:
    """Tests for POST /api/transactions/"""

    def test_pay_bill(self, gateway, member_client, payable_bill):
        url = reverse('transactions:transaction-list')
        response = member_client.post(
            url,
            {'type': 'BILL_PAYMENT', 'bill_id': str(payable_bill.id)},
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['status'] == TransactionStatus.PENDING
        assert response.data['intent_id'] == 'intent_1'
        assert response.data['destination'] == payable_bill.payee_address

    def test_deposit_requires_amount(self, gateway, member_client, group):
        url = reverse('transactions:transaction-list')
        response = member_client.post(url, {'type': 'DEPOSIT', 'group_id': str(group.id)}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'amount' in response.data

    def test_group_or_bill_required(self, gateway, member_client):
        url = reverse('transactions:transaction-list')
        response = member_client.post(url, {'type': 'DEPOSIT', 'amount': '1'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_unpayable_bill(self, gateway, member_client, draft_bill):
        url = reverse('transactions:transaction-list')
        response = member_client.post(
            url,
            {'type': 'BILL_PAYMENT', 'bill_id': str(draft_bill.id)},
            format='json',
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['code'] == 'bill_not_payable'

    def test_gateway_failure(self, gateway, member_client, payable_bill):
        gateway.fail = True

        url = reverse('transactions:transaction-list')
        response = member_client.post(
            url,
            {'type': 'BILL_PAYMENT', 'bill_id': str(payable_bill.id)},
            format='json',
        )

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.data['code'] == 'gateway_failure'
        assert Transaction.objects.get().status == TransactionStatus.PENDING

    def test_outsider(self, gateway, outsider_client, group):
        url = reverse('transactions:transaction-list')
        response = outsider_client.post(
            url,
            {'type': 'DEPOSIT', 'group_id': str(group.id), 'amount': '1'},
            format='json',
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestTransactionRead:
    """Tests for GET /api/transactions/ and refresh"""

    @pytest.fixture
    def submitted(self, gateway, member_client, payable_bill):
        response = member_client.post(
            reverse('transactions:transaction-list'),
            {'type': 'BILL_PAYMENT', 'bill_id': str(payable_bill.id)},
            format='json',
        )
        return Transaction.objects.get(id=response.data['id'])

    def test_list_own(self, member_client, submitted):
        response = member_client.get(reverse('transactions:transaction-list'))

        assert response.status_code == status.HTTP_200_OK
        assert [t['id'] for t in response.data['results']] == [str(submitted.id)]

    def test_list_group(self, another_member_client, group, submitted):
        response = another_member_client.get(
            reverse('transactions:transaction-list'),
            {'group': str(group.id), 'type': 'BILL_PAYMENT'},
        )

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data['results']) == 1

    def test_retrieve(self, another_member_client, submitted):
        url = reverse('transactions:transaction-detail', kwargs={'pk': submitted.id})
        response = another_member_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['type'] == 'BILL_PAYMENT'

    def test_retrieve_unknown(self, member_client):
        url = reverse('transactions:transaction-detail', kwargs={'pk': uuid4()})
        response = member_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_refresh_completes_payment(self, gateway, member_client, submitted, payable_bill):
        gateway.status = IntentStatus(status=INTENT_COMPLETED, tx_hash='0x' + '34' * 32)

        url = reverse('transactions:transaction-refresh', kwargs={'pk': submitted.id})
        response = member_client.post(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == TransactionStatus.COMPLETED
        assert response.data['tx_hash'] == '0x' + '34' * 32
        payable_bill.refresh_from_db()
        assert payable_bill.status == BillStatus.PAID

    def test_refresh_outsider(self, outsider_client, submitted):
        url = reverse('transactions:transaction-refresh', kwargs={'pk': submitted.id})
        response = outsider_client.post(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN
