import pytest
from decimal import Decimal

from django.urls import reverse
from rest_framework import status

from apps.recurring.models import RecurringBill


@pytest.mark.django_db
class TestRecurringBillApi:
    """Tests for /api/recurring/"""

    def test_admin_creates(self, group_admin_client, group):
        url = reverse('recurring:recurring-bill-list')
        data = {
            'group_id': str(group.id),
            'title': 'Internet',
            'amount': '45.00',
            'payee_address': '0x' + 'cd' * 20,
            'frequency': 'MONTHLY',
            'start_date': '2026-11-05T00:00:00Z',
        }
        response = group_admin_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['next_due_date'].startswith('2026-12-05')
        assert RecurringBill.objects.filter(title='Internet').exists()

    def test_member_cannot_create(self, member_client, group):
        url = reverse('recurring:recurring-bill-list')
        data = {
            'group_id': str(group.id),
            'title': 'Internet',
            'amount': '45.00',
            'payee_address': '0x' + 'cd' * 20,
            'frequency': 'MONTHLY',
            'start_date': '2026-11-05T00:00:00Z',
        }
        response = member_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_invalid_frequency(self, group_admin_client, group):
        url = reverse('recurring:recurring-bill-list')
        data = {
            'group_id': str(group.id),
            'title': 'Internet',
            'amount': '45.00',
            'payee_address': '0x' + 'cd' * 20,
            'frequency': 'HOURLY',
            'start_date': '2026-11-05T00:00:00Z',
        }
        response = group_admin_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'frequency' in response.data

    def test_list_requires_group(self, member_client):
        response = member_client.get(reverse('recurring:recurring-bill-list'))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'group' in response.data

    def test_list_group(self, member_client, group, monthly_rent):
        response = member_client.get(reverse('recurring:recurring-bill-list'), {'group': str(group.id)})

        assert response.status_code == status.HTTP_200_OK
        assert [r['id'] for r in response.data] == [str(monthly_rent.id)]

    def test_list_outsider(self, outsider_client, group, monthly_rent):
        response = outsider_client.get(reverse('recurring:recurring-bill-list'), {'group': str(group.id)})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_admin_patches(self, group_admin_client, monthly_rent):
        url = reverse('recurring:recurring-bill-detail', kwargs={'pk': monthly_rent.id})
        response = group_admin_client.patch(url, {'amount': '950.00'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        monthly_rent.refresh_from_db()
        assert monthly_rent.amount == Decimal('950.00')

    def test_admin_deactivates(self, group_admin_client, monthly_rent):
        url = reverse('recurring:recurring-bill-detail', kwargs={'pk': monthly_rent.id})
        response = group_admin_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        monthly_rent.refresh_from_db()
        assert monthly_rent.is_active is False
