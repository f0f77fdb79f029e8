"""
Service layer tests for budget categories.

Tests cover:
- Admin-only create/update/delete
- Member reads
- Soft delete keeps bills filed under the category
"""

import pytest
from decimal import Decimal
from uuid import uuid4

from apps.bills.models import Bill
from apps.budgets.models import BudgetCategory
from apps.budgets.services import (
    create_budget_category,
    update_budget_category,
    delete_budget_category,
    get_group_categories,
    get_category_by_id,
    BudgetCategoryNotFoundError,
)
from apps.budgets.services.exceptions import NotMemberError, InsufficientPermissionsError
from apps.groups.services import GroupNotFoundError


@pytest.mark.django_db
class TestCreateBudgetCategory:

    def test_admin_creates(self, group, group_admin):
        category = create_budget_category(
            user=group_admin,
            group_id=group.id,
            name=' Utilities ',
            color='#2196F3',
            monthly_limit=Decimal('150'),
        )

        assert category.name == 'Utilities'
        assert category.group == group
        assert category.monthly_limit == Decimal('150')
        assert category.is_active is True

    def test_limit_is_optional(self, group, group_admin):
        category = create_budget_category(user=group_admin, group_id=group.id, name='Misc')
        assert category.monthly_limit is None
        assert category.color == ''

    def test_member_cannot_create(self, group, group_member):
        with pytest.raises(InsufficientPermissionsError):
            create_budget_category(user=group_member, group_id=group.id, name='Misc')

        assert not BudgetCategory.objects.exists()

    def test_outsider_cannot_create(self, group, outsider):
        with pytest.raises(NotMemberError):
            create_budget_category(user=outsider, group_id=group.id, name='Misc')

    def test_unknown_group(self, group_admin):
        with pytest.raises(GroupNotFoundError):
            create_budget_category(user=group_admin, group_id=uuid4(), name='Misc')


@pytest.mark.django_db
class TestUpdateBudgetCategory:

    def test_admin_updates(self, groceries, group_admin):
        category = update_budget_category(
            user=group_admin,
            category_id=groceries.id,
            name='Food',
            monthly_limit=None,
        )

        assert category.name == 'Food'
        assert category.monthly_limit is None
        groceries.refresh_from_db()
        assert groceries.name == 'Food'

    def test_member_cannot_update(self, groceries, group_member):
        with pytest.raises(InsufficientPermissionsError):
            update_budget_category(user=group_member, category_id=groceries.id, name='Food')

    def test_unknown_category(self, group_admin):
        with pytest.raises(BudgetCategoryNotFoundError):
            update_budget_category(user=group_admin, category_id=uuid4(), name='Food')

    def test_reactivate(self, groceries, group_admin):
        delete_budget_category(user=group_admin, category_id=groceries.id)

        category = update_budget_category(user=group_admin, category_id=groceries.id, is_active=True)

        assert category.is_active is True


@pytest.mark.django_db
class TestDeleteBudgetCategory:

    def test_soft_delete(self, groceries, group_admin):
        delete_budget_category(user=group_admin, category_id=groceries.id)

        groceries.refresh_from_db()
        assert groceries.is_active is False

    def test_bills_keep_category(self, groceries, draft_bill, group_admin):
        Bill.objects.filter(id=draft_bill.id).update(category=groceries)

        delete_budget_category(user=group_admin, category_id=groceries.id)

        draft_bill.refresh_from_db()
        assert draft_bill.category_id == groceries.id

    def test_hard_delete_clears_bill_category(self, groceries, draft_bill):
        Bill.objects.filter(id=draft_bill.id).update(category=groceries)

        groceries.delete()

        draft_bill.refresh_from_db()
        assert draft_bill.category_id is None

    def test_member_cannot_delete(self, groceries, group_member):
        with pytest.raises(InsufficientPermissionsError):
            delete_budget_category(user=group_member, category_id=groceries.id)


@pytest.mark.django_db
class TestBudgetCategoryQueries:

    def test_member_lists_active(self, group, groceries, group_admin, another_member):
        retired = create_budget_category(user=group_admin, group_id=group.id, name='Old')
        delete_budget_category(user=group_admin, category_id=retired.id)

        assert list(get_group_categories(user=another_member, group_id=group.id)) == [groceries]

    def test_outsider_cannot_list(self, group, outsider):
        with pytest.raises(NotMemberError):
            get_group_categories(user=outsider, group_id=group.id)

    def test_get_by_id(self, groceries, group_member):
        assert get_category_by_id(user=group_member, category_id=groceries.id) == groceries

    def test_deleted_category_not_found(self, groceries, group_admin):
        delete_budget_category(user=group_admin, category_id=groceries.id)

        with pytest.raises(BudgetCategoryNotFoundError):
            get_category_by_id(user=group_admin, category_id=groceries.id)
