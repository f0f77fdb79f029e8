"""
Budget category management service.

Any active member can read a group's categories; only admins create,
change or delete them. Deleting is soft: bills keep their category.
"""

import logging
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.budgets.models import BudgetCategory
from apps.groups.models import Group, GroupRole
from apps.groups.services import GroupNotFoundError, require_membership

from .exceptions import BudgetCategoryNotFoundError, InsufficientPermissionsError


logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ('name', 'color', 'icon', 'monthly_limit', 'is_active')


def _require_admin(user: User, group_id: UUID) -> None:
    membership = require_membership(user=user, group_id=group_id)
    if membership.role != GroupRole.ADMIN:
        raise InsufficientPermissionsError("Only group admins can manage budget categories")


def _lock_category(category_id: UUID) -> BudgetCategory:
    try:
        return BudgetCategory.objects.select_for_update().get(id=category_id)
    except BudgetCategory.DoesNotExist:
        raise BudgetCategoryNotFoundError()


def create_budget_category(
    *,
    user: User,
    group_id: UUID,
    name: str,
    color: str = '',
    icon: str = '',
    monthly_limit: Optional[Decimal] = None,
) -> BudgetCategory:
    """
    Create a category in a group (admin only).

    Args:
        user: Caller, must be a group admin
        group_id: UUID of the group
        name: Display name
        color: Optional #RRGGBB color
        icon: Optional icon name used by clients
        monthly_limit: Optional spending limit per month, in the bill currency

    Returns:
        Created BudgetCategory

    Raises:
        GroupNotFoundError: If group doesn't exist or is inactive
        NotMemberError: If user is not an active member
        InsufficientPermissionsError: If user is not admin
    """
    if not Group.objects.filter(id=group_id, is_active=True).exists():
        raise GroupNotFoundError()
    _require_admin(user, group_id)

    category = BudgetCategory.objects.create(
        group_id=group_id,
        name=name.strip(),
        color=color,
        icon=icon,
        monthly_limit=monthly_limit,
    )
    logger.info("Budget category %s created in group %s", category.id, group_id)
    return category


@transaction.atomic
def update_budget_category(*, user: User, category_id: UUID, **changes) -> BudgetCategory:
    """
    Change a category (admin only). Setting is_active back to True
    restores a deleted category.

    Raises:
        BudgetCategoryNotFoundError: If category doesn't exist
        NotMemberError: If user is not an active member
        InsufficientPermissionsError: If user is not admin
    """
    category = _lock_category(category_id)
    _require_admin(user, category.group_id)

    update_fields = [field for field in UPDATABLE_FIELDS if field in changes]
    for field in update_fields:
        setattr(category, field, changes[field])

    if update_fields:
        category.save(update_fields=update_fields + ['updated_at'])
    return category


@transaction.atomic
def delete_budget_category(*, user: User, category_id: UUID) -> None:
    """Deactivate a category (admin only). Bills filed under it are untouched."""
    category = _lock_category(category_id)
    _require_admin(user, category.group_id)

    category.is_active = False
    category.save(update_fields=['is_active', 'updated_at'])
    logger.info("Budget category %s deactivated by %s", category.id, user.id)


def get_group_categories(*, user: User, group_id: UUID) -> QuerySet[BudgetCategory]:
    """Active categories of a group, newest first (members only)."""
    require_membership(user=user, group_id=group_id)
    return BudgetCategory.objects.filter(group_id=group_id, is_active=True).order_by('-created_at')


def get_category_by_id(*, user: User, category_id: UUID) -> BudgetCategory:
    try:
        category = BudgetCategory.objects.get(id=category_id, is_active=True)
    except BudgetCategory.DoesNotExist:
        raise BudgetCategoryNotFoundError()

    require_membership(user=user, group_id=category.group_id)
    return category
