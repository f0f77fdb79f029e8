"""Read-only transaction queries (members only)."""

from uuid import UUID

from django.db.models import QuerySet

from apps.accounts.models import User
from apps.groups.services import require_membership
from apps.transactions.models import Transaction

from .exceptions import TransactionNotFoundError


def get_transaction_by_id(*, transaction_id: UUID, user: User) -> Transaction:
    """
    Raises:
        TransactionNotFoundError: If transaction doesn't exist
        NotMemberError: If user is not an active member
    """
    try:
        tx = Transaction.objects.select_related('sender', 'receiver', 'bill').get(id=transaction_id)
    except Transaction.DoesNotExist:
        raise TransactionNotFoundError()

    require_membership(user=user, group_id=tx.group_id)
    return tx


def get_group_transactions(
    *,
    group_id: UUID,
    user: User,
    status: str = None,
    type: str = None,
) -> QuerySet[Transaction]:
    require_membership(user=user, group_id=group_id)

    transactions = Transaction.objects.filter(group_id=group_id).select_related('sender', 'receiver')
    if status:
        transactions = transactions.filter(status=status)
    if type:
        transactions = transactions.filter(type=type)
    return transactions.order_by('-created_at')


def get_user_transactions(*, user: User) -> QuerySet[Transaction]:
    """Transactions the user sent."""
    return (
        Transaction.objects
        .filter(sender=user)
        .select_related('sender', 'receiver')
        .order_by('-created_at')
    )
