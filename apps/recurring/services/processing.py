"""
Sweep that turns due recurring schedules into bills.

Each schedule is handled in its own transaction; a failure is logged and
the sweep moves on to the next one.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from apps.bills.services import create_bill
from apps.groups.models import GroupMembership, GroupRole
from apps.proposals.services import create_proposal, default_voting_deadline
from apps.recurring.models import RecurringBill

from .schedule_management import next_due_after


logger = logging.getLogger(__name__)


@dataclass
class ProcessingResult:
    processed: int = 0
    skipped: int = 0
    failed: int = 0


def _pick_admin(group_id):
    membership = (
        GroupMembership.objects
        .select_related('user')
        .filter(group_id=group_id, role=GroupRole.ADMIN, is_active=True)
        .order_by('joined_at')
        .first()
    )
    return membership.user if membership else None


def _process_one(recurring_id, now: datetime) -> bool:
    """Create the bill (and proposal) for one due schedule. False when skipped."""
    with transaction.atomic():
        recurring = RecurringBill.objects.select_for_update().get(id=recurring_id)
        # Another sweep may have advanced it already
        if not recurring.is_active or recurring.next_due_date > now:
            return False

        admin = _pick_admin(recurring.group_id)
        if admin is None:
            logger.warning(
                "No admin found for group %s; skipping recurring bill %s",
                recurring.group_id, recurring.id,
            )
            return False

        bill = create_bill(
            user=admin,
            group_id=recurring.group_id,
            title=recurring.title,
            description=recurring.description,
            total_amount=recurring.amount,
            currency=recurring.currency,
            due_date=recurring.next_due_date,
            payee_address=recurring.payee_address,
            items=[{
                'description': recurring.title,
                'amount': recurring.amount,
                'quantity': 1,
            }],
        )

        if recurring.auto_propose:
            create_proposal(
                user=admin,
                bill_id=bill.id,
                title=f"Approve: {recurring.title}",
                description=recurring.description,
                voting_deadline=default_voting_deadline(now),
            )

        recurring.next_due_date = next_due_after(
            recurring.start_date, recurring.next_due_date, recurring.frequency,
        )
        recurring.save(update_fields=['next_due_date', 'updated_at'])

    logger.info("Recurring bill %s produced bill %s", recurring.id, bill.id)
    return True


def process_due_recurring_bills(*, now: Optional[datetime] = None) -> ProcessingResult:
    """
    Create bills for every active schedule that is due and not ended.

    Returns:
        ProcessingResult with processed, skipped and failed counts
    """
    now = now or timezone.now()
    due_ids = list(
        RecurringBill.objects
        .filter(is_active=True, next_due_date__lte=now, group__is_active=True)
        .filter(Q(end_date__isnull=True) | Q(end_date__gt=now))
        .values_list('id', flat=True)
    )

    result = ProcessingResult()
    for recurring_id in due_ids:
        try:
            if _process_one(recurring_id, now):
                result.processed += 1
            else:
                result.skipped += 1
        except Exception:
            logger.exception("Failed to process recurring bill %s", recurring_id)
            result.failed += 1

    logger.info(
        "Recurring sweep: %d processed, %d skipped, %d failed",
        result.processed, result.skipped, result.failed,
    )
    return result
