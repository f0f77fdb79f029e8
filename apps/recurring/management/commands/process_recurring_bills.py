"""
Management command to create bills for due recurring schedules.

Every active schedule whose next due date has passed gets a new DRAFT
bill (and, when auto_propose is set, a proposal). Meant to run
periodically (cron or a scheduler).

Usage:
    python manage.py process_recurring_bills
"""

from django.core.management.base import BaseCommand

from apps.recurring.services import process_due_recurring_bills


class Command(BaseCommand):
    help = 'Create bills for recurring schedules that are due'

    def handle(self, *args, **options):
        result = process_due_recurring_bills()

        message = (
            f'Processed {result.processed} recurring bill(s), '
            f'skipped {result.skipped}, failed {result.failed}.'
        )
        if result.failed:
            self.stdout.write(self.style.WARNING(message))
        else:
            self.stdout.write(self.style.SUCCESS(message))
