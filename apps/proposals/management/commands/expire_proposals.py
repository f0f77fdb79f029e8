"""
Management command to expire proposals past their voting deadline.

Pending proposals whose deadline has passed become EXPIRED and their
bills REJECTED. Meant to run periodically (cron or a scheduler).

Usage:
    python manage.py expire_proposals
    python manage.py expire_proposals --dry-run
"""

from django.core.management.base import BaseCommand
from django.utils import timezone

from apps.proposals.models import Proposal, ProposalStatus
from apps.proposals.services import expire_stale_proposals


class Command(BaseCommand):
    help = 'Expire pending proposals whose voting deadline has passed'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show how many proposals would expire without making changes',
        )

    def handle(self, *args, **options):
        if options['dry_run']:
            count = Proposal.objects.filter(
                status=ProposalStatus.PENDING,
                voting_deadline__lte=timezone.now(),
            ).count()
            self.stdout.write(
                self.style.WARNING(f'--dry-run mode: {count} proposal(s) would expire.')
            )
            return

        expired = expire_stale_proposals()
        self.stdout.write(self.style.SUCCESS(f'Expired {expired} proposal(s).'))
