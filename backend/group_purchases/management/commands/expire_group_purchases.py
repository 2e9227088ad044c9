"""
Management command to close open group purchases whose deadline has passed
"""
from django.core.management.base import BaseCommand
from django.utils import timezone

from backend.group_purchases.models import GroupPurchase


class Command(BaseCommand):
    help = "Marks open group purchases past their deadline as expired"

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Only report which group purchases would expire',
        )

    def handle(self, *args, **options):
        overdue = GroupPurchase.objects.filter(status='open', deadline__lt=timezone.now())
        count = overdue.count()

        if options['dry_run']:
            for group_purchase in overdue:
                self.stdout.write(f'  Would expire: {group_purchase.title} (deadline {group_purchase.deadline:%Y-%m-%d})')
            self.stdout.write(self.style.SUCCESS(f'{count} group purchase(s) would expire'))
            return

        updated = overdue.update(status='expired', updated_at=timezone.now())
        self.stdout.write(self.style.SUCCESS(f'✓ Expired {updated} group purchase(s)'))
