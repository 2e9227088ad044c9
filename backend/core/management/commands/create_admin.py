"""
Management command to create (or reset) the platform admin account
"""
import os

from django.core.management.base import BaseCommand
from django.contrib.auth import get_user_model

User = get_user_model()


class Command(BaseCommand):
    help = "Creates the platform admin user, or resets its password if it already exists"

    def add_arguments(self, parser):
        parser.add_argument('--username', default='admin', help='Admin username (default: admin)')
        parser.add_argument('--email', default='admin@jewelconnect.local', help='Admin email')
        parser.add_argument(
            '--password',
            default=None,
            help='Admin password (defaults to the ADMIN_PASSWORD environment variable)',
        )

    def handle(self, *args, **options):
        username = options['username']
        password = options['password'] or os.getenv('ADMIN_PASSWORD', 'admin123')

        user, created = User.objects.get_or_create(
            username=username,
            defaults={
                'email': options['email'],
                'full_name': 'Administrator',
                'user_type': 'other',
            },
        )
        user.is_staff = True
        user.is_superuser = True
        user.is_active = True
        user.set_password(password)
        user.save()

        if created:
            self.stdout.write(self.style.SUCCESS(f'✓ Created admin user: {username}'))
        else:
            self.stdout.write(self.style.SUCCESS(f'✓ Updated admin user: {username}'))
