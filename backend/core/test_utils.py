"""
Test utilities and factories for creating test data
"""
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from backend.network.models import Connection
from backend.events.models import Event
from backend.gemstones.models import Supplier, GemstoneCategory, Gemstone
from backend.marketplace.models import Listing
from backend.group_purchases.models import GroupPurchase
from backend.administration.models import Developer
from decimal import Decimal
from datetime import timedelta
from django.utils import timezone
import random
import string

User = get_user_model()


class TestDataFactory:
    """Factory class for creating test data"""

    @staticmethod
    def random_string(length=10):
        """Generate a random string"""
        return ''.join(random.choices(string.ascii_letters + string.digits, k=length))

    @staticmethod
    def create_user(username=None, email=None, password='testpass123', is_staff=False, is_superuser=False, **extra):
        """Create a test user"""
        if not username:
            username = f'testuser_{TestDataFactory.random_string(6)}'
        if not email:
            email = f'{username}@test.com'
        extra.setdefault('full_name', username.replace('_', ' ').title())
        return User.objects.create_user(
            username=username,
            email=email,
            password=password,
            is_staff=is_staff,
            is_superuser=is_superuser,
            **extra
        )

    @staticmethod
    def create_admin(username=None):
        """Create a platform admin"""
        return TestDataFactory.create_user(username=username, is_staff=True)

    @staticmethod
    def create_connection(requester, recipient, status='accepted'):
        return Connection.objects.create(requester=requester, recipient=recipient, status=status)

    @staticmethod
    def create_event(creator, title=None, date=None, time='10:00', location='Tucson, AZ'):
        """Create a test event, one week out unless a date is given"""
        return Event.objects.create(
            creator=creator,
            title=title or f'Event_{TestDataFactory.random_string(6)}',
            location=location,
            date=date or (timezone.localdate() + timedelta(days=7)),
            time=time,
        )

    @staticmethod
    def create_supplier(name=None):
        return Supplier.objects.create(name=name or f'Supplier_{TestDataFactory.random_string(6)}')

    @staticmethod
    def create_category(name=None):
        return GemstoneCategory.objects.create(name=name or f'Category_{TestDataFactory.random_string(6)}')

    @staticmethod
    def create_gemstone(name=None, supplier=None, category=None, price=Decimal('100.00'), inventory=5, **extra):
        """Create a test gemstone with its supplier and category"""
        return Gemstone.objects.create(
            supplier=supplier or TestDataFactory.create_supplier(),
            category=category or TestDataFactory.create_category(),
            name=name or f'Gemstone_{TestDataFactory.random_string(6)}',
            price=price,
            inventory=inventory,
            **extra
        )

    @staticmethod
    def create_listing(user, title=None, price=Decimal('250.00'), listing_type='finished_jewelry', **extra):
        return Listing.objects.create(
            user=user,
            title=title or f'Listing_{TestDataFactory.random_string(6)}',
            price=price,
            listing_type=listing_type,
            **extra
        )

    @staticmethod
    def create_group_purchase(creator, title=None, target_quantity=5, deadline=None, status='open'):
        """Create a group purchase without adding the creator as a participant"""
        return GroupPurchase.objects.create(
            creator=creator,
            title=title or f'Group buy {TestDataFactory.random_string(6)}',
            target_quantity=target_quantity,
            unit_price=Decimal('50.00'),
            discounted_unit_price=Decimal('40.00'),
            deadline=deadline or (timezone.now() + timedelta(days=7)),
            status=status,
        )

    @staticmethod
    def create_developer(user=None, role='backend', added_by=None):
        return Developer.objects.create(
            user=user or TestDataFactory.create_user(),
            role=role,
            added_by=added_by,
        )


class AuthenticatedAPIClient(APIClient):
    """APIClient with authentication helper"""

    def authenticate_user(self, user):
        """Authenticate the client with a user"""
        refresh = RefreshToken.for_user(user)
        self.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
        return self

    def logout(self):
        """Remove authentication"""
        self.credentials()
