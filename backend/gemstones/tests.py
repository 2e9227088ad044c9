"""
Test suite for the gemstone catalog
Tests: public reads, admin-only writes, filters, list caching and invalidation, seed command
"""
from decimal import Decimal
from io import StringIO
from django.core.cache import cache
from django.core.management import call_command
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient
from backend.core.cache_signals import suspend_cache_signals
from backend.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from backend.gemstones.models import Supplier, GemstoneCategory, Gemstone
from backend.orders.models import Cart, CartItem
from backend.orders.utils import checkout_cart

SHIPPING = {
    'shipping_address': '5 Gem Lane',
    'shipping_city': 'Tucson',
    'shipping_state': 'AZ',
    'shipping_zip': '85701',
    'shipping_country': 'USA',
    'payment_method': 'card',
}


class CatalogPermissionTests(TestCase):

    def setUp(self):
        cache.clear()
        self.supplier = TestDataFactory.create_supplier(name='GemsBiz')
        self.category = TestDataFactory.create_category(name='Rubies')
        self.client = AuthenticatedAPIClient()

    def gemstone_payload(self, **overrides):
        payload = {
            'supplier_id': self.supplier.id,
            'category_id': self.category.id,
            'name': 'Pigeon Blood Ruby',
            'price': '4200.00',
            'carat_weight': '1.20',
            'inventory': 2,
        }
        payload.update(overrides)
        return payload

    def test_anonymous_can_read(self):
        TestDataFactory.create_gemstone(supplier=self.supplier, category=self.category)
        for url in ['/api/gemstones/', '/api/gemstone-categories/', '/api/suppliers/']:
            response = APIClient().get(url)
            self.assertEqual(response.status_code, status.HTTP_200_OK, url)

    def test_regular_user_cannot_write(self):
        self.client.authenticate_user(TestDataFactory.create_user())
        response = self.client.post('/api/gemstones/', self.gemstone_payload())
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        response = self.client.post('/api/gemstone-categories/', {'name': 'Opals'})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_anonymous_cannot_write(self):
        response = APIClient().post('/api/suppliers/', {'name': 'Nope'})
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_admin_creates_gemstone(self):
        self.client.authenticate_user(TestDataFactory.create_admin())
        response = self.client.post('/api/gemstones/', self.gemstone_payload())
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['supplier_name'], 'GemsBiz')
        self.assertEqual(response.data['category_name'], 'Rubies')
        self.assertEqual(response.data['price'], '4200.00')

    def test_negative_price_rejected(self):
        self.client.authenticate_user(TestDataFactory.create_admin())
        response = self.client.post('/api/gemstones/', self.gemstone_payload(price='-1.00'))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('price', response.data)

    def test_category_in_use_cannot_be_deleted(self):
        TestDataFactory.create_gemstone(supplier=self.supplier, category=self.category)
        self.client.authenticate_user(TestDataFactory.create_admin())
        response = self.client.delete(f'/api/gemstone-categories/{self.category.id}/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(GemstoneCategory.objects.filter(pk=self.category.pk).exists())

    def test_deleting_supplier_removes_gemstones(self):
        TestDataFactory.create_gemstone(supplier=self.supplier, category=self.category)
        self.client.authenticate_user(TestDataFactory.create_admin())
        response = self.client.delete(f'/api/suppliers/{self.supplier.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertEqual(Gemstone.objects.count(), 0)

    def test_ordered_gemstone_cannot_be_deleted(self):
        gemstone = TestDataFactory.create_gemstone(supplier=self.supplier, category=self.category, inventory=2)
        buyer = TestDataFactory.create_user()
        cart = Cart.objects.create(user=buyer)
        CartItem.objects.create(cart=cart, gemstone=gemstone, quantity=1)
        checkout_cart(buyer, SHIPPING)

        self.client.authenticate_user(TestDataFactory.create_admin())
        response = self.client.delete(f'/api/gemstones/{gemstone.id}/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('error', response.data)

        response = self.client.delete(f'/api/suppliers/{self.supplier.id}/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(Gemstone.objects.filter(pk=gemstone.pk).exists())
        self.assertTrue(Supplier.objects.filter(pk=self.supplier.pk).exists())


class GemstoneFilterTests(TestCase):

    def setUp(self):
        cache.clear()
        self.client = APIClient()
        self.supplier = TestDataFactory.create_supplier()
        self.rubies = TestDataFactory.create_category(name='Rubies')
        self.emeralds = TestDataFactory.create_category(name='Emeralds')
        self.ruby = TestDataFactory.create_gemstone(
            name='Burmese Ruby', supplier=self.supplier, category=self.rubies,
            price=Decimal('3000.00'), origin='Myanmar', is_featured=True
        )
        self.emerald = TestDataFactory.create_gemstone(
            name='Colombian Emerald', category=self.emeralds, price=Decimal('1500.00'), origin='Colombia'
        )
        self.sold_out = TestDataFactory.create_gemstone(
            name='Pink Ruby', category=self.rubies, price=Decimal('800.00'), is_available=False, inventory=0
        )

    def ids(self, response):
        return [g['id'] for g in response.data]

    def test_search(self):
        response = self.client.get('/api/gemstones/', {'q': 'colombia'})
        self.assertEqual(self.ids(response), [self.emerald.id])

    def test_category_and_supplier(self):
        response = self.client.get('/api/gemstones/', {'category': self.rubies.id})
        self.assertEqual(set(self.ids(response)), {self.ruby.id, self.sold_out.id})
        response = self.client.get('/api/gemstones/', {'supplier': self.supplier.id})
        self.assertEqual(self.ids(response), [self.ruby.id])

    def test_price_range_and_ordering(self):
        response = self.client.get('/api/gemstones/', {'min_price': '1000', 'ordering': 'price'})
        self.assertEqual(self.ids(response), [self.emerald.id, self.ruby.id])
        response = self.client.get('/api/gemstones/', {'max_price': '2000', 'ordering': '-price'})
        self.assertEqual(self.ids(response), [self.emerald.id, self.sold_out.id])

    def test_available_and_featured(self):
        response = self.client.get('/api/gemstones/', {'available': 'true'})
        self.assertNotIn(self.sold_out.id, self.ids(response))
        response = self.client.get('/api/gemstones/', {'featured': 'true'})
        self.assertEqual(self.ids(response), [self.ruby.id])

    def test_nested_category_and_supplier_lists(self):
        response = self.client.get(f'/api/gemstone-categories/{self.rubies.id}/gemstones/', {'available': 'true'})
        self.assertEqual(self.ids(response), [self.ruby.id])
        response = self.client.get(f'/api/suppliers/{self.supplier.id}/gemstones/')
        self.assertEqual(self.ids(response), [self.ruby.id])


class CatalogCacheTests(TestCase):

    def setUp(self):
        cache.clear()
        self.client = APIClient()
        self.category = TestDataFactory.create_category()

    def test_list_served_from_cache_until_change(self):
        TestDataFactory.create_gemstone(category=self.category)
        first = self.client.get('/api/gemstones/')
        self.assertEqual(len(first.data), 1)

        # Bypass signals so the cached list goes stale
        with suspend_cache_signals():
            TestDataFactory.create_gemstone(category=self.category)
        cached = self.client.get('/api/gemstones/')
        self.assertEqual(len(cached.data), 1)

        # A normal save invalidates the list
        TestDataFactory.create_gemstone(category=self.category)
        fresh = self.client.get('/api/gemstones/')
        self.assertEqual(len(fresh.data), 3)

    def test_category_list_invalidated_on_create(self):
        response = self.client.get('/api/gemstone-categories/')
        self.assertEqual(len(response.data), 1)
        TestDataFactory.create_category(name='Opals')
        response = self.client.get('/api/gemstone-categories/')
        self.assertEqual(len(response.data), 2)


class SeedGemstonesCommandTests(TestCase):

    def setUp(self):
        cache.clear()

    def test_seed_is_idempotent(self):
        out = StringIO()
        call_command('seed_gemstones', stdout=out)
        self.assertIn('GemsBiz', out.getvalue())
        self.assertEqual(Supplier.objects.filter(name='GemsBiz').count(), 1)
        self.assertEqual(GemstoneCategory.objects.count(), 10)
        gemstone_count = Gemstone.objects.count()
        self.assertEqual(gemstone_count, 5)

        call_command('seed_gemstones', stdout=StringIO())
        self.assertEqual(Gemstone.objects.count(), gemstone_count)

    def test_seed_invalidates_cached_list(self):
        response = APIClient().get('/api/gemstones/')
        self.assertEqual(response.data, [])
        call_command('seed_gemstones', stdout=StringIO())
        response = APIClient().get('/api/gemstones/')
        self.assertEqual(len(response.data), 5)
