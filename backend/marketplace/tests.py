"""
Test suite for marketplace listings
"""
from decimal import Decimal
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient
from backend.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from backend.marketplace.models import Listing


class ListingTests(TestCase):

    def setUp(self):
        self.seller = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.seller)

    def test_create_listing(self):
        response = self.client.post('/api/marketplace/', {
            'title': 'Used rolling mill',
            'price': '850.00',
            'listing_type': 'equipment',
            'condition': 'Good',
            'is_trade_available': True,
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['seller']['id'], self.seller.id)
        self.assertEqual(response.data['price'], '850.00')

    def test_negative_price(self):
        response = self.client.post('/api/marketplace/', {'title': 'Bad', 'price': '-5.00'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_browse_requires_no_auth(self):
        TestDataFactory.create_listing(self.seller)
        response = APIClient().get('/api/marketplace/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)

    def test_filters(self):
        chain = TestDataFactory.create_listing(self.seller, title='Gold rope chain', listing_type='chains', is_closeout=True)
        saw = TestDataFactory.create_listing(self.seller, title='Jeweler saw', listing_type='equipment', is_trade_available=True)
        other = TestDataFactory.create_listing(TestDataFactory.create_user(), title='Ring boxes', listing_type='supplies')

        client = APIClient()
        self.assertEqual([l['id'] for l in client.get('/api/marketplace/', {'type': 'chains'}).data], [chain.id])
        self.assertEqual([l['id'] for l in client.get('/api/marketplace/', {'closeout': 'true'}).data], [chain.id])
        self.assertEqual([l['id'] for l in client.get('/api/marketplace/', {'trade': 'true'}).data], [saw.id])
        self.assertEqual([l['id'] for l in client.get('/api/marketplace/', {'q': 'boxes'}).data], [other.id])
        self.assertEqual(len(client.get('/api/marketplace/', {'seller': self.seller.id}).data), 2)

    def test_invalid_type_filter(self):
        response = APIClient().get('/api/marketplace/', {'type': 'spaceships'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_my_listings(self):
        TestDataFactory.create_listing(self.seller)
        TestDataFactory.create_listing(TestDataFactory.create_user())
        response = self.client.get('/api/marketplace/mine/')
        self.assertEqual(len(response.data), 1)

    def test_owner_only_changes(self):
        listing = TestDataFactory.create_listing(TestDataFactory.create_user())
        response = self.client.patch(f'/api/marketplace/{listing.id}/', {'price': '1.00'})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        response = self.client.delete(f'/api/marketplace/{listing.id}/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_owner_updates_and_deletes(self):
        listing = TestDataFactory.create_listing(self.seller, price=Decimal('100.00'))
        response = self.client.patch(f'/api/marketplace/{listing.id}/', {'price': '80.00', 'is_closeout': True})
        self.assertEqual(response.data['price'], '80.00')
        self.assertTrue(response.data['is_closeout'])
        response = self.client.delete(f'/api/marketplace/{listing.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Listing.objects.filter(pk=listing.pk).exists())
