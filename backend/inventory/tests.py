"""
Test suite for profile showcase items
"""
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient
from backend.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from backend.inventory.models import InventoryItem


class InventoryItemTests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_create_item(self):
        response = self.client.post('/api/inventory/', {
            'title': 'Sapphire halo ring',
            'image_url': 'https://img.example.com/ring.jpg',
            'is_featured': True,
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['user']['id'], self.user.id)
        self.assertTrue(response.data['is_new'])

    def test_create_requires_auth(self):
        response = APIClient().post('/api/inventory/', {'title': 'Ring'})
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_feed_newest_first_and_featured_filter(self):
        older = InventoryItem.objects.create(user=self.user, title='Older', is_featured=True)
        newer = InventoryItem.objects.create(user=self.user, title='Newer')

        response = APIClient().get('/api/inventory/')
        self.assertEqual([i['id'] for i in response.data], [newer.id, older.id])

        response = APIClient().get('/api/inventory/', {'featured': 'true'})
        self.assertEqual([i['id'] for i in response.data], [older.id])

    def test_user_showcase(self):
        other = TestDataFactory.create_user()
        InventoryItem.objects.create(user=self.user, title='Mine')
        InventoryItem.objects.create(user=other, title='Theirs')
        response = APIClient().get(f'/api/users/{other.id}/inventory/')
        self.assertEqual([i['title'] for i in response.data], ['Theirs'])

    def test_owner_only_changes(self):
        item = InventoryItem.objects.create(user=TestDataFactory.create_user(), title='Not mine')
        response = self.client.patch(f'/api/inventory/{item.id}/', {'title': 'Mine now'})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        response = self.client.delete(f'/api/inventory/{item.id}/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_owner_updates_and_deletes(self):
        item = InventoryItem.objects.create(user=self.user, title='Pendant')
        response = self.client.patch(f'/api/inventory/{item.id}/', {'is_new': False})
        self.assertFalse(response.data['is_new'])
        response = self.client.delete(f'/api/inventory/{item.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
