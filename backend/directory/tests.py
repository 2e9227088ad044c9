"""
Test suite for the professional directory
Tests: search filters, featured users, profile ownership, photo gallery limits
"""
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient
from backend.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from backend.directory.models import ProfilePhoto, MAX_PROFILE_PHOTOS


class DirectorySearchTests(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.designer = TestDataFactory.create_user(
            username='alice_designs', full_name='Alice Designs', user_type='designer',
            location='New York, NY', company='Alice Fine Jewelry'
        )
        self.dealer = TestDataFactory.create_user(
            username='bob_gems', full_name='Bob Gems', user_type='gemstone_dealer',
            secondary_type='designer', location='Tucson, AZ', is_premium=True
        )
        self.retailer = TestDataFactory.create_user(
            username='carol_retail', full_name='Carol Retail', user_type='retailer', location='Austin, TX'
        )

    def test_search_is_public(self):
        response = self.client.get('/api/users/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 3)

    def test_search_omits_email(self):
        response = self.client.get('/api/users/')
        self.assertNotIn('email', response.data[0])

    def test_search_by_text(self):
        response = self.client.get('/api/users/', {'q': 'fine jewelry'})
        self.assertEqual([u['username'] for u in response.data], ['alice_designs'])

    def test_user_type_matches_secondary(self):
        response = self.client.get('/api/users/', {'user_type': 'designer'})
        usernames = {u['username'] for u in response.data}
        self.assertEqual(usernames, {'alice_designs', 'bob_gems'})

    def test_location_filter(self):
        response = self.client.get('/api/users/', {'location': 'tucson'})
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['id'], self.dealer.id)

    def test_premium_filter_and_featured(self):
        response = self.client.get('/api/users/', {'premium': 'true'})
        self.assertEqual([u['id'] for u in response.data], [self.dealer.id])

        response = self.client.get('/api/users/featured/')
        self.assertEqual([u['id'] for u in response.data], [self.dealer.id])

    def test_inactive_users_hidden(self):
        self.retailer.is_active = False
        self.retailer.save()
        response = self.client.get('/api/users/')
        self.assertEqual(len(response.data), 2)


class ProfileTests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.other = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_get_profile(self):
        response = self.client.get(f'/api/users/{self.other.id}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['username'], self.other.username)

    def test_update_own_profile(self):
        response = self.client.patch(f'/api/users/{self.user.id}/', {'headquarters': 'Antwerp'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['headquarters'], 'Antwerp')

    def test_update_other_profile_forbidden(self):
        response = self.client.patch(f'/api/users/{self.other.id}/', {'bio': 'hacked'})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_update_anonymous(self):
        self.client.logout()
        response = self.client.patch(f'/api/users/{self.user.id}/', {'bio': 'x'})
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_missing_profile(self):
        response = self.client.get('/api/users/999999/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class ProfilePhotoTests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_add_photo_default_order(self):
        first = self.client.post('/api/users/me/photos/', {'photo_url': 'https://img.example.com/1.jpg'})
        second = self.client.post('/api/users/me/photos/', {'photo_url': 'https://img.example.com/2.jpg'})
        self.assertEqual(first.status_code, status.HTTP_201_CREATED)
        self.assertEqual(first.data['display_order'], 0)
        self.assertEqual(second.data['display_order'], 1)

        response = self.client.get(f'/api/users/{self.user.id}/photos/')
        self.assertEqual(len(response.data), 2)

    def test_photo_limit(self):
        for i in range(MAX_PROFILE_PHOTOS):
            ProfilePhoto.objects.create(user=self.user, photo_url=f'https://img.example.com/{i}.jpg', display_order=i)
        response = self.client.post('/api/users/me/photos/', {'photo_url': 'https://img.example.com/extra.jpg'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Maximum of 10 photos allowed')
        self.assertEqual(ProfilePhoto.objects.filter(user=self.user).count(), MAX_PROFILE_PHOTOS)

    def test_invalid_url(self):
        response = self.client.post('/api/users/me/photos/', {'photo_url': 'not a url'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_modify_other_users_photo(self):
        other = TestDataFactory.create_user()
        photo = ProfilePhoto.objects.create(user=other, photo_url='https://img.example.com/o.jpg')
        response = self.client.patch(f'/api/photos/{photo.id}/', {'caption': 'mine now'})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        response = self.client.delete(f'/api/photos/{photo.id}/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_update_and_delete_own_photo(self):
        photo = ProfilePhoto.objects.create(user=self.user, photo_url='https://img.example.com/a.jpg')
        response = self.client.patch(f'/api/photos/{photo.id}/', {'caption': 'Showroom'})
        self.assertEqual(response.data['caption'], 'Showroom')
        response = self.client.delete(f'/api/photos/{photo.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(ProfilePhoto.objects.filter(pk=photo.pk).exists())
