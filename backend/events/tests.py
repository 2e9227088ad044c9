"""
Test suite for industry events
Tests: event CRUD and ownership, RSVP rules, attendee visibility, admin creation defaults
"""
from datetime import timedelta
from django.test import TestCase
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient
from backend.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from backend.events.models import Event, EventRSVP


class EventTests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_create_event(self):
        response = self.client.post('/api/events/', {
            'title': 'JCK Las Vegas',
            'location': 'Las Vegas, NV',
            'date': str(timezone.localdate() + timedelta(days=30)),
            'time': '10:00',
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['creator']['id'], self.user.id)
        self.assertEqual(response.data['attendee_count'], 0)

    def test_create_requires_auth(self):
        self.client.logout()
        response = self.client.post('/api/events/', {'title': 'x', 'location': 'y', 'date': '2030-01-01', 'time': '10:00'})
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_list_is_public_and_ordered(self):
        later = TestDataFactory.create_event(self.user, title='Later', date=timezone.localdate() + timedelta(days=20))
        sooner = TestDataFactory.create_event(self.user, title='Sooner', date=timezone.localdate() + timedelta(days=2))
        past = TestDataFactory.create_event(self.user, title='Past', date=timezone.localdate() - timedelta(days=2))

        response = APIClient().get('/api/events/')
        self.assertEqual([e['id'] for e in response.data], [past.id, sooner.id, later.id])

        response = APIClient().get('/api/events/', {'upcoming': 'true'})
        self.assertEqual([e['id'] for e in response.data], [sooner.id, later.id])

    def test_only_creator_can_edit(self):
        event = TestDataFactory.create_event(TestDataFactory.create_user())
        response = self.client.patch(f'/api/events/{event.id}/', {'title': 'Mine'})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        response = self.client.delete(f'/api/events/{event.id}/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_can_delete_any_event(self):
        event = TestDataFactory.create_event(self.user)
        admin_client = AuthenticatedAPIClient().authenticate_user(TestDataFactory.create_admin())
        response = admin_client.delete(f'/api/events/{event.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Event.objects.filter(pk=event.pk).exists())

    def test_creator_updates_event(self):
        event = TestDataFactory.create_event(self.user)
        response = self.client.patch(f'/api/events/{event.id}/', {'location': 'Tucson Convention Center'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['location'], 'Tucson Convention Center')


class RSVPTests(TestCase):

    def setUp(self):
        self.creator = TestDataFactory.create_user()
        self.user = TestDataFactory.create_user()
        self.event = TestDataFactory.create_event(self.creator)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_rsvp_and_duplicate(self):
        response = self.client.post(f'/api/events/{self.event.id}/rsvp/', {})
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data['is_public'])

        response = self.client.post(f'/api/events/{self.event.id}/rsvp/', {})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(EventRSVP.objects.filter(event=self.event).count(), 1)

    def test_toggle_visibility(self):
        EventRSVP.objects.create(event=self.event, user=self.user)
        response = self.client.patch(f'/api/events/{self.event.id}/rsvp/', {'is_public': False})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data['is_public'])

        response = self.client.patch(f'/api/events/{self.event.id}/rsvp/', {})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_cancel_rsvp(self):
        EventRSVP.objects.create(event=self.event, user=self.user)
        response = self.client.delete(f'/api/events/{self.event.id}/rsvp/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        response = self.client.delete(f'/api/events/{self.event.id}/rsvp/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_private_rsvp_visibility(self):
        private_user = TestDataFactory.create_user()
        EventRSVP.objects.create(event=self.event, user=private_user, is_public=False)
        EventRSVP.objects.create(event=self.event, user=self.user, is_public=True)

        response = APIClient().get(f'/api/events/{self.event.id}/rsvps/')
        self.assertEqual([r['user']['id'] for r in response.data], [self.user.id])

        owner_client = AuthenticatedAPIClient().authenticate_user(private_user)
        response = owner_client.get(f'/api/events/{self.event.id}/rsvps/')
        self.assertEqual(len(response.data), 2)

        creator_client = AuthenticatedAPIClient().authenticate_user(self.creator)
        response = creator_client.get(f'/api/events/{self.event.id}/rsvps/')
        self.assertEqual(len(response.data), 2)

        response = APIClient().get(f'/api/events/{self.event.id}/')
        self.assertEqual(response.data['attendee_count'], 2)
        self.assertEqual([a['id'] for a in response.data['attendees']], [self.user.id])

    def test_my_rsvps(self):
        EventRSVP.objects.create(event=self.event, user=self.user)
        response = self.client.get('/api/me/rsvps/')
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['event']['id'], self.event.id)


class AdminEventTests(TestCase):

    def setUp(self):
        self.admin = TestDataFactory.create_admin()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.admin)

    def test_defaults_fill_missing_fields(self):
        response = self.client.post('/api/admin/events/', {'title': ''})
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['title'], 'Untitled Event')
        self.assertEqual(response.data['location'], 'TBD')
        self.assertEqual(response.data['time'], '09:00')
        self.assertEqual(response.data['date'], str(timezone.localdate()))

    def test_non_admin_forbidden(self):
        self.client.authenticate_user(TestDataFactory.create_user())
        response = self.client.post('/api/admin/events/', {'title': 'Show'})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
