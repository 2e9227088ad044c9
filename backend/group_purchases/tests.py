"""
Test suite for group purchases
Tests: creation with organiser auto-join, joining and fulfilment, leaving, cancellation, expiry command
"""
from datetime import timedelta
from io import StringIO
from django.core.management import call_command
from django.test import TestCase
from django.utils import timezone
from rest_framework import status
from backend.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from backend.group_purchases.models import GroupPurchase, GroupPurchaseParticipant


class GroupPurchaseModelTests(TestCase):

    def test_recalculate_marks_fulfilled(self):
        creator = TestDataFactory.create_user()
        group_purchase = TestDataFactory.create_group_purchase(creator, target_quantity=3)
        GroupPurchaseParticipant.objects.create(group_purchase=group_purchase, user=creator, quantity=2)
        group_purchase.recalculate()
        self.assertEqual(group_purchase.current_quantity, 2)
        self.assertEqual(group_purchase.status, 'open')
        self.assertEqual(group_purchase.get_progress_percent(), 67)

        GroupPurchaseParticipant.objects.create(group_purchase=group_purchase, user=TestDataFactory.create_user(), quantity=2)
        group_purchase.recalculate()
        self.assertEqual(group_purchase.status, 'fulfilled')
        self.assertEqual(group_purchase.get_progress_percent(), 100)


class GroupPurchaseAPITests(TestCase):

    def setUp(self):
        self.creator = TestDataFactory.create_user()
        self.member = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.creator)

    def test_create_adds_creator(self):
        response = self.client.post('/api/group-purchases/', {
            'title': 'Bulk 14k findings',
            'target_quantity': 10,
            'unit_price': '20.00',
            'discounted_unit_price': '15.00',
            'deadline': (timezone.now() + timedelta(days=10)).isoformat(),
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['current_quantity'], 1)
        self.assertEqual(response.data['participant_count'], 1)
        self.assertEqual(response.data['participants'][0]['status'], 'committed')
        self.assertEqual(response.data['progress_percent'], 10)

    def test_discount_cannot_exceed_unit_price(self):
        response = self.client.post('/api/group-purchases/', {
            'title': 'Bad pricing',
            'target_quantity': 5,
            'unit_price': '10.00',
            'discounted_unit_price': '12.00',
            'deadline': (timezone.now() + timedelta(days=10)).isoformat(),
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('discounted_unit_price', response.data)

    def test_join_until_fulfilled(self):
        group_purchase = TestDataFactory.create_group_purchase(self.creator, target_quantity=3)
        member_client = AuthenticatedAPIClient().authenticate_user(self.member)

        response = member_client.post(f'/api/group-purchases/{group_purchase.id}/join/', {'quantity': 3})
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], 'fulfilled')
        self.assertEqual(response.data['current_quantity'], 3)

        late_client = AuthenticatedAPIClient().authenticate_user(TestDataFactory.create_user())
        response = late_client.post(f'/api/group-purchases/{group_purchase.id}/join/', {})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_join_twice(self):
        group_purchase = TestDataFactory.create_group_purchase(self.creator, target_quantity=10)
        member_client = AuthenticatedAPIClient().authenticate_user(self.member)
        member_client.post(f'/api/group-purchases/{group_purchase.id}/join/', {})
        response = member_client.post(f'/api/group-purchases/{group_purchase.id}/join/', {})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_join_after_deadline(self):
        group_purchase = TestDataFactory.create_group_purchase(
            self.creator, deadline=timezone.now() - timedelta(hours=1)
        )
        member_client = AuthenticatedAPIClient().authenticate_user(self.member)
        response = member_client.post(f'/api/group-purchases/{group_purchase.id}/join/', {})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_leave(self):
        group_purchase = TestDataFactory.create_group_purchase(self.creator, target_quantity=10)
        GroupPurchaseParticipant.objects.create(group_purchase=group_purchase, user=self.member, quantity=4)
        group_purchase.recalculate()

        member_client = AuthenticatedAPIClient().authenticate_user(self.member)
        response = member_client.post(f'/api/group-purchases/{group_purchase.id}/leave/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['current_quantity'], 0)

        response = member_client.post(f'/api/group-purchases/{group_purchase.id}/leave/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_creator_cannot_leave(self):
        group_purchase = TestDataFactory.create_group_purchase(self.creator)
        response = self.client.post(f'/api/group-purchases/{group_purchase.id}/leave/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_update_my_participation(self):
        group_purchase = TestDataFactory.create_group_purchase(self.creator, target_quantity=10)
        GroupPurchaseParticipant.objects.create(group_purchase=group_purchase, user=self.member, quantity=1)
        member_client = AuthenticatedAPIClient().authenticate_user(self.member)
        response = member_client.patch(
            f'/api/group-purchases/{group_purchase.id}/participants/me/', {'quantity': 5, 'status': 'paid'}
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], 'paid')
        group_purchase.refresh_from_db()
        self.assertEqual(group_purchase.current_quantity, 5)

    def test_quantity_tracks_participants_after_fulfilment(self):
        group_purchase = TestDataFactory.create_group_purchase(self.creator, target_quantity=4)
        GroupPurchaseParticipant.objects.create(group_purchase=group_purchase, user=self.creator, quantity=1)
        member_client = AuthenticatedAPIClient().authenticate_user(self.member)
        response = member_client.post(f'/api/group-purchases/{group_purchase.id}/join/', {'quantity': 3})
        self.assertEqual(response.data['status'], 'fulfilled')

        response = member_client.patch(f'/api/group-purchases/{group_purchase.id}/participants/me/', {'quantity': 1})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        group_purchase.refresh_from_db()
        participant_total = sum(group_purchase.participants.values_list('quantity', flat=True))
        self.assertEqual(group_purchase.current_quantity, participant_total)
        self.assertEqual(group_purchase.current_quantity, 2)
        self.assertEqual(group_purchase.status, 'fulfilled')

        response = member_client.post(f'/api/group-purchases/{group_purchase.id}/leave/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        group_purchase.refresh_from_db()
        self.assertEqual(group_purchase.current_quantity, 2)
        self.assertEqual(group_purchase.participants.count(), 2)

    def test_cancel(self):
        group_purchase = TestDataFactory.create_group_purchase(self.creator)
        member_client = AuthenticatedAPIClient().authenticate_user(self.member)
        response = member_client.post(f'/api/group-purchases/{group_purchase.id}/cancel/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        response = self.client.post(f'/api/group-purchases/{group_purchase.id}/cancel/')
        self.assertEqual(response.data['status'], 'cancelled')
        response = self.client.post(f'/api/group-purchases/{group_purchase.id}/cancel/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_only_creator_edits(self):
        group_purchase = TestDataFactory.create_group_purchase(self.creator)
        member_client = AuthenticatedAPIClient().authenticate_user(self.member)
        response = member_client.patch(f'/api/group-purchases/{group_purchase.id}/', {'title': 'Mine'})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_list_status_filter_and_mine(self):
        open_gp = TestDataFactory.create_group_purchase(self.creator)
        TestDataFactory.create_group_purchase(self.member, status='cancelled')
        response = self.client.get('/api/group-purchases/', {'status': 'open'})
        self.assertEqual([g['id'] for g in response.data], [open_gp.id])
        response = self.client.get('/api/me/group-purchases/')
        self.assertEqual([g['id'] for g in response.data], [open_gp.id])


class ExpireGroupPurchasesCommandTests(TestCase):

    def setUp(self):
        creator = TestDataFactory.create_user()
        self.overdue = TestDataFactory.create_group_purchase(creator, deadline=timezone.now() - timedelta(days=1))
        self.current = TestDataFactory.create_group_purchase(creator)

    def test_dry_run_changes_nothing(self):
        out = StringIO()
        call_command('expire_group_purchases', '--dry-run', stdout=out)
        self.assertIn('1 group purchase(s) would expire', out.getvalue())
        self.overdue.refresh_from_db()
        self.assertEqual(self.overdue.status, 'open')

    def test_expires_overdue_only(self):
        call_command('expire_group_purchases', stdout=StringIO())
        self.overdue.refresh_from_db()
        self.current.refresh_from_db()
        self.assertEqual(self.overdue.status, 'expired')
        self.assertEqual(self.current.status, 'open')
