"""
Test suite for accounts and authentication
Tests: registration, JWT login, profile self-service, username recovery, audit helper
"""
from django.core import mail
from django.test import TestCase, override_settings
from rest_framework import status
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken
from backend.core.models import AuditLog, User
from backend.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from backend.core.utils import create_audit_log


class RegistrationTests(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.payload = {
            'username': 'rubyhouse',
            'email': 'ruby@example.com',
            'password': 'Gemst0ne!Pass',
            'password_confirm': 'Gemst0ne!Pass',
            'full_name': 'Ruby House',
            'user_type': 'designer',
            'location': 'New York, NY',
        }

    def test_register_returns_tokens(self):
        response = self.client.post('/api/auth/register/', self.payload)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIn('access', response.data)
        self.assertIn('refresh', response.data)
        self.assertEqual(response.data['user']['username'], 'rubyhouse')
        self.assertEqual(response.data['user']['user_type'], 'designer')
        self.assertFalse(response.data['user']['is_premium'])

    def test_register_password_mismatch(self):
        self.payload['password_confirm'] = 'Something3lse!'
        response = self.client.post('/api/auth/register/', self.payload)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('password', response.data)

    def test_register_duplicate_username(self):
        TestDataFactory.create_user(username='rubyhouse')
        response = self.client.post('/api/auth/register/', self.payload)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('username', response.data)

    @override_settings(ADMIN_USERNAMES=['admin', 'CarmelaR'])
    def test_register_reserved_admin_username(self):
        for username in ['admin', 'Admin', 'carmelar']:
            self.payload['username'] = username
            response = self.client.post('/api/auth/register/', self.payload)
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, username)
            self.assertIn('username', response.data)
        self.assertFalse(User.objects.filter(username__iexact='admin').exists())

    def test_register_requires_email(self):
        del self.payload['email']
        response = self.client.post('/api/auth/register/', self.payload)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('email', response.data)


class LoginTests(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.user = TestDataFactory.create_user(username='diamondco', password='testpass123')

    def test_login_success(self):
        response = self.client.post('/api/auth/login/', {'username': 'diamondco', 'password': 'testpass123'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['user']['id'], self.user.id)
        token = AccessToken(response.data['access'])
        self.assertEqual(token['username'], 'diamondco')
        self.assertFalse(token['is_platform_admin'])

    def test_login_wrong_password(self):
        response = self.client.post('/api/auth/login/', {'username': 'diamondco', 'password': 'nope'})
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_refresh(self):
        login = self.client.post('/api/auth/login/', {'username': 'diamondco', 'password': 'testpass123'})
        response = self.client.post('/api/auth/refresh/', {'refresh': login.data['refresh']})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('access', response.data)

    def test_refresh_for_deleted_user(self):
        login = self.client.post('/api/auth/login/', {'username': 'diamondco', 'password': 'testpass123'})
        self.user.delete()
        response = self.client.post('/api/auth/refresh/', {'refresh': login.data['refresh']})
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data['detail'], 'Token is invalid. User no longer exists.')

    @override_settings(ADMIN_USERNAMES=['diamondco'])
    def test_admin_username_claim(self):
        response = self.client.post('/api/auth/login/', {'username': 'diamondco', 'password': 'testpass123'})
        self.assertTrue(AccessToken(response.data['access'])['is_platform_admin'])
        self.assertTrue(response.data['user']['is_platform_admin'])


class MeTests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_me_requires_auth(self):
        self.client.logout()
        response = self.client.get('/api/auth/me/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_me_includes_email(self):
        response = self.client.get('/api/auth/me/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['email'], self.user.email)

    def test_me_update_profile(self):
        response = self.client.patch('/api/auth/me/', {'company': 'Gem Works', 'bio': 'Colored stones'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.user.refresh_from_db()
        self.assertEqual(self.user.company, 'Gem Works')

    def test_me_cannot_grant_premium(self):
        self.client.patch('/api/auth/me/', {'is_premium': True})
        self.user.refresh_from_db()
        self.assertFalse(self.user.is_premium)


class RecoverUsernameTests(TestCase):

    def setUp(self):
        self.client = APIClient()

    def test_missing_email(self):
        response = self.client.post('/api/auth/recover-username/', {})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_known_email_sends_mail(self):
        TestDataFactory.create_user(username='pearlbuyer', email='pearl@example.com')
        response = self.client.post('/api/auth/recover-username/', {'email': 'PEARL@example.com'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(mail.outbox), 1)
        self.assertIn('pearlbuyer', mail.outbox[0].body)

    def test_unknown_email_same_response(self):
        known = TestDataFactory.create_user(email='known@example.com')
        response_known = self.client.post('/api/auth/recover-username/', {'email': known.email})
        response_unknown = self.client.post('/api/auth/recover-username/', {'email': 'nobody@example.com'})
        self.assertEqual(response_known.data, response_unknown.data)
        self.assertEqual(len(mail.outbox), 1)


class AuditLogHelperTests(TestCase):

    def test_create_audit_log_without_request(self):
        user = TestDataFactory.create_user()
        log = create_audit_log(action='update', model_name='User', object_id=user.id, user=user,
                               object_name=user.username, changes={'company': 'New'})
        self.assertIsNotNone(log)
        self.assertEqual(AuditLog.objects.count(), 1)
        self.assertEqual(log.user, user)
        self.assertIsNone(log.ip_address)
