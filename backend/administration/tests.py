"""
Test suite for the admin panel
Tests: permissions, user management, article import, developers, project assignments, stats, audit logs
"""
from decimal import Decimal
from unittest import mock
import requests
from django.core.cache import cache
from django.test import TestCase, override_settings
from rest_framework import status
from rest_framework.test import APIClient
from backend.administration.content_import import extract_article, is_valid_url
from backend.administration.models import Article, Developer, ProjectAssignment
from backend.core.models import AuditLog, User
from backend.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from backend.directory.models import ProfilePhoto, MAX_PROFILE_PHOTOS
from backend.orders.models import Order

SAMPLE_PAGE = """
<html>
<head>
  <title>Lab-Grown Diamonds &amp; the Market</title>
  <meta name="description" content="How lab-grown stones are changing prices">
  <meta name="author" content="Jane Gem">
  <style>body { color: red; }</style>
</head>
<body>
  <nav>Home | News</nav>
  <header>Site banner</header>
  <p>Prices for lab-grown diamonds fell again this quarter.</p>
  <script>trackVisit();</script>
  <footer>Copyright</footer>
</body>
</html>
"""


def fake_response(text='', status_code=200):
    response = mock.Mock()
    response.text = text
    response.status_code = status_code
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(f'{status_code} Error')
    else:
        response.raise_for_status.return_value = None
    return response


class AdminPermissionTests(TestCase):

    def test_regular_user_forbidden(self):
        client = AuthenticatedAPIClient().authenticate_user(TestDataFactory.create_user())
        for url in ['/api/admin/users/', '/api/admin/stats/', '/api/admin/developers/', '/api/admin/audit-logs/']:
            response = client.get(url)
            self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN, url)

    def test_anonymous_unauthorized(self):
        response = APIClient().get('/api/admin/stats/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    @override_settings(ADMIN_USERNAMES=['carmelar'])
    def test_allow_listed_username_is_admin(self):
        client = AuthenticatedAPIClient().authenticate_user(TestDataFactory.create_user(username='carmelar'))
        response = client.get('/api/admin/stats/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)


class AdminUserManagementTests(TestCase):

    def setUp(self):
        self.admin = TestDataFactory.create_admin()
        self.user = TestDataFactory.create_user(username='opal_studio', company='Opal Studio')
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.admin)

    def test_list_includes_email_and_search(self):
        response = self.client.get('/api/admin/users/', {'q': 'opal'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['email'], self.user.email)

    def test_grant_premium_is_audited(self):
        response = self.client.patch(f'/api/admin/users/{self.user.id}/', {'is_premium': True})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.user.refresh_from_db()
        self.assertTrue(self.user.is_premium)
        log = AuditLog.objects.get(action='premium_change')
        self.assertEqual(log.object_id, str(self.user.id))
        self.assertEqual(log.user, self.admin)

    def test_delete_user(self):
        response = self.client.delete(f'/api/admin/users/{self.user.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(User.objects.filter(pk=self.user.pk).exists())
        self.assertTrue(AuditLog.objects.filter(action='delete', model_name='User').exists())

    def test_cannot_delete_self(self):
        response = self.client.delete(f'/api/admin/users/{self.admin.id}/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_add_photo_for_user_respects_limit(self):
        response = self.client.post(f'/api/admin/users/{self.user.id}/photos/', {'photo_url': 'https://img.example.com/a.jpg'})
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        for i in range(MAX_PROFILE_PHOTOS - 1):
            ProfilePhoto.objects.create(user=self.user, photo_url=f'https://img.example.com/{i}.jpg')
        response = self.client.post(f'/api/admin/users/{self.user.id}/photos/', {'photo_url': 'https://img.example.com/b.jpg'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_edit_and_remove_user_photo(self):
        photo = ProfilePhoto.objects.create(user=self.user, photo_url='https://img.example.com/a.jpg')
        url = f'/api/admin/users/{self.user.id}/photos/{photo.id}/'

        response = self.client.patch(url, {'caption': 'Booth at JCK'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['caption'], 'Booth at JCK')
        self.assertTrue(AuditLog.objects.filter(model_name='ProfilePhoto', action='update').exists())

        other = TestDataFactory.create_user()
        response = self.client.delete(f'/api/admin/users/{other.id}/photos/{photo.id}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

        response = self.client.delete(url)
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(ProfilePhoto.objects.filter(pk=photo.pk).exists())

    def test_regular_user_cannot_edit_others_photo(self):
        photo = ProfilePhoto.objects.create(user=self.user, photo_url='https://img.example.com/a.jpg')
        outsider_client = AuthenticatedAPIClient().authenticate_user(TestDataFactory.create_user())
        response = outsider_client.patch(f'/api/admin/users/{self.user.id}/photos/{photo.id}/', {'caption': 'x'})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class ContentExtractionTests(TestCase):

    def test_extract_import_fields(self):
        data = extract_article(SAMPLE_PAGE, 'Imported Article', 'Unknown',
                               ['script', 'style', 'nav', 'header', 'footer'], 5000)
        self.assertEqual(data['title'], 'Lab-Grown Diamonds & the Market')
        self.assertEqual(data['author'], 'Jane Gem')
        self.assertEqual(data['description'], 'How lab-grown stones are changing prices')
        self.assertIn('Prices for lab-grown diamonds fell', data['content'])
        self.assertNotIn('trackVisit', data['content'])
        self.assertNotIn('Site banner', data['content'])
        self.assertNotIn('<p>', data['content'])

    def test_defaults_and_truncation(self):
        data = extract_article('<p>' + 'a' * 50 + '</p>', 'Untitled', '', ['script'], 10)
        self.assertEqual(data['title'], 'Untitled')
        self.assertEqual(data['author'], '')
        self.assertEqual(data['content'], 'a' * 10 + '...')

    def test_meta_attribute_order_and_quotes(self):
        page = (
            "<title>T</title>"
            "<meta content=\"Gem news\" name=\"description\">"
            "<meta name='author' content='Ann'>"
            "<p>Hi</p>"
        )
        data = extract_article(page, 'Untitled', '', ['script', 'style'], 1000)
        self.assertEqual(data['title'], 'T')
        self.assertEqual(data['author'], 'Ann')
        self.assertEqual(data['description'], 'Gem news')
        self.assertEqual(data['content'], 'Hi')

    def test_title_kept_out_of_body_text(self):
        data = extract_article(SAMPLE_PAGE, 'Untitled', '', ['script', 'style'], 1000)
        self.assertNotIn('Lab-Grown Diamonds & the Market', data['content'])
        self.assertIn('Site banner', data['content'])

    def test_long_title_truncated_to_column(self):
        page = '<html><head><title>' + 'x' * 900 + '</title></head><body><p>Body</p></body></html>'
        data = extract_article(page, 'Imported Article', 'Unknown', ['script'], 5000)
        self.assertEqual(len(data['title']), Article._meta.get_field('title').max_length)
        self.assertEqual(data['author'], 'Unknown')

    def test_is_valid_url(self):
        self.assertTrue(is_valid_url('https://jewelry.example.com/news'))
        self.assertFalse(is_valid_url('ftp://example.com'))
        self.assertFalse(is_valid_url(None))


class ArticleImportTests(TestCase):

    def setUp(self):
        self.admin = TestDataFactory.create_admin()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.admin)

    @mock.patch('backend.administration.content_import.requests.get')
    def test_preview(self, mock_get):
        mock_get.return_value = fake_response(SAMPLE_PAGE)
        response = self.client.post('/api/admin/preview-content/', {'url': 'https://news.example.com/lab'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['title'], 'Lab-Grown Diamonds & the Market')
        self.assertEqual(response.data['url'], 'https://news.example.com/lab')
        self.assertEqual(Article.objects.count(), 0)

    def test_invalid_url(self):
        response = self.client.post('/api/admin/preview-content/', {'url': 'not-a-url'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        response = self.client.post('/api/admin/import-article/', {})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    @mock.patch('backend.administration.content_import.requests.get')
    def test_import_creates_article(self, mock_get):
        mock_get.return_value = fake_response(SAMPLE_PAGE)
        response = self.client.post('/api/admin/import-article/', {'url': 'https://news.example.com/lab'})
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['author'], 'Jane Gem')
        self.assertEqual(response.data['imported_by']['id'], self.admin.id)
        self.assertTrue(AuditLog.objects.filter(action='article_import').exists())

        public = APIClient().get('/api/articles/')
        self.assertEqual(len(public.data), 1)

    @mock.patch('backend.administration.content_import.requests.get')
    def test_fetch_failure(self, mock_get):
        mock_get.return_value = fake_response(status_code=404)
        response = self.client.post('/api/admin/import-article/', {'url': 'https://news.example.com/missing'})
        self.assertEqual(response.status_code, status.HTTP_502_BAD_GATEWAY)
        self.assertEqual(response.data['error'], 'Failed to import article')

        mock_get.side_effect = requests.exceptions.Timeout('timed out')
        response = self.client.post('/api/admin/preview-content/', {'url': 'https://news.example.com/slow'})
        self.assertEqual(response.status_code, status.HTTP_502_BAD_GATEWAY)
        self.assertEqual(response.data['details'], 'timed out')
        self.assertEqual(Article.objects.count(), 0)

    def test_unpublish_hides_from_public(self):
        article = Article.objects.create(title='Old news', source_url='https://news.example.com/old')
        response = self.client.patch(f'/api/admin/articles/{article.id}/', {'is_published': False})
        self.assertFalse(response.data['is_published'])
        self.assertEqual(APIClient().get('/api/articles/').data, [])
        self.assertEqual(len(self.client.get('/api/admin/articles/').data), 1)

        response = self.client.delete(f'/api/admin/articles/{article.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)


class DeveloperTests(TestCase):

    def setUp(self):
        self.admin = TestDataFactory.create_admin()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.admin)
        self.dev_user = TestDataFactory.create_user()

    def test_create_developer(self):
        response = self.client.post('/api/admin/developers/', {
            'user_id': self.dev_user.id,
            'role': 'fullstack',
            'access_level': 'contributor',
            'skills': ['django', 'react'],
            'hourly_rate': '85.00',
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['user']['id'], self.dev_user.id)
        self.assertEqual(response.data['added_by']['id'], self.admin.id)
        self.assertEqual(response.data['skills'], ['django', 'react'])

    def test_one_profile_per_user(self):
        TestDataFactory.create_developer(user=self.dev_user)
        response = self.client.post('/api/admin/developers/', {'user_id': self.dev_user.id, 'role': 'backend'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('user_id', response.data)

    def test_invalid_role(self):
        response = self.client.post('/api/admin/developers/', {'user_id': self.dev_user.id, 'role': 'wizard'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_update_and_delete(self):
        developer = TestDataFactory.create_developer(user=self.dev_user)
        response = self.client.patch(f'/api/admin/developers/{developer.id}/', {'is_active': False})
        self.assertFalse(response.data['is_active'])
        response = self.client.get('/api/admin/developers/', {'active': 'true'})
        self.assertEqual(response.data, [])

        response = self.client.delete(f'/api/admin/developers/{developer.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Developer.objects.exists())

    def test_project_assignment_lifecycle(self):
        developer = TestDataFactory.create_developer(user=self.dev_user)
        response = self.client.post('/api/admin/project-assignments/', {
            'developer_id': developer.id,
            'project_name': 'Marketplace search',
            'priority': 'high',
            'start_date': '2026-01-05',
            'due_date': '2026-02-01',
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], 'active')
        self.assertIsNone(response.data['completed_at'])
        assignment_id = response.data['id']

        response = self.client.patch(f'/api/admin/project-assignments/{assignment_id}/', {'status': 'completed'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIsNotNone(response.data['completed_at'])

        response = self.client.get('/api/admin/project-assignments/', {'developer': developer.id, 'status': 'completed'})
        self.assertEqual(len(response.data), 1)
        response = self.client.get(f'/api/admin/developers/{developer.id}/')
        self.assertEqual(response.data['assignment_count'], 1)

    def test_due_date_before_start(self):
        developer = TestDataFactory.create_developer(user=self.dev_user)
        response = self.client.post('/api/admin/project-assignments/', {
            'developer_id': developer.id,
            'project_name': 'Backwards',
            'start_date': '2026-03-01',
            'due_date': '2026-02-01',
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(ProjectAssignment.objects.exists())


class AdminDashboardTests(TestCase):

    def setUp(self):
        cache.clear()
        self.admin = TestDataFactory.create_admin()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.admin)

    def test_stats(self):
        alice = TestDataFactory.create_user(user_type='designer', is_premium=True)
        bob = TestDataFactory.create_user(user_type='designer')
        TestDataFactory.create_connection(alice, bob)
        TestDataFactory.create_gemstone()
        shipping = {
            'shipping_address': '1 Main', 'shipping_city': 'Austin', 'shipping_state': 'TX',
            'shipping_zip': '73301', 'shipping_country': 'USA', 'payment_method': 'card',
        }
        Order.objects.create(user=alice, total_amount=Decimal('100.00'), **shipping)
        Order.objects.create(user=alice, total_amount=Decimal('50.00'), status='cancelled', **shipping)
        TestDataFactory.create_listing(bob)
        TestDataFactory.create_group_purchase(bob)

        response = self.client.get('/api/admin/stats/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['users']['total'], 3)
        self.assertEqual(response.data['users']['premium'], 1)
        self.assertEqual(response.data['users']['by_type']['designer'], 2)
        self.assertEqual(response.data['connections']['accepted'], 1)
        self.assertEqual(response.data['gemstones']['total'], 1)
        self.assertEqual(response.data['orders']['total'], 2)
        self.assertEqual(response.data['orders']['by_status'], {'pending': 1, 'cancelled': 1})
        self.assertEqual(Decimal(response.data['orders']['revenue']), Decimal('100.00'))
        self.assertEqual(response.data['listings'], 1)
        self.assertEqual(response.data['open_group_purchases'], 1)

    def test_audit_log_filters(self):
        user = TestDataFactory.create_user()
        self.client.patch(f'/api/admin/users/{user.id}/', {'company': 'Renamed'})
        self.client.patch(f'/api/admin/users/{user.id}/', {'is_premium': True})

        response = self.client.get('/api/admin/audit-logs/')
        self.assertEqual(len(response.data), 2)
        response = self.client.get('/api/admin/audit-logs/', {'action': 'premium_change'})
        self.assertEqual(len(response.data), 1)
        response = self.client.get('/api/admin/audit-logs/', {'model': 'Order'})
        self.assertEqual(response.data, [])
        response = self.client.get('/api/admin/audit-logs/', {'date_from': '2000-01-01', 'date_to': '2999-12-31'})
        self.assertEqual(len(response.data), 2)
