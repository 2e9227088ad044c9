"""
Test suite for connections and direct messaging
Tests: connection lifecycle, messaging rules, conversations, WebSocket chat
"""
from channels.layers import get_channel_layer
from channels.routing import URLRouter
from channels.testing import WebsocketCommunicator
from django.test import TestCase, TransactionTestCase, override_settings
from rest_framework import status
from rest_framework_simplejwt.tokens import AccessToken
from backend.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from backend.network.messaging import user_group_name
from backend.network.models import Connection, Message
from backend.network.routing import websocket_urlpatterns

IN_MEMORY_LAYERS = {'default': {'BACKEND': 'channels.layers.InMemoryChannelLayer'}}


class ConnectionTests(TestCase):

    def setUp(self):
        self.alice = TestDataFactory.create_user()
        self.bob = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.alice)

    def test_send_request(self):
        response = self.client.post('/api/connections/', {'recipient_id': self.bob.id})
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], 'pending')
        self.assertEqual(response.data['other_user']['id'], self.bob.id)

    def test_cannot_connect_with_self(self):
        response = self.client.post('/api/connections/', {'recipient_id': self.alice.id})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_duplicate_in_either_direction(self):
        TestDataFactory.create_connection(self.bob, self.alice, status='pending')
        response = self.client.post('/api/connections/', {'recipient_id': self.bob.id})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Connection already exists')

    def test_unknown_recipient(self):
        response = self.client.post('/api/connections/', {'recipient_id': 999999})
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_recipient_accepts(self):
        connection = TestDataFactory.create_connection(self.bob, self.alice, status='pending')

        pending = self.client.get('/api/connections/pending/')
        self.assertEqual([c['id'] for c in pending.data], [connection.id])

        response = self.client.patch(f'/api/connections/{connection.id}/', {'status': 'accepted'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        connection.refresh_from_db()
        self.assertEqual(connection.status, Connection.STATUS_ACCEPTED)

    def test_requester_cannot_accept(self):
        connection = TestDataFactory.create_connection(self.alice, self.bob, status='pending')
        response = self.client.patch(f'/api/connections/{connection.id}/', {'status': 'accepted'})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_invalid_status(self):
        connection = TestDataFactory.create_connection(self.bob, self.alice, status='pending')
        response = self.client.patch(f'/api/connections/{connection.id}/', {'status': 'pending'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_either_party_can_remove(self):
        connection = TestDataFactory.create_connection(self.bob, self.alice)
        response = self.client.delete(f'/api/connections/{connection.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

        outsider = TestDataFactory.create_user()
        connection = TestDataFactory.create_connection(self.bob, outsider)
        response = self.client.delete(f'/api/connections/{connection.id}/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_status_endpoint(self):
        response = self.client.get(f'/api/connections/status/{self.bob.id}/')
        self.assertEqual(response.data['status'], 'none')

        connection = TestDataFactory.create_connection(self.alice, self.bob, status='pending')
        response = self.client.get(f'/api/connections/status/{self.bob.id}/')
        self.assertEqual(response.data, {'status': 'pending', 'connection_id': connection.id, 'direction': 'outgoing'})

    def test_list_filter_by_status(self):
        TestDataFactory.create_connection(self.alice, self.bob)
        TestDataFactory.create_connection(TestDataFactory.create_user(), self.alice, status='pending')
        response = self.client.get('/api/connections/', {'status': 'accepted'})
        self.assertEqual(len(response.data), 1)
        response = self.client.get('/api/connections/')
        self.assertEqual(len(response.data), 2)


@override_settings(CHANNEL_LAYERS=IN_MEMORY_LAYERS)
class MessageTests(TestCase):

    def setUp(self):
        self.alice = TestDataFactory.create_user()
        self.bob = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.alice)

    def test_message_requires_connection(self):
        response = self.client.post('/api/messages/', {'recipient_id': self.bob.id, 'content': 'Hello'})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(Message.objects.count(), 0)

    def test_pending_connection_is_not_enough(self):
        TestDataFactory.create_connection(self.alice, self.bob, status='pending')
        response = self.client.post('/api/messages/', {'recipient_id': self.bob.id, 'content': 'Hello'})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_send_message(self):
        TestDataFactory.create_connection(self.bob, self.alice)
        response = self.client.post('/api/messages/', {'recipient_id': self.bob.id, 'content': 'Hello Bob'})
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['sender_id'], self.alice.id)
        self.assertFalse(response.data['is_read'])

    def test_blank_content(self):
        TestDataFactory.create_connection(self.alice, self.bob)
        response = self.client.post('/api/messages/', {'recipient_id': self.bob.id, 'content': '   '})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_conversation_and_unread(self):
        TestDataFactory.create_connection(self.alice, self.bob)
        first = Message.objects.create(sender=self.bob, recipient=self.alice, content='one')
        Message.objects.create(sender=self.alice, recipient=self.bob, content='two')
        Message.objects.create(sender=self.bob, recipient=self.alice, content='three')

        response = self.client.get(f'/api/messages/{self.bob.id}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([m['content'] for m in response.data], ['one', 'two', 'three'])

        response = self.client.get('/api/messages/unread-count/')
        self.assertEqual(response.data['unread_count'], 2)

        response = self.client.get('/api/messages/conversations/')
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['user']['id'], self.bob.id)
        self.assertEqual(response.data[0]['last_message']['content'], 'three')
        self.assertEqual(response.data[0]['unread_count'], 2)

        response = self.client.patch(f'/api/messages/{first.id}/read/')
        self.assertTrue(response.data['is_read'])
        response = self.client.get('/api/messages/unread-count/')
        self.assertEqual(response.data['unread_count'], 1)

    def test_conversations_newest_first(self):
        carol = TestDataFactory.create_user()
        TestDataFactory.create_connection(self.alice, self.bob)
        TestDataFactory.create_connection(carol, self.alice)
        Message.objects.create(sender=self.bob, recipient=self.alice, content='from bob')
        Message.objects.create(sender=self.alice, recipient=carol, content='to carol')

        response = self.client.get('/api/messages/conversations/')
        self.assertEqual([c['user']['id'] for c in response.data], [carol.id, self.bob.id])
        self.assertEqual(response.data[0]['unread_count'], 0)

        Message.objects.create(sender=self.bob, recipient=self.alice, content='bob again')
        response = self.client.get('/api/messages/conversations/')
        self.assertEqual([c['user']['id'] for c in response.data], [self.bob.id, carol.id])
        self.assertEqual(response.data[0]['last_message']['content'], 'bob again')
        self.assertEqual(response.data[0]['unread_count'], 2)

    def test_conversation_requires_connection(self):
        response = self.client.get(f'/api/messages/{self.bob.id}/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_only_recipient_marks_read(self):
        message = Message.objects.create(sender=self.alice, recipient=self.bob, content='hi')
        response = self.client.patch(f'/api/messages/{message.id}/read/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


@override_settings(CHANNEL_LAYERS=IN_MEMORY_LAYERS)
class ChatConsumerTests(TransactionTestCase):

    def setUp(self):
        self.alice = TestDataFactory.create_user()
        self.bob = TestDataFactory.create_user()
        self.application = URLRouter(websocket_urlpatterns)

    def communicator(self, user=None):
        path = '/ws/'
        if user is not None:
            path += f'?token={AccessToken.for_user(user)}'
        return WebsocketCommunicator(self.application, path)

    async def test_query_token_authenticates(self):
        communicator = self.communicator(self.alice)
        connected, _ = await communicator.connect()
        self.assertTrue(connected)
        response = await communicator.receive_json_from(timeout=3)
        self.assertEqual(response, {'type': 'auth_success', 'user_id': self.alice.id})
        await communicator.disconnect()

    async def test_auth_frame_and_ping(self):
        communicator = self.communicator()
        await communicator.connect()
        await communicator.send_json_to({'type': 'auth', 'token': str(AccessToken.for_user(self.bob))})
        response = await communicator.receive_json_from(timeout=3)
        self.assertEqual(response['type'], 'auth_success')

        await communicator.send_json_to({'type': 'ping'})
        response = await communicator.receive_json_from(timeout=3)
        self.assertEqual(response, {'type': 'pong'})
        await communicator.disconnect()

    async def test_bad_token_and_unauthenticated_message(self):
        communicator = self.communicator()
        await communicator.connect()
        await communicator.send_json_to({'type': 'auth', 'token': 'garbage'})
        response = await communicator.receive_json_from(timeout=3)
        self.assertEqual(response, {'type': 'error', 'error': 'Authentication failed'})

        await communicator.send_json_to({'type': 'message', 'recipient_id': self.bob.id, 'content': 'hi'})
        response = await communicator.receive_json_from(timeout=3)
        self.assertEqual(response, {'type': 'error', 'error': 'Not authenticated'})
        await communicator.disconnect()

    async def test_invalid_json_and_unknown_type(self):
        communicator = self.communicator()
        await communicator.connect()
        await communicator.send_to(text_data='{not json')
        response = await communicator.receive_json_from(timeout=3)
        self.assertEqual(response['type'], 'error')

        await communicator.send_json_to({'type': 'dance'})
        response = await communicator.receive_json_from(timeout=3)
        self.assertEqual(response['error'], 'Unknown message type: dance')
        await communicator.disconnect()

    async def test_message_relayed_to_recipient(self):
        await Connection.objects.acreate(requester=self.alice, recipient=self.bob, status=Connection.STATUS_ACCEPTED)

        sender = self.communicator(self.alice)
        receiver = self.communicator(self.bob)
        await sender.connect()
        await receiver.connect()
        await sender.receive_json_from(timeout=3)
        await receiver.receive_json_from(timeout=3)

        await sender.send_json_to({'type': 'message', 'recipient_id': self.bob.id, 'content': 'Tucson next week?'})

        sent = await sender.receive_json_from(timeout=3)
        self.assertEqual(sent['type'], 'message_sent')
        self.assertEqual(sent['message']['content'], 'Tucson next week?')

        received = await receiver.receive_json_from(timeout=3)
        self.assertEqual(received['type'], 'message')
        self.assertEqual(received['message']['sender_id'], self.alice.id)
        self.assertEqual(await Message.objects.acount(), 1)

        await sender.disconnect()
        await receiver.disconnect()

    async def test_non_text_content_gets_error_frame(self):
        await Connection.objects.acreate(requester=self.alice, recipient=self.bob, status=Connection.STATUS_ACCEPTED)
        communicator = self.communicator(self.alice)
        await communicator.connect()
        await communicator.receive_json_from(timeout=3)

        await communicator.send_json_to({'type': 'message', 'recipient_id': self.bob.id, 'content': 5})
        response = await communicator.receive_json_from(timeout=3)
        self.assertEqual(response, {'type': 'error', 'error': 'Message content must be text.'})

        await communicator.send_json_to({'type': 'ping'})
        response = await communicator.receive_json_from(timeout=3)
        self.assertEqual(response, {'type': 'pong'})
        self.assertEqual(await Message.objects.acount(), 0)
        await communicator.disconnect()

    async def test_disconnect_leaves_user_group(self):
        communicator = self.communicator(self.alice)
        await communicator.connect()
        await communicator.receive_json_from(timeout=3)
        layer = get_channel_layer()
        group = user_group_name(self.alice.id)
        self.assertTrue(layer.groups.get(group))

        await communicator.disconnect()
        self.assertFalse(layer.groups.get(group))

    async def test_message_to_unconnected_user(self):
        communicator = self.communicator(self.alice)
        await communicator.connect()
        await communicator.receive_json_from(timeout=3)
        await communicator.send_json_to({'type': 'message', 'recipient_id': self.bob.id, 'content': 'hi'})
        response = await communicator.receive_json_from(timeout=3)
        self.assertEqual(response, {'type': 'error', 'error': 'You can only message connected users.'})
        await communicator.disconnect()
