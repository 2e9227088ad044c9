import json
import logging

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncJsonWebsocketConsumer
from django.contrib.auth import get_user_model
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import AccessToken
from urllib.parse import parse_qs

from .messaging import MessagingError, send_direct_message, message_payload, user_group_name

User = get_user_model()
logger = logging.getLogger(__name__)


@database_sync_to_async
def get_user_for_token(raw_token):
    """Resolve an access token to an active user, or None"""
    try:
        token = AccessToken(raw_token)
        return User.objects.get(pk=token[api_settings.USER_ID_CLAIM], is_active=True)
    except (TokenError, KeyError, User.DoesNotExist) as e:
        logger.warning(f"WebSocket authentication failed: {str(e)}")
        return None


@database_sync_to_async
def create_message(sender, recipient_id, content):
    message = send_direct_message(sender, recipient_id, content)
    return message_payload(message)


class ChatConsumer(AsyncJsonWebsocketConsumer):
    """
    Chat notification socket.

    Clients authenticate with ?token=<access> or an {"type": "auth"} frame,
    then receive {"type": "message"} frames for incoming direct messages.
    """

    async def connect(self):
        self.user = None
        self.group_name = None
        await self.accept()

        query = parse_qs(self.scope.get('query_string', b'').decode())
        token = query.get('token', [None])[0]
        if token:
            await self.authenticate(token)

    async def disconnect(self, code):
        if self.group_name:
            await self.channel_layer.group_discard(self.group_name, self.channel_name)

    async def receive(self, text_data=None, bytes_data=None, **kwargs):
        try:
            content = json.loads(text_data or '')
        except ValueError:
            await self.send_error('Invalid JSON format')
            return
        if not isinstance(content, dict):
            await self.send_error('Invalid message format')
            return
        await self.receive_json(content)

    async def receive_json(self, content, **kwargs):
        message_type = content.get('type')

        if message_type == 'auth':
            await self.authenticate(content.get('token'))
        elif message_type == 'ping':
            await self.send_json({'type': 'pong'})
        elif message_type == 'message':
            await self.handle_message(content)
        else:
            await self.send_error(f'Unknown message type: {message_type}')

    async def authenticate(self, token):
        user = await get_user_for_token(token) if token else None
        if user is None:
            await self.send_error('Authentication failed')
            return

        if self.group_name:
            await self.channel_layer.group_discard(self.group_name, self.channel_name)
        self.user = user
        self.group_name = user_group_name(user.pk)
        await self.channel_layer.group_add(self.group_name, self.channel_name)
        await self.send_json({'type': 'auth_success', 'user_id': user.pk})

    async def handle_message(self, content):
        if self.user is None:
            await self.send_error('Not authenticated')
            return

        try:
            payload = await create_message(self.user, content.get('recipient_id'), content.get('content'))
        except MessagingError as e:
            await self.send_error(str(e))
            return

        await self.channel_layer.group_send(
            user_group_name(payload['recipient_id']),
            {'type': 'chat.message', 'message': payload},
        )
        await self.send_json({'type': 'message_sent', 'message': payload})

    async def chat_message(self, event):
        await self.send_json({'type': 'message', 'message': event['message']})

    async def send_error(self, error):
        await self.send_json({'type': 'error', 'error': error})
