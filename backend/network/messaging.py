"""
Direct messaging between connected users

Shared by the REST endpoints and the WebSocket consumer so both paths
enforce the same connection rule and notify the recipient the same way.
"""
import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.contrib.auth import get_user_model

from .models import Connection, Message

User = get_user_model()
logger = logging.getLogger(__name__)


class MessagingError(Exception):
    status_code = 400


class RecipientNotFound(MessagingError):
    status_code = 404


class NotConnected(MessagingError):
    status_code = 403


def user_group_name(user_id):
    return f"user_{user_id}"


def message_payload(message):
    return {
        'id': message.pk,
        'sender_id': message.sender_id,
        'recipient_id': message.recipient_id,
        'content': message.content,
        'is_read': message.is_read,
        'created_at': message.created_at.isoformat(),
    }


def send_direct_message(sender, recipient_id, content):
    """Persist a message from sender to recipient; they must be connected"""
    if content is not None and not isinstance(content, str):
        raise MessagingError('Message content must be text.')
    content = (content or '').strip()
    if not content:
        raise MessagingError('Message content cannot be empty.')
    try:
        recipient = User.objects.get(pk=recipient_id, is_active=True)
    except (User.DoesNotExist, ValueError, TypeError):
        raise RecipientNotFound('Recipient not found.')
    if recipient.pk == sender.pk:
        raise MessagingError('You cannot message yourself.')
    if not Connection.are_connected(sender, recipient):
        raise NotConnected('You can only message connected users.')
    return Message.objects.create(sender=sender, recipient=recipient, content=content)


def notify_recipient(message):
    """Push a new message to the recipient's open WebSocket sessions"""
    channel_layer = get_channel_layer()
    if channel_layer is None:
        return
    try:
        async_to_sync(channel_layer.group_send)(
            user_group_name(message.recipient_id),
            {'type': 'chat.message', 'message': message_payload(message)},
        )
    except Exception as e:
        logger.warning(f"Could not push message {message.pk} to recipient: {str(e)}")
