import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django.contrib.auth import get_user_model
from django.db.models import Q
from django.shortcuts import get_object_or_404
from backend.core.serializers import UserSummarySerializer
from .messaging import MessagingError, send_direct_message, notify_recipient
from .models import Connection, Message
from .serializers import ConnectionSerializer, MessageSerializer

User = get_user_model()
logger = logging.getLogger(__name__)


# Connection views
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def connection_list_create(request):
    """List the current user's connections or send a connection request"""
    if request.method == 'GET':
        queryset = Connection.objects.involving(request.user).select_related('requester', 'recipient')
        status_filter = request.query_params.get('status', None)
        if status_filter:
            queryset = queryset.filter(status=status_filter)
        serializer = ConnectionSerializer(queryset, many=True, context={'request': request})
        return Response(serializer.data)

    recipient_id = request.data.get('recipient_id')
    if not recipient_id:
        return Response({'error': 'recipient_id is required'}, status=status.HTTP_400_BAD_REQUEST)
    recipient = get_object_or_404(User, pk=recipient_id, is_active=True)

    if recipient.pk == request.user.pk:
        return Response({'error': 'You cannot connect with yourself'}, status=status.HTTP_400_BAD_REQUEST)
    if Connection.objects.between(request.user, recipient).exists():
        return Response({'error': 'Connection already exists'}, status=status.HTTP_400_BAD_REQUEST)

    connection = Connection.objects.create(requester=request.user, recipient=recipient)
    serializer = ConnectionSerializer(connection, context={'request': request})
    return Response(serializer.data, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def connection_pending(request):
    """Pending requests waiting on the current user"""
    queryset = Connection.objects.filter(
        recipient=request.user, status=Connection.STATUS_PENDING
    ).select_related('requester', 'recipient')
    serializer = ConnectionSerializer(queryset, many=True, context={'request': request})
    return Response(serializer.data)


@api_view(['PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def connection_detail(request, pk):
    """Accept/reject (recipient only) or remove (either party) a connection"""
    connection = get_object_or_404(Connection, pk=pk)

    if request.method == 'PATCH':
        if connection.recipient_id != request.user.pk:
            return Response({'error': 'Only the recipient can respond to a connection request'}, status=status.HTTP_403_FORBIDDEN)
        new_status = request.data.get('status')
        if new_status not in (Connection.STATUS_ACCEPTED, Connection.STATUS_REJECTED):
            return Response({'error': 'Status must be accepted or rejected'}, status=status.HTTP_400_BAD_REQUEST)
        connection.status = new_status
        connection.save(update_fields=['status', 'updated_at'])
        return Response(ConnectionSerializer(connection, context={'request': request}).data)
    else:  # DELETE
        if request.user.pk not in (connection.requester_id, connection.recipient_id):
            return Response({'error': 'Permission denied'}, status=status.HTTP_403_FORBIDDEN)
        connection.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def connection_status(request, user_id):
    """Connection state between the current user and another user"""
    other = get_object_or_404(User, pk=user_id)
    connection = Connection.objects.between(request.user, other).first()
    if not connection:
        return Response({'status': 'none', 'connection_id': None, 'direction': None})
    direction = 'outgoing' if connection.requester_id == request.user.pk else 'incoming'
    return Response({
        'status': connection.status,
        'connection_id': connection.pk,
        'direction': direction,
    })


# Message views
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def message_create(request):
    """Send a direct message to a connected user"""
    serializer = MessageSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    try:
        message = send_direct_message(
            request.user,
            serializer.validated_data['recipient_id'],
            serializer.validated_data['content'],
        )
    except MessagingError as e:
        return Response({'error': str(e)}, status=e.status_code)

    notify_recipient(message)
    return Response(MessageSerializer(message).data, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def conversation_list(request):
    """One entry per counterpart with the last message and unread count"""
    user = request.user
    messages = Message.objects.filter(Q(sender=user) | Q(recipient=user)).order_by('-created_at', '-id')

    conversations = {}
    for message in messages.select_related('sender', 'recipient'):
        other = message.recipient if message.sender_id == user.pk else message.sender
        entry = conversations.get(other.pk)
        if entry is None:
            entry = conversations[other.pk] = {
                'user': UserSummarySerializer(other).data,
                'last_message': MessageSerializer(message).data,
                'unread_count': 0,
            }
        if message.recipient_id == user.pk and not message.is_read:
            entry['unread_count'] += 1

    return Response(list(conversations.values()))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def conversation_detail(request, user_id):
    """Messages exchanged with another user, oldest first"""
    other = get_object_or_404(User, pk=user_id)
    if not Connection.are_connected(request.user, other):
        return Response({'error': 'You can only message connected users'}, status=status.HTTP_403_FORBIDDEN)

    messages = Message.objects.filter(
        Q(sender=request.user, recipient=other) |
        Q(sender=other, recipient=request.user)
    ).order_by('created_at', 'id')
    return Response(MessageSerializer(messages, many=True).data)


@api_view(['PATCH'])
@permission_classes([IsAuthenticated])
def message_mark_read(request, pk):
    """Mark a received message as read"""
    message = get_object_or_404(Message, pk=pk)
    if message.recipient_id != request.user.pk:
        return Response({'error': 'Only the recipient can mark a message as read'}, status=status.HTTP_403_FORBIDDEN)
    if not message.is_read:
        message.is_read = True
        message.save(update_fields=['is_read'])
    return Response(MessageSerializer(message).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def unread_count(request):
    count = Message.objects.filter(recipient=request.user, is_read=False).count()
    return Response({'unread_count': count})
