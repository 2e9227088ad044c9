from django.urls import path
from .views import (
    connection_list_create, connection_pending, connection_detail, connection_status,
    message_create, conversation_list, conversation_detail, message_mark_read, unread_count,
)

urlpatterns = [
    # Connection endpoints
    path('connections/', connection_list_create, name='connection-list-create'),
    path('connections/pending/', connection_pending, name='connection-pending'),
    path('connections/status/<int:user_id>/', connection_status, name='connection-status'),
    path('connections/<int:pk>/', connection_detail, name='connection-detail'),

    # Message endpoints
    path('messages/', message_create, name='message-create'),
    path('messages/conversations/', conversation_list, name='conversation-list'),
    path('messages/unread-count/', unread_count, name='message-unread-count'),
    path('messages/<int:user_id>/', conversation_detail, name='conversation-detail'),
    path('messages/<int:pk>/read/', message_mark_read, name='message-mark-read'),
]
