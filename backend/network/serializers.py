from rest_framework import serializers
from backend.core.serializers import UserSummarySerializer
from .models import Connection, Message


class ConnectionSerializer(serializers.ModelSerializer):
    requester = UserSummarySerializer(read_only=True)
    recipient = UserSummarySerializer(read_only=True)
    other_user = serializers.SerializerMethodField()

    class Meta:
        model = Connection
        fields = ['id', 'requester', 'recipient', 'other_user', 'status', 'created_at', 'updated_at']

    def get_other_user(self, obj):
        request = self.context.get('request')
        if not request or not request.user.is_authenticated:
            return None
        return UserSummarySerializer(obj.other_user(request.user)).data


class MessageSerializer(serializers.ModelSerializer):
    sender_id = serializers.IntegerField(read_only=True)
    recipient_id = serializers.IntegerField()

    class Meta:
        model = Message
        fields = ['id', 'sender_id', 'recipient_id', 'content', 'is_read', 'created_at']
        read_only_fields = ['is_read', 'created_at']

    def validate_content(self, value):
        if not value or not value.strip():
            raise serializers.ValidationError('Message content cannot be empty.')
        return value
