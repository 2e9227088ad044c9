from rest_framework import serializers
from backend.core.serializers import UserSummarySerializer
from .models import InventoryItem


class InventoryItemSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)

    class Meta:
        model = InventoryItem
        fields = ['id', 'user', 'title', 'description', 'image_url', 'is_new', 'is_featured', 'created_at']
        read_only_fields = ['created_at']
