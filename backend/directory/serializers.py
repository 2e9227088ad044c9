from rest_framework import serializers
from backend.core.models import User
from backend.core.serializers import PROFILE_FIELDS
from .models import ProfilePhoto


class ProfilePhotoSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProfilePhoto
        fields = ['id', 'user', 'photo_url', 'caption', 'display_order', 'created_at']
        read_only_fields = ['user', 'created_at']


class ProfileUpdateSerializer(serializers.ModelSerializer):
    """Fields a user may edit on their own directory profile"""
    class Meta:
        model = User
        fields = ['id', 'username'] + PROFILE_FIELDS + ['is_premium', 'created_at']
        read_only_fields = ['username', 'is_premium', 'created_at']
