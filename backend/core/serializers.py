from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password
from django.conf import settings
from .models import User, AuditLog


PROFILE_FIELDS = [
    'full_name', 'user_type', 'secondary_type', 'company', 'location', 'bio',
    'profile_image', 'cover_image', 'logo_image', 'website', 'phone',
    'headquarters', 'showroom1', 'showroom2', 'instagram', 'facebook', 'pinterest',
]


class UserSummarySerializer(serializers.ModelSerializer):
    """Compact user representation used when a user is nested in another object"""
    class Meta:
        model = User
        fields = ['id', 'username', 'full_name', 'user_type', 'company', 'location', 'profile_image', 'is_premium']
        read_only_fields = fields


class UserPublicSerializer(serializers.ModelSerializer):
    """Directory profile as seen by other users (no email)"""
    class Meta:
        model = User
        fields = ['id', 'username'] + PROFILE_FIELDS + ['is_premium', 'created_at']
        read_only_fields = fields


class UserSerializer(serializers.ModelSerializer):
    """Full profile for the user themselves and for admins"""
    is_platform_admin = serializers.BooleanField(read_only=True)

    class Meta:
        model = User
        fields = ['id', 'username', 'email'] + PROFILE_FIELDS + [
            'is_premium', 'is_active', 'is_staff', 'is_platform_admin', 'created_at', 'updated_at'
        ]
        read_only_fields = ['username', 'is_premium', 'is_active', 'is_staff', 'created_at', 'updated_at']


class UserCreateSerializer(serializers.ModelSerializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, validators=[validate_password])
    password_confirm = serializers.CharField(write_only=True)

    class Meta:
        model = User
        fields = ['username', 'email', 'password', 'password_confirm'] + PROFILE_FIELDS

    def validate_username(self, value):
        reserved = {name.lower() for name in settings.ADMIN_USERNAMES}
        if value.lower() in reserved:
            raise serializers.ValidationError("This username is reserved.")
        return value

    def validate(self, attrs):
        if attrs['password'] != attrs['password_confirm']:
            raise serializers.ValidationError({"password": "Passwords don't match"})
        return attrs

    def create(self, validated_data):
        validated_data.pop('password_confirm')
        password = validated_data.pop('password')
        user = User(**validated_data, is_active=True)
        user.set_password(password)
        user.save()
        return user


class AdminUserUpdateSerializer(serializers.ModelSerializer):
    """Admin edit of any user, including account flags"""
    is_platform_admin = serializers.BooleanField(read_only=True)

    class Meta:
        model = User
        fields = ['id', 'username', 'email'] + PROFILE_FIELDS + [
            'is_premium', 'is_active', 'is_staff', 'is_platform_admin', 'created_at', 'updated_at'
        ]
        read_only_fields = ['username', 'is_staff', 'created_at', 'updated_at']


class AuditLogSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)

    class Meta:
        model = AuditLog
        fields = ['id', 'user', 'action', 'model_name', 'object_id', 'object_name',
                  'object_reference', 'changes', 'ip_address', 'created_at']
