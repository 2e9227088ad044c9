from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, AllowAny
from django.contrib.auth import get_user_model
from django.shortcuts import get_object_or_404
from backend.core.serializers import UserPublicSerializer
from .filters import UserFilter
from .models import ProfilePhoto
from .serializers import ProfilePhotoSerializer, ProfileUpdateSerializer
from .utils import add_profile_photo, change_profile_photo

User = get_user_model()

FEATURED_LIMIT = 6


@api_view(['GET'])
@permission_classes([AllowAny])
def user_search(request):
    """Directory search: q, user_type, location, premium"""
    queryset = User.objects.filter(is_active=True).order_by('full_name', 'username')
    user_filter = UserFilter(request.query_params, queryset=queryset)
    if not user_filter.is_valid():
        return Response(user_filter.errors, status=status.HTTP_400_BAD_REQUEST)
    serializer = UserPublicSerializer(user_filter.qs, many=True)
    return Response(serializer.data)


@api_view(['GET'])
@permission_classes([AllowAny])
def featured_users(request):
    """Premium professionals shown on the home page"""
    users = User.objects.filter(is_active=True, is_premium=True).order_by('-created_at')[:FEATURED_LIMIT]
    return Response(UserPublicSerializer(users, many=True).data)


@api_view(['GET', 'PATCH'])
@permission_classes([AllowAny])
def user_profile(request, pk):
    """Public profile; only the user themselves may update it"""
    user = get_object_or_404(User, pk=pk, is_active=True)

    if request.method == 'GET':
        return Response(UserPublicSerializer(user).data)

    if not request.user.is_authenticated:
        return Response({'error': 'Authentication required'}, status=status.HTTP_401_UNAUTHORIZED)
    if request.user.pk != user.pk:
        return Response({'error': 'You can only update your own profile'}, status=status.HTTP_403_FORBIDDEN)

    serializer = ProfileUpdateSerializer(user, data=request.data, partial=True)
    if serializer.is_valid():
        serializer.save()
        return Response(UserPublicSerializer(user).data)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET'])
@permission_classes([AllowAny])
def user_photos(request, pk):
    """List a user's profile photos"""
    user = get_object_or_404(User, pk=pk)
    photos = ProfilePhoto.objects.filter(user=user)
    return Response(ProfilePhotoSerializer(photos, many=True).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def my_photo_create(request):
    """Add a photo to the current user's profile"""
    return add_profile_photo(request.user, request.data)


@api_view(['PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def photo_detail(request, pk):
    """Update or delete one of the current user's photos"""
    photo = get_object_or_404(ProfilePhoto, pk=pk)
    if photo.user_id != request.user.pk:
        return Response({'error': 'You can only modify your own photos'}, status=status.HTTP_403_FORBIDDEN)
    return change_profile_photo(photo, request)
