from rest_framework import status
from rest_framework.response import Response

from .models import ProfilePhoto, MAX_PROFILE_PHOTOS
from .serializers import ProfilePhotoSerializer


def add_profile_photo(user, data):
    """Add a photo to a user's profile, enforcing the per-user photo limit"""
    existing = ProfilePhoto.objects.filter(user=user).count()
    if existing >= MAX_PROFILE_PHOTOS:
        return Response(
            {'error': f'Maximum of {MAX_PROFILE_PHOTOS} photos allowed'},
            status=status.HTTP_400_BAD_REQUEST
        )

    serializer = ProfilePhotoSerializer(data=data)
    if serializer.is_valid():
        display_order = serializer.validated_data.get('display_order')
        if display_order is None:
            display_order = existing
        photo = serializer.save(user=user, display_order=display_order)
        return Response(ProfilePhotoSerializer(photo).data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


def change_profile_photo(photo, request):
    """PATCH or DELETE a photo; callers decide who may do so"""
    if request.method == 'PATCH':
        serializer = ProfilePhotoSerializer(photo, data=request.data, partial=True)
        if serializer.is_valid():
            serializer.save()
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    photo.delete()
    return Response(status=status.HTTP_204_NO_CONTENT)
