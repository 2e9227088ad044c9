from django.urls import path
from .views import (
    user_search, featured_users, user_profile,
    user_photos, my_photo_create, photo_detail,
)

urlpatterns = [
    path('users/', user_search, name='user-search'),
    path('users/featured/', featured_users, name='user-featured'),
    path('users/me/photos/', my_photo_create, name='my-photo-create'),
    path('users/<int:pk>/', user_profile, name='user-profile'),
    path('users/<int:pk>/photos/', user_photos, name='user-photos'),
    path('photos/<int:pk>/', photo_detail, name='photo-detail'),
]
