from django.conf import settings
from django.db import models

MAX_PROFILE_PHOTOS = 10


class ProfilePhoto(models.Model):
    """Portfolio photo shown on a user's profile"""
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='photos')
    photo_url = models.URLField(max_length=500)
    caption = models.CharField(max_length=255, blank=True, null=True)
    display_order = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'profile_photos'
        ordering = ['display_order', 'id']

    def __str__(self):
        return f"Photo {self.display_order} of {self.user}"
