from django.conf import settings
from django.db import models


class InventoryItem(models.Model):
    """Showcase piece a professional displays on their profile"""
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='inventory_items')
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default='')
    image_url = models.URLField(max_length=500, blank=True, null=True)
    is_new = models.BooleanField(default=True)
    is_featured = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'inventory_items'
        ordering = ['-created_at', '-id']

    def __str__(self):
        return self.title
