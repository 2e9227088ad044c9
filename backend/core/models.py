from django.contrib.auth.models import AbstractUser
from django.conf import settings
from django.db import models


class User(AbstractUser):
    """Jewelry-industry professional with a public directory profile"""
    USER_TYPE_CHOICES = [
        ('designer', 'Designer'),
        ('gemstone_dealer', 'Gemstone Dealer'),
        ('casting', 'Casting'),
        ('bench_jeweler', 'Bench Jeweler'),
        ('packaging', 'Packaging'),
        ('displays', 'Displays'),
        ('photographer', 'Photographer'),
        ('store_design', 'Store Design'),
        ('marketing', 'Marketing'),
        ('education', 'Education'),
        ('consulting', 'Consulting'),
        ('developer', 'Developer'),
        ('other', 'Other'),
    ]

    email = models.EmailField()
    full_name = models.CharField(max_length=255, blank=True)
    user_type = models.CharField(max_length=30, choices=USER_TYPE_CHOICES, default='other')
    secondary_type = models.CharField(max_length=30, choices=USER_TYPE_CHOICES, blank=True, null=True)
    company = models.CharField(max_length=255, blank=True, null=True)
    location = models.CharField(max_length=255, blank=True, null=True)
    bio = models.TextField(blank=True, null=True)
    profile_image = models.URLField(max_length=500, blank=True, null=True)
    cover_image = models.URLField(max_length=500, blank=True, null=True)
    logo_image = models.URLField(max_length=500, blank=True, null=True)
    website = models.URLField(max_length=500, blank=True, null=True)
    phone = models.CharField(max_length=20, blank=True, null=True)
    headquarters = models.CharField(max_length=255, blank=True, null=True)
    showroom1 = models.CharField(max_length=255, blank=True, null=True)
    showroom2 = models.CharField(max_length=255, blank=True, null=True)
    instagram = models.CharField(max_length=255, blank=True, null=True)
    facebook = models.CharField(max_length=255, blank=True, null=True)
    pinterest = models.CharField(max_length=255, blank=True, null=True)
    is_premium = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'users'
        indexes = [
            models.Index(fields=['user_type'], name='users_user_type_idx'),
            models.Index(fields=['is_premium'], name='users_is_premium_idx'),
        ]

    def __str__(self):
        return self.full_name or self.username

    @property
    def is_platform_admin(self):
        return self.is_staff or self.username in settings.ADMIN_USERNAMES


class AuditLog(models.Model):
    """Audit log for administrative and commercial operations"""
    ACTION_CHOICES = [
        ('create', 'Create'),
        ('update', 'Update'),
        ('delete', 'Delete'),
        ('order_create', 'Order Created'),
        ('order_cancel', 'Order Cancelled'),
        ('order_status', 'Order Status Changed'),
        ('article_import', 'Article Imported'),
        ('premium_change', 'Premium Status Changed'),
    ]

    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, related_name='audit_logs')
    action = models.CharField(max_length=50, choices=ACTION_CHOICES)
    model_name = models.CharField(max_length=100)
    object_id = models.CharField(max_length=100)
    object_name = models.CharField(max_length=255, blank=True, null=True, help_text="Human-readable name of the object (e.g., username, article title)")
    object_reference = models.CharField(max_length=255, blank=True, null=True, help_text="Reference identifier (e.g., order number)")
    changes = models.JSONField(default=dict, blank=True)
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'audit_logs'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['-created_at'], name='audit_created_at_idx'),
            models.Index(fields=['action'], name='audit_action_idx'),
            models.Index(fields=['model_name'], name='audit_model_name_idx'),
        ]

    def __str__(self):
        return f"{self.action} {self.model_name}#{self.object_id}"
