from django.contrib import admin
from .models import ProfilePhoto


@admin.register(ProfilePhoto)
class ProfilePhotoAdmin(admin.ModelAdmin):
    list_display = ['user', 'caption', 'display_order', 'created_at']
    search_fields = ['user__username', 'caption']
    ordering = ['user', 'display_order']
