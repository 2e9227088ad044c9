from django.contrib import admin
from .models import InventoryItem


@admin.register(InventoryItem)
class InventoryItemAdmin(admin.ModelAdmin):
    list_display = ['title', 'user', 'is_new', 'is_featured', 'created_at']
    list_filter = ['is_new', 'is_featured']
    search_fields = ['title', 'user__username']
    ordering = ['-created_at']
