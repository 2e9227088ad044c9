from django.contrib import admin
from .models import Listing


@admin.register(Listing)
class ListingAdmin(admin.ModelAdmin):
    list_display = ['title', 'user', 'listing_type', 'price', 'available_quantity', 'is_closeout', 'is_trade_available']
    list_filter = ['listing_type', 'is_closeout', 'is_trade_available']
    search_fields = ['title', 'user__username']
    ordering = ['-created_at']
