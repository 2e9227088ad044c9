from django.contrib import admin
from .models import Supplier, GemstoneCategory, Gemstone


@admin.register(Supplier)
class SupplierAdmin(admin.ModelAdmin):
    list_display = ['name', 'location', 'website', 'created_at']
    search_fields = ['name', 'location']
    ordering = ['name']


@admin.register(GemstoneCategory)
class GemstoneCategoryAdmin(admin.ModelAdmin):
    list_display = ['name', 'description']
    search_fields = ['name']
    ordering = ['name']


@admin.register(Gemstone)
class GemstoneAdmin(admin.ModelAdmin):
    list_display = ['name', 'category', 'supplier', 'price', 'carat_weight', 'inventory', 'is_available', 'is_featured']
    list_filter = ['category', 'supplier', 'is_available', 'is_featured']
    search_fields = ['name', 'color', 'origin']
    ordering = ['-created_at']
