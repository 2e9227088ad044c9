from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User, AuditLog


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ['username', 'email', 'full_name', 'user_type', 'company', 'is_premium', 'is_active', 'is_staff', 'date_joined']
    list_filter = ['user_type', 'is_premium', 'is_active', 'is_staff', 'date_joined']
    search_fields = ['username', 'email', 'full_name', 'company']
    ordering = ['username']
    fieldsets = BaseUserAdmin.fieldsets + (
        ('Profile', {'fields': ('full_name', 'user_type', 'secondary_type', 'company', 'location', 'bio', 'phone', 'website')}),
        ('Images', {'fields': ('profile_image', 'cover_image', 'logo_image')}),
        ('Locations', {'fields': ('headquarters', 'showroom1', 'showroom2')}),
        ('Social', {'fields': ('instagram', 'facebook', 'pinterest')}),
        ('Membership', {'fields': ('is_premium',)}),
    )
    add_fieldsets = BaseUserAdmin.add_fieldsets + (
        ('Profile', {'fields': ('email', 'full_name', 'user_type')}),
    )


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = ['user', 'action', 'model_name', 'object_id', 'ip_address', 'created_at']
    list_filter = ['action', 'model_name', 'created_at']
    search_fields = ['user__username', 'model_name', 'object_id']
    ordering = ['-created_at']
    readonly_fields = ['user', 'action', 'model_name', 'object_id', 'changes', 'ip_address', 'created_at']
