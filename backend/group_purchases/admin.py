from django.contrib import admin
from .models import GroupPurchase, GroupPurchaseParticipant


class ParticipantInline(admin.TabularInline):
    model = GroupPurchaseParticipant
    extra = 0


@admin.register(GroupPurchase)
class GroupPurchaseAdmin(admin.ModelAdmin):
    list_display = ['title', 'creator', 'current_quantity', 'target_quantity', 'status', 'deadline']
    list_filter = ['status', 'deadline']
    search_fields = ['title', 'vendor_name', 'creator__username']
    ordering = ['deadline']
    inlines = [ParticipantInline]
