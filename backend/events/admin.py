from django.contrib import admin
from .models import Event, EventRSVP


class EventRSVPInline(admin.TabularInline):
    model = EventRSVP
    extra = 0


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ['title', 'creator', 'location', 'date', 'time']
    list_filter = ['date']
    search_fields = ['title', 'location', 'creator__username']
    ordering = ['date', 'time']
    inlines = [EventRSVPInline]
