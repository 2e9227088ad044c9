from django.conf import settings
from django.db import models


class Event(models.Model):
    """Industry event (trade show, workshop, meetup)"""
    creator = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='events')
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default='')
    location = models.CharField(max_length=255)
    date = models.DateField()
    time = models.CharField(max_length=20)
    image_url = models.URLField(max_length=500, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'events'
        ordering = ['date', 'time']

    def __str__(self):
        return self.title


class EventRSVP(models.Model):
    """A user's registered intent to attend an event"""
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name='rsvps')
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='event_rsvps')
    is_public = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'event_rsvps'
        ordering = ['created_at']
        unique_together = ['event', 'user']

    def __str__(self):
        return f"{self.user} -> {self.event}"
