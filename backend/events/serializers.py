from rest_framework import serializers
from backend.core.serializers import UserSummarySerializer
from .models import Event, EventRSVP


class EventSerializer(serializers.ModelSerializer):
    creator = UserSummarySerializer(read_only=True)
    attendee_count = serializers.SerializerMethodField()

    class Meta:
        model = Event
        fields = ['id', 'creator', 'title', 'description', 'location', 'date', 'time',
                  'image_url', 'attendee_count', 'created_at']
        read_only_fields = ['created_at']

    def get_attendee_count(self, obj):
        return obj.rsvps.count()


class EventDetailSerializer(EventSerializer):
    attendees = serializers.SerializerMethodField()

    class Meta(EventSerializer.Meta):
        fields = EventSerializer.Meta.fields + ['attendees']

    def get_attendees(self, obj):
        rsvps = obj.rsvps.filter(is_public=True).select_related('user')
        return [UserSummarySerializer(rsvp.user).data for rsvp in rsvps]


class EventRSVPSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)
    event_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = EventRSVP
        fields = ['id', 'event_id', 'user', 'is_public', 'created_at']
        read_only_fields = ['created_at']


class MyRSVPSerializer(serializers.ModelSerializer):
    event = EventSerializer(read_only=True)

    class Meta:
        model = EventRSVP
        fields = ['id', 'event', 'is_public', 'created_at']


class AdminEventCreateSerializer(serializers.ModelSerializer):
    """Lenient event creation for the admin panel: blanks fall back to defaults"""
    title = serializers.CharField(required=False, allow_blank=True)
    location = serializers.CharField(required=False, allow_blank=True)
    time = serializers.CharField(required=False, allow_blank=True)
    date = serializers.DateField(required=False, allow_null=True)

    class Meta:
        model = Event
        fields = ['title', 'description', 'location', 'date', 'time', 'image_url']
