from django.urls import path
from .views import (
    event_list_create, event_detail, event_rsvp, event_rsvp_list, my_rsvps,
    admin_event_create,
)

urlpatterns = [
    path('events/', event_list_create, name='event-list-create'),
    path('events/<int:pk>/', event_detail, name='event-detail'),
    path('events/<int:pk>/rsvp/', event_rsvp, name='event-rsvp'),
    path('events/<int:pk>/rsvps/', event_rsvp_list, name='event-rsvp-list'),
    path('me/rsvps/', my_rsvps, name='my-rsvps'),
    path('admin/events/', admin_event_create, name='admin-event-create'),
]
