from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, IsAuthenticatedOrReadOnly, AllowAny
from django.db.models import Q
from django.shortcuts import get_object_or_404
from django.utils import timezone
from backend.core.permissions import IsPlatformAdmin
from .models import Event, EventRSVP
from .serializers import (
    EventSerializer, EventDetailSerializer, EventRSVPSerializer,
    MyRSVPSerializer, AdminEventCreateSerializer,
)

ADMIN_EVENT_DEFAULTS = {
    'title': 'Untitled Event',
    'location': 'TBD',
    'time': '09:00',
}


def can_manage_event(user, event):
    return user.is_authenticated and (event.creator_id == user.pk or user.is_platform_admin)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticatedOrReadOnly])
def event_list_create(request):
    """List events by date or create a new event"""
    if request.method == 'GET':
        queryset = Event.objects.select_related('creator').prefetch_related('rsvps')
        if request.query_params.get('upcoming') == 'true':
            queryset = queryset.filter(date__gte=timezone.localdate())
        serializer = EventSerializer(queryset.order_by('date', 'time'), many=True)
        return Response(serializer.data)

    serializer = EventSerializer(data=request.data)
    if serializer.is_valid():
        event = serializer.save(creator=request.user)
        return Response(EventSerializer(event).data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticatedOrReadOnly])
def event_detail(request, pk):
    """Retrieve, update or delete an event"""
    event = get_object_or_404(Event.objects.select_related('creator'), pk=pk)

    if request.method == 'GET':
        return Response(EventDetailSerializer(event).data)

    if not can_manage_event(request.user, event):
        return Response({'error': 'Only the event creator can modify this event'}, status=status.HTTP_403_FORBIDDEN)

    if request.method == 'PATCH':
        serializer = EventSerializer(event, data=request.data, partial=True)
        if serializer.is_valid():
            serializer.save()
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        event.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['POST', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def event_rsvp(request, pk):
    """RSVP to an event, change its visibility, or cancel it"""
    event = get_object_or_404(Event, pk=pk)

    if request.method == 'POST':
        if EventRSVP.objects.filter(event=event, user=request.user).exists():
            return Response({'error': 'You have already RSVPed to this event'}, status=status.HTTP_400_BAD_REQUEST)
        serializer = EventRSVPSerializer(data=request.data)
        if serializer.is_valid():
            rsvp = serializer.save(event=event, user=request.user)
            return Response(EventRSVPSerializer(rsvp).data, status=status.HTTP_201_CREATED)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    rsvp = get_object_or_404(EventRSVP, event=event, user=request.user)
    if request.method == 'PATCH':
        if 'is_public' not in request.data:
            return Response({'error': 'is_public is required'}, status=status.HTTP_400_BAD_REQUEST)
        serializer = EventRSVPSerializer(rsvp, data={'is_public': request.data['is_public']}, partial=True)
        if serializer.is_valid():
            serializer.save()
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        rsvp.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['GET'])
@permission_classes([AllowAny])
def event_rsvp_list(request, pk):
    """RSVPs for an event; private ones are visible to their owner and the event creator"""
    event = get_object_or_404(Event, pk=pk)
    queryset = event.rsvps.select_related('user')
    user = request.user
    if not (user.is_authenticated and event.creator_id == user.pk):
        visible = Q(is_public=True)
        if user.is_authenticated:
            visible |= Q(user=user)
        queryset = queryset.filter(visible)
    return Response(EventRSVPSerializer(queryset, many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_rsvps(request):
    """The current user's RSVPs with the event nested"""
    rsvps = EventRSVP.objects.filter(user=request.user).select_related('event', 'event__creator').order_by('event__date')
    return Response(MyRSVPSerializer(rsvps, many=True).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsPlatformAdmin])
def admin_event_create(request):
    """Create an event from the admin panel, filling in missing fields"""
    serializer = AdminEventCreateSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    data = dict(serializer.validated_data)
    for field, default in ADMIN_EVENT_DEFAULTS.items():
        if not data.get(field):
            data[field] = default
    if not data.get('date'):
        data['date'] = timezone.localdate()
    data.setdefault('description', '')

    event = Event.objects.create(creator=request.user, **data)
    return Response(EventSerializer(event).data, status=status.HTTP_201_CREATED)
