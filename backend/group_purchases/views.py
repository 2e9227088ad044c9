import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, IsAuthenticatedOrReadOnly
from django.db import transaction
from django.db.models import Q
from django.shortcuts import get_object_or_404
from django.utils import timezone
from .models import GroupPurchase, GroupPurchaseParticipant
from .serializers import (
    GroupPurchaseSerializer, GroupPurchaseDetailSerializer, ParticipantSerializer,
    JoinSerializer, ParticipantUpdateSerializer,
)

logger = logging.getLogger(__name__)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticatedOrReadOnly])
def group_purchase_list_create(request):
    """List group purchases or start a new one"""
    if request.method == 'GET':
        queryset = GroupPurchase.objects.select_related('creator').prefetch_related('participants')
        status_filter = request.query_params.get('status', None)
        if status_filter:
            queryset = queryset.filter(status=status_filter)
        return Response(GroupPurchaseSerializer(queryset, many=True).data)

    serializer = GroupPurchaseSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    with transaction.atomic():
        group_purchase = serializer.save(creator=request.user)
        # The organiser always counts as the first committed unit
        GroupPurchaseParticipant.objects.create(
            group_purchase=group_purchase, user=request.user, quantity=1, status='committed'
        )
        group_purchase.recalculate()

    return Response(GroupPurchaseDetailSerializer(group_purchase).data, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PATCH'])
@permission_classes([IsAuthenticatedOrReadOnly])
def group_purchase_detail(request, pk):
    """Retrieve a group purchase with participants, or edit it (creator only)"""
    group_purchase = get_object_or_404(GroupPurchase.objects.select_related('creator'), pk=pk)

    if request.method == 'GET':
        return Response(GroupPurchaseDetailSerializer(group_purchase).data)

    if group_purchase.creator_id != request.user.pk:
        return Response({'error': 'Only the creator can edit this group purchase'}, status=status.HTTP_403_FORBIDDEN)
    serializer = GroupPurchaseSerializer(group_purchase, data=request.data, partial=True)
    if serializer.is_valid():
        with transaction.atomic():
            group_purchase = serializer.save()
            group_purchase.recalculate()
        return Response(GroupPurchaseDetailSerializer(group_purchase).data)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def group_purchase_join(request, pk):
    """Join an open group purchase with a quantity"""
    serializer = JoinSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    with transaction.atomic():
        group_purchase = get_object_or_404(GroupPurchase.objects.select_for_update(), pk=pk)
        if group_purchase.status != 'open':
            return Response({'error': 'This group purchase is no longer open'}, status=status.HTTP_400_BAD_REQUEST)
        if group_purchase.deadline < timezone.now():
            return Response({'error': 'The deadline for this group purchase has passed'}, status=status.HTTP_400_BAD_REQUEST)
        if group_purchase.participants.filter(user=request.user).exists():
            return Response({'error': 'You have already joined this group purchase'}, status=status.HTTP_400_BAD_REQUEST)

        GroupPurchaseParticipant.objects.create(
            group_purchase=group_purchase,
            user=request.user,
            quantity=serializer.validated_data['quantity'],
            status=serializer.validated_data['status'],
        )
        group_purchase.recalculate()

    if group_purchase.status == 'fulfilled':
        logger.info(f"Group purchase {group_purchase.pk} fulfilled at {group_purchase.current_quantity}/{group_purchase.target_quantity}")
    return Response(GroupPurchaseDetailSerializer(group_purchase).data, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def group_purchase_leave(request, pk):
    """Withdraw from an open group purchase"""
    with transaction.atomic():
        group_purchase = get_object_or_404(GroupPurchase.objects.select_for_update(), pk=pk)
        if group_purchase.creator_id == request.user.pk:
            return Response({'error': 'The creator cannot leave; cancel the group purchase instead'}, status=status.HTTP_400_BAD_REQUEST)
        if group_purchase.status != 'open':
            return Response({'error': 'This group purchase is no longer open'}, status=status.HTTP_400_BAD_REQUEST)
        participant = get_object_or_404(GroupPurchaseParticipant, group_purchase=group_purchase, user=request.user)
        participant.delete()
        group_purchase.recalculate()

    return Response(GroupPurchaseDetailSerializer(group_purchase).data)


@api_view(['PATCH'])
@permission_classes([IsAuthenticated])
def my_participation_update(request, pk):
    """Change your own quantity or commitment status"""
    serializer = ParticipantUpdateSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    with transaction.atomic():
        group_purchase = get_object_or_404(GroupPurchase.objects.select_for_update(), pk=pk)
        if group_purchase.status in ('cancelled', 'expired'):
            return Response({'error': 'This group purchase is closed'}, status=status.HTTP_400_BAD_REQUEST)
        participant = get_object_or_404(GroupPurchaseParticipant, group_purchase=group_purchase, user=request.user)
        for field, value in serializer.validated_data.items():
            setattr(participant, field, value)
        participant.save()
        group_purchase.recalculate()

    return Response(ParticipantSerializer(participant).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def group_purchase_cancel(request, pk):
    group_purchase = get_object_or_404(GroupPurchase, pk=pk)
    if group_purchase.creator_id != request.user.pk:
        return Response({'error': 'Only the creator can cancel this group purchase'}, status=status.HTTP_403_FORBIDDEN)
    if group_purchase.status in ('cancelled', 'expired'):
        return Response({'error': f'Group purchase is already {group_purchase.status}'}, status=status.HTTP_400_BAD_REQUEST)

    group_purchase.status = 'cancelled'
    group_purchase.save(update_fields=['status', 'updated_at'])
    logger.info(f"Group purchase {group_purchase.pk} cancelled by {request.user.username}")
    return Response(GroupPurchaseSerializer(group_purchase).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_group_purchases(request):
    """Group purchases the current user created or joined"""
    queryset = GroupPurchase.objects.filter(
        Q(creator=request.user) | Q(participants__user=request.user)
    ).distinct().select_related('creator')
    return Response(GroupPurchaseSerializer(queryset, many=True).data)
