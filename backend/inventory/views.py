from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, IsAuthenticatedOrReadOnly, AllowAny
from django.contrib.auth import get_user_model
from django.shortcuts import get_object_or_404
from .models import InventoryItem
from .serializers import InventoryItemSerializer

User = get_user_model()


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticatedOrReadOnly])
def inventory_list_create(request):
    """Showcase feed, newest first, or add an item to your own showcase"""
    if request.method == 'GET':
        queryset = InventoryItem.objects.select_related('user')
        if request.query_params.get('featured') == 'true':
            queryset = queryset.filter(is_featured=True)
        serializer = InventoryItemSerializer(queryset, many=True)
        return Response(serializer.data)

    serializer = InventoryItemSerializer(data=request.data)
    if serializer.is_valid():
        serializer.save(user=request.user)
        return Response(serializer.data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticatedOrReadOnly])
def inventory_detail(request, pk):
    """Retrieve, update or delete a showcase item"""
    item = get_object_or_404(InventoryItem.objects.select_related('user'), pk=pk)

    if request.method == 'GET':
        return Response(InventoryItemSerializer(item).data)

    if item.user_id != request.user.pk:
        return Response({'error': 'You can only modify your own inventory'}, status=status.HTTP_403_FORBIDDEN)

    if request.method == 'PATCH':
        serializer = InventoryItemSerializer(item, data=request.data, partial=True)
        if serializer.is_valid():
            serializer.save()
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        item.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['GET'])
@permission_classes([AllowAny])
def user_inventory(request, user_id):
    """One professional's showcase"""
    user = get_object_or_404(User, pk=user_id)
    items = InventoryItem.objects.filter(user=user).select_related('user')
    return Response(InventoryItemSerializer(items, many=True).data)
