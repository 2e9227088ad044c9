import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django.db import transaction
from django.shortcuts import get_object_or_404
from backend.core.permissions import IsPlatformAdmin
from backend.core.utils import create_audit_log
from backend.gemstones.models import Gemstone
from .models import CartItem, Order
from .serializers import (
    CartSerializer, CartItemSerializer, CartItemCreateSerializer, CartItemUpdateSerializer,
    CheckoutSerializer, OrderSerializer, AdminOrderSerializer,
)
from .utils import CheckoutError, get_or_create_cart, checkout_cart, restore_inventory

logger = logging.getLogger(__name__)

ORDER_STATUSES = [choice[0] for choice in Order.STATUS_CHOICES]


# Cart views
@api_view(['GET', 'DELETE'])
@permission_classes([IsAuthenticated])
def cart_detail(request):
    """Get the current user's cart, or clear it"""
    cart = get_or_create_cart(request.user)
    if request.method == 'DELETE':
        cart.items.all().delete()
    return Response(CartSerializer(cart).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def cart_item_add(request):
    """Add a gemstone to the cart, merging with an existing line"""
    serializer = CartItemCreateSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    gemstone = get_object_or_404(Gemstone, pk=serializer.validated_data['gemstone_id'])
    if not gemstone.is_available:
        return Response({'error': 'Gemstone is not available'}, status=status.HTTP_400_BAD_REQUEST)

    cart = get_or_create_cart(request.user)
    quantity = serializer.validated_data['quantity']
    item, created = CartItem.objects.get_or_create(
        cart=cart, gemstone=gemstone, defaults={'quantity': quantity}
    )
    if not created:
        item.quantity += quantity
        item.save(update_fields=['quantity'])
    cart.save(update_fields=['updated_at'])

    return Response(
        CartItemSerializer(item).data,
        status=status.HTTP_201_CREATED if created else status.HTTP_200_OK
    )


@api_view(['PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def cart_item_detail(request, pk):
    """Change the quantity of, or remove, a cart line"""
    item = get_object_or_404(CartItem.objects.select_related('cart', 'gemstone'), pk=pk)
    if item.cart.user_id != request.user.pk:
        return Response({'error': 'Permission denied'}, status=status.HTTP_403_FORBIDDEN)

    if request.method == 'PATCH':
        serializer = CartItemUpdateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        item.quantity = serializer.validated_data['quantity']
        item.save(update_fields=['quantity'])
        return Response(CartItemSerializer(item).data)
    else:  # DELETE
        item.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


# Order views
def place_order(request):
    serializer = CheckoutSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    try:
        order = checkout_cart(request.user, serializer.validated_data)
    except CheckoutError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    create_audit_log(
        request=request,
        action='order_create',
        model_name='Order',
        object_id=order.pk,
        object_reference=order.order_number,
        changes={'total_amount': str(order.total_amount), 'items': order.items.count()},
    )
    return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def order_list_create(request):
    """List the current user's orders or check out the cart"""
    if request.method == 'GET':
        orders = Order.objects.filter(user=request.user).prefetch_related('items__gemstone')
        return Response(OrderSerializer(orders, many=True).data)
    return place_order(request)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def checkout(request):
    """Alias of POST /orders/"""
    return place_order(request)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def order_detail(request, pk):
    order = get_object_or_404(Order.objects.prefetch_related('items__gemstone'), pk=pk)
    if order.user_id != request.user.pk and not request.user.is_platform_admin:
        return Response({'error': 'Permission denied'}, status=status.HTTP_403_FORBIDDEN)
    return Response(OrderSerializer(order).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def order_cancel(request, pk):
    """Cancel a pending order and put its stones back in stock"""
    order = get_object_or_404(Order, pk=pk)
    if order.user_id != request.user.pk:
        return Response({'error': 'Permission denied'}, status=status.HTTP_403_FORBIDDEN)

    with transaction.atomic():
        order = Order.objects.select_for_update().get(pk=order.pk)
        if order.status != 'pending':
            return Response({'error': 'Only pending orders can be cancelled'}, status=status.HTTP_400_BAD_REQUEST)
        restore_inventory(order)
        order.status = 'cancelled'
        order.save(update_fields=['status', 'updated_at'])

    create_audit_log(request=request, action='order_cancel', model_name='Order',
                     object_id=order.pk, object_reference=order.order_number)
    return Response(OrderSerializer(order).data)


# Admin order views
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsPlatformAdmin])
def admin_order_list(request):
    orders = Order.objects.select_related('user').prefetch_related('items__gemstone')
    status_filter = request.query_params.get('status', None)
    if status_filter:
        orders = orders.filter(status=status_filter)
    return Response(AdminOrderSerializer(orders, many=True).data)


@api_view(['PATCH'])
@permission_classes([IsAuthenticated, IsPlatformAdmin])
def admin_order_update(request, pk):
    """Move an order through its fulfilment statuses"""
    order = get_object_or_404(Order, pk=pk)
    new_status = request.data.get('status')
    if new_status not in ORDER_STATUSES:
        return Response({'error': f'Status must be one of: {", ".join(ORDER_STATUSES)}'}, status=status.HTTP_400_BAD_REQUEST)

    with transaction.atomic():
        order = Order.objects.select_for_update().get(pk=order.pk)
        old_status = order.status
        if old_status == 'cancelled' and new_status != 'cancelled':
            # stock was already returned on cancellation
            return Response({'error': 'Cancelled orders cannot be reopened'}, status=status.HTTP_400_BAD_REQUEST)
        if new_status == 'cancelled' and old_status != 'cancelled':
            restore_inventory(order)
        order.status = new_status
        order.save(update_fields=['status', 'updated_at'])

    create_audit_log(
        request=request,
        action='order_status',
        model_name='Order',
        object_id=order.pk,
        object_reference=order.order_number,
        changes={'status': {'old': old_status, 'new': new_status}},
    )
    logger.info(f"Order {order.order_number} status {old_status} -> {new_status} by {request.user.username}")
    return Response(AdminOrderSerializer(order).data)
