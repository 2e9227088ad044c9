"""Checkout and inventory helpers for gemstone orders"""
import logging
from decimal import Decimal

from django.db import transaction

from backend.gemstones.models import Gemstone
from .models import Cart, Order, OrderItem

logger = logging.getLogger(__name__)


class CheckoutError(Exception):
    pass


def get_or_create_cart(user):
    cart, _ = Cart.objects.get_or_create(user=user)
    return cart


def checkout_cart(user, shipping_data):
    """
    Turn the user's cart into an order.

    Prices are snapshotted onto the order lines, inventory is decremented
    (a gemstone that reaches zero becomes unavailable) and the cart is
    emptied, all in one transaction.
    """
    with transaction.atomic():
        cart = Cart.objects.filter(user=user).first()
        items = list(cart.items.select_related('gemstone')) if cart else []
        if not items:
            raise CheckoutError('Cart is empty')

        gemstone_ids = [item.gemstone_id for item in items]
        gemstones = Gemstone.objects.select_for_update().in_bulk(gemstone_ids)

        total = Decimal('0.00')
        for item in items:
            gemstone = gemstones[item.gemstone_id]
            if not gemstone.is_available:
                raise CheckoutError(f'{gemstone.name} is no longer available')
            if gemstone.inventory < item.quantity:
                raise CheckoutError(
                    f'Only {gemstone.inventory} of {gemstone.name} in stock'
                )
            total += gemstone.price * item.quantity

        order = Order.objects.create(user=user, total_amount=total, **shipping_data)
        for item in items:
            gemstone = gemstones[item.gemstone_id]
            OrderItem.objects.create(
                order=order,
                gemstone=gemstone,
                quantity=item.quantity,
                price=gemstone.price,
            )
            gemstone.inventory -= item.quantity
            if gemstone.inventory == 0:
                gemstone.is_available = False
            gemstone.save(update_fields=['inventory', 'is_available'])

        cart.items.all().delete()

    logger.info(f"Checkout: order {order.order_number} for user {user.username}, total {total}, {len(items)} line(s)")
    return order


def restore_inventory(order):
    """Return an order's quantities to stock (used on cancellation)"""
    with transaction.atomic():
        for item in order.items.select_related('gemstone'):
            gemstone = Gemstone.objects.select_for_update().get(pk=item.gemstone_id)
            if gemstone.inventory == 0:
                # checkout clears availability when stock runs out
                gemstone.is_available = True
            gemstone.inventory += item.quantity
            gemstone.save(update_fields=['inventory', 'is_available'])
