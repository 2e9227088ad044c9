from django.urls import path
from .views import (
    cart_detail, cart_item_add, cart_item_detail,
    order_list_create, checkout, order_detail, order_cancel,
    admin_order_list, admin_order_update,
)

urlpatterns = [
    # Cart endpoints
    path('cart/', cart_detail, name='cart-detail'),
    path('cart/items/', cart_item_add, name='cart-item-add'),
    path('cart/items/<int:pk>/', cart_item_detail, name='cart-item-detail'),

    # Order endpoints
    path('orders/', order_list_create, name='order-list-create'),
    path('checkout/', checkout, name='checkout'),
    path('orders/<int:pk>/', order_detail, name='order-detail'),
    path('orders/<int:pk>/cancel/', order_cancel, name='order-cancel'),

    # Admin endpoints
    path('admin/orders/', admin_order_list, name='admin-order-list'),
    path('admin/orders/<int:pk>/', admin_order_update, name='admin-order-update'),
]
