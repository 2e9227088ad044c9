from django.urls import path
from .views import inventory_list_create, inventory_detail, user_inventory

urlpatterns = [
    path('inventory/', inventory_list_create, name='inventory-list-create'),
    path('inventory/<int:pk>/', inventory_detail, name='inventory-detail'),
    path('users/<int:user_id>/inventory/', user_inventory, name='user-inventory'),
]
