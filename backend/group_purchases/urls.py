from django.urls import path
from .views import (
    group_purchase_list_create, group_purchase_detail, group_purchase_join,
    group_purchase_leave, my_participation_update, group_purchase_cancel, my_group_purchases,
)

urlpatterns = [
    path('group-purchases/', group_purchase_list_create, name='group-purchase-list-create'),
    path('group-purchases/<int:pk>/', group_purchase_detail, name='group-purchase-detail'),
    path('group-purchases/<int:pk>/join/', group_purchase_join, name='group-purchase-join'),
    path('group-purchases/<int:pk>/leave/', group_purchase_leave, name='group-purchase-leave'),
    path('group-purchases/<int:pk>/participants/me/', my_participation_update, name='group-purchase-participation'),
    path('group-purchases/<int:pk>/cancel/', group_purchase_cancel, name='group-purchase-cancel'),
    path('me/group-purchases/', my_group_purchases, name='my-group-purchases'),
]
