from django.urls import path
from .views import listing_list_create, my_listings, listing_detail

urlpatterns = [
    path('marketplace/', listing_list_create, name='listing-list-create'),
    path('marketplace/mine/', my_listings, name='listing-mine'),
    path('marketplace/<int:pk>/', listing_detail, name='listing-detail'),
]
