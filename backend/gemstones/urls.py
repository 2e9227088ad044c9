from django.urls import path
from .views import (
    category_list_create, category_detail, category_gemstones,
    supplier_list_create, supplier_detail, supplier_gemstones,
    gemstone_list_create, gemstone_detail,
)

urlpatterns = [
    path('gemstone-categories/', category_list_create, name='gemstone-category-list-create'),
    path('gemstone-categories/<int:pk>/', category_detail, name='gemstone-category-detail'),
    path('gemstone-categories/<int:pk>/gemstones/', category_gemstones, name='gemstone-category-gemstones'),
    path('suppliers/', supplier_list_create, name='supplier-list-create'),
    path('suppliers/<int:pk>/', supplier_detail, name='supplier-detail'),
    path('suppliers/<int:pk>/gemstones/', supplier_gemstones, name='supplier-gemstones'),
    path('gemstones/', gemstone_list_create, name='gemstone-list-create'),
    path('gemstones/<int:pk>/', gemstone_detail, name='gemstone-detail'),
]
