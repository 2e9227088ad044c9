import django_filters
from django.db.models import Q
from .models import Gemstone

ORDERING_FIELDS = {
    'price': ['price', 'id'],
    '-price': ['-price', '-id'],
    'name': ['name', 'id'],
    'newest': ['-created_at', '-id'],
}


class GemstoneFilter(django_filters.FilterSet):
    """Marketplace filters for gemstones"""
    q = django_filters.CharFilter(method='filter_search')
    category = django_filters.NumberFilter(field_name='category_id')
    supplier = django_filters.NumberFilter(field_name='supplier_id')
    featured = django_filters.BooleanFilter(field_name='is_featured')
    available = django_filters.BooleanFilter(field_name='is_available')
    min_price = django_filters.NumberFilter(field_name='price', lookup_expr='gte')
    max_price = django_filters.NumberFilter(field_name='price', lookup_expr='lte')
    ordering = django_filters.CharFilter(method='filter_ordering')

    class Meta:
        model = Gemstone
        fields = ['q', 'category', 'supplier', 'featured', 'available', 'min_price', 'max_price', 'ordering']

    def filter_search(self, queryset, name, value):
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(name__icontains=value) |
            Q(description__icontains=value) |
            Q(color__icontains=value) |
            Q(origin__icontains=value)
        )

    def filter_ordering(self, queryset, name, value):
        fields = ORDERING_FIELDS.get(value)
        if not fields:
            return queryset
        return queryset.order_by(*fields)
