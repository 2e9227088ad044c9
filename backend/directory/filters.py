import django_filters
from django.contrib.auth import get_user_model
from django.db.models import Q

User = get_user_model()


class UserFilter(django_filters.FilterSet):
    """Directory search over public profiles"""
    q = django_filters.CharFilter(method='filter_search')
    user_type = django_filters.CharFilter(method='filter_user_type')
    location = django_filters.CharFilter(field_name='location', lookup_expr='icontains')
    premium = django_filters.BooleanFilter(field_name='is_premium')

    class Meta:
        model = User
        fields = ['q', 'user_type', 'location', 'premium']

    def filter_search(self, queryset, name, value):
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(full_name__icontains=value) |
            Q(username__icontains=value) |
            Q(company__icontains=value) |
            Q(bio__icontains=value)
        )

    def filter_user_type(self, queryset, name, value):
        # A professional is listed under both their primary and secondary type
        return queryset.filter(Q(user_type=value) | Q(secondary_type=value))
