import django_filters
from django.db.models import Q
from .models import Listing


class ListingFilter(django_filters.FilterSet):
    q = django_filters.CharFilter(method='filter_search')
    type = django_filters.ChoiceFilter(field_name='listing_type', choices=Listing.LISTING_TYPE_CHOICES)
    closeout = django_filters.BooleanFilter(field_name='is_closeout')
    trade = django_filters.BooleanFilter(field_name='is_trade_available')
    seller = django_filters.NumberFilter(field_name='user_id')

    class Meta:
        model = Listing
        fields = ['q', 'type', 'closeout', 'trade', 'seller']

    def filter_search(self, queryset, name, value):
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(Q(title__icontains=value) | Q(description__icontains=value))
