from decimal import Decimal
from rest_framework import serializers
from backend.core.serializers import UserSummarySerializer
from .models import Listing


class ListingSerializer(serializers.ModelSerializer):
    seller = UserSummarySerializer(source='user', read_only=True)
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0'))

    class Meta:
        model = Listing
        fields = [
            'id', 'seller', 'title', 'description', 'price', 'listing_type', 'condition', 'image_url',
            'is_closeout', 'is_trade_available', 'available_quantity', 'created_at', 'updated_at',
        ]
        read_only_fields = ['created_at', 'updated_at']
