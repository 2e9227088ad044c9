from decimal import Decimal
from rest_framework import serializers
from .models import Supplier, GemstoneCategory, Gemstone


class SupplierSerializer(serializers.ModelSerializer):
    class Meta:
        model = Supplier
        fields = ['id', 'name', 'logo', 'website', 'description', 'location', 'created_at']
        read_only_fields = ['created_at']


class GemstoneCategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = GemstoneCategory
        fields = ['id', 'name', 'description', 'image_url']


class GemstoneSerializer(serializers.ModelSerializer):
    supplier_id = serializers.PrimaryKeyRelatedField(source='supplier', queryset=Supplier.objects.all())
    category_id = serializers.PrimaryKeyRelatedField(source='category', queryset=GemstoneCategory.objects.all())
    supplier_name = serializers.CharField(source='supplier.name', read_only=True)
    category_name = serializers.CharField(source='category.name', read_only=True)
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0'))
    inventory = serializers.IntegerField(min_value=0, required=False)

    class Meta:
        model = Gemstone
        fields = [
            'id', 'supplier_id', 'supplier_name', 'category_id', 'category_name', 'name', 'description',
            'price', 'carat_weight', 'color', 'clarity', 'cut', 'shape', 'origin', 'certification',
            'image_url', 'inventory', 'is_available', 'is_featured', 'created_at',
        ]
        read_only_fields = ['created_at']


class GemstoneSummarySerializer(serializers.ModelSerializer):
    """Gemstone as nested in cart and order lines"""
    class Meta:
        model = Gemstone
        fields = ['id', 'name', 'price', 'carat_weight', 'image_url', 'inventory', 'is_available']
        read_only_fields = fields
