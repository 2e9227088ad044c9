from rest_framework import serializers
from backend.core.serializers import UserSummarySerializer
from backend.gemstones.serializers import GemstoneSummarySerializer
from .models import Cart, CartItem, Order, OrderItem


class CartItemSerializer(serializers.ModelSerializer):
    gemstone = GemstoneSummarySerializer(read_only=True)
    line_total = serializers.SerializerMethodField()

    class Meta:
        model = CartItem
        fields = ['id', 'gemstone', 'quantity', 'line_total', 'created_at']

    def get_line_total(self, obj):
        return str(obj.get_line_total())


class CartSerializer(serializers.ModelSerializer):
    items = serializers.SerializerMethodField()
    subtotal = serializers.SerializerMethodField()
    item_count = serializers.SerializerMethodField()

    class Meta:
        model = Cart
        fields = ['id', 'items', 'subtotal', 'item_count', 'updated_at']

    def get_items(self, obj):
        return CartItemSerializer(obj.items.select_related('gemstone'), many=True).data

    def get_subtotal(self, obj):
        return str(obj.get_subtotal())

    def get_item_count(self, obj):
        return obj.get_item_count()


class CartItemCreateSerializer(serializers.Serializer):
    gemstone_id = serializers.IntegerField()
    quantity = serializers.IntegerField(min_value=1, default=1)


class CartItemUpdateSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1)


class CheckoutSerializer(serializers.Serializer):
    shipping_address = serializers.CharField(max_length=255)
    shipping_city = serializers.CharField(max_length=100)
    shipping_state = serializers.CharField(max_length=100)
    shipping_zip = serializers.CharField(max_length=20)
    shipping_country = serializers.CharField(max_length=100)
    payment_method = serializers.CharField(max_length=50)


class OrderItemSerializer(serializers.ModelSerializer):
    gemstone = GemstoneSummarySerializer(read_only=True)
    line_total = serializers.SerializerMethodField()

    class Meta:
        model = OrderItem
        fields = ['id', 'gemstone', 'quantity', 'price', 'line_total']

    def get_line_total(self, obj):
        return str(obj.get_line_total())


class OrderSerializer(serializers.ModelSerializer):
    items = OrderItemSerializer(many=True, read_only=True)
    order_number = serializers.CharField(read_only=True)

    class Meta:
        model = Order
        fields = [
            'id', 'order_number', 'status', 'total_amount', 'shipping_address', 'shipping_city',
            'shipping_state', 'shipping_zip', 'shipping_country', 'payment_method', 'items',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields


class AdminOrderSerializer(OrderSerializer):
    user = UserSummarySerializer(read_only=True)

    class Meta(OrderSerializer.Meta):
        fields = OrderSerializer.Meta.fields + ['user']
        read_only_fields = fields
