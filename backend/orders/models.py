from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from backend.gemstones.models import Gemstone


class Cart(models.Model):
    """Gemstone shopping cart; one per user"""
    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='cart')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'carts'

    def __str__(self):
        return f"Cart of {self.user}"

    def get_subtotal(self):
        return sum((item.get_line_total() for item in self.items.select_related('gemstone')), Decimal('0.00'))

    def get_item_count(self):
        return sum(item.quantity for item in self.items.all())


class CartItem(models.Model):
    cart = models.ForeignKey(Cart, on_delete=models.CASCADE, related_name='items')
    gemstone = models.ForeignKey(Gemstone, on_delete=models.CASCADE, related_name='cart_items')
    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'cart_items'
        ordering = ['created_at', 'id']
        unique_together = ['cart', 'gemstone']

    def __str__(self):
        return f"{self.quantity} x {self.gemstone}"

    def get_line_total(self):
        return self.gemstone.price * self.quantity


class Order(models.Model):
    STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('processing', 'Processing'),
        ('shipped', 'Shipped'),
        ('delivered', 'Delivered'),
        ('cancelled', 'Cancelled'),
    ]

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='orders')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='pending')
    total_amount = models.DecimalField(max_digits=12, decimal_places=2)
    shipping_address = models.CharField(max_length=255)
    shipping_city = models.CharField(max_length=100)
    shipping_state = models.CharField(max_length=100)
    shipping_zip = models.CharField(max_length=20)
    shipping_country = models.CharField(max_length=100)
    payment_method = models.CharField(max_length=50)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'orders'
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['status'], name='orders_status_idx'),
        ]

    def __str__(self):
        return self.order_number

    @property
    def order_number(self):
        return f"ORD-{self.pk:06d}" if self.pk else "ORD-NEW"


class OrderItem(models.Model):
    """Order line; price is the unit price at checkout time"""
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='items')
    gemstone = models.ForeignKey(Gemstone, on_delete=models.PROTECT, related_name='order_items')
    quantity = models.PositiveIntegerField()
    price = models.DecimalField(max_digits=12, decimal_places=2)

    class Meta:
        db_table = 'order_items'
        ordering = ['id']

    def __str__(self):
        return f"{self.quantity} x {self.gemstone} @ {self.price}"

    def get_line_total(self):
        return self.price * self.quantity
