from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models


class Listing(models.Model):
    """Item for sale in the jewelry-parts marketplace"""
    LISTING_TYPE_CHOICES = [
        ('finished_jewelry', 'Finished Jewelry'),
        ('jewelry_parts', 'Jewelry Parts'),
        ('chains', 'Chains'),
        ('equipment', 'Equipment'),
        ('supplies', 'Supplies'),
        ('other', 'Other'),
    ]

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='listings')
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default='')
    price = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(Decimal('0'))])
    listing_type = models.CharField(max_length=30, choices=LISTING_TYPE_CHOICES, default='other')
    condition = models.CharField(max_length=50, blank=True, null=True)
    image_url = models.URLField(max_length=500, blank=True, null=True)
    is_closeout = models.BooleanField(default=False)
    is_trade_available = models.BooleanField(default=False)
    available_quantity = models.PositiveIntegerField(default=1)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'marketplace_listings'
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['listing_type'], name='listings_type_idx'),
        ]

    def __str__(self):
        return self.title
