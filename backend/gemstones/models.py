from decimal import Decimal
from django.core.validators import MinValueValidator
from django.db import models


class Supplier(models.Model):
    """Gemstone supplier whose stones are listed in the marketplace"""
    name = models.CharField(max_length=255)
    logo = models.URLField(max_length=500, blank=True, null=True)
    website = models.URLField(max_length=500, blank=True, null=True)
    description = models.TextField(blank=True, default='')
    location = models.CharField(max_length=255, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'suppliers'
        ordering = ['name']

    def __str__(self):
        return self.name


class GemstoneCategory(models.Model):
    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True, default='')
    image_url = models.URLField(max_length=500, blank=True, null=True)

    class Meta:
        db_table = 'gemstone_categories'
        ordering = ['name']
        verbose_name_plural = 'gemstone categories'

    def __str__(self):
        return self.name


class Gemstone(models.Model):
    """Catalog stone sold through the cart and checkout"""
    supplier = models.ForeignKey(Supplier, on_delete=models.CASCADE, related_name='gemstones')
    category = models.ForeignKey(GemstoneCategory, on_delete=models.PROTECT, related_name='gemstones')
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default='')
    price = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(Decimal('0'))])
    carat_weight = models.DecimalField(max_digits=8, decimal_places=2, blank=True, null=True)
    color = models.CharField(max_length=100, blank=True, null=True)
    clarity = models.CharField(max_length=100, blank=True, null=True)
    cut = models.CharField(max_length=100, blank=True, null=True)
    shape = models.CharField(max_length=100, blank=True, null=True)
    origin = models.CharField(max_length=100, blank=True, null=True)
    certification = models.CharField(max_length=255, blank=True, null=True)
    image_url = models.URLField(max_length=500, blank=True, null=True)
    inventory = models.PositiveIntegerField(default=1)
    is_available = models.BooleanField(default=True)
    is_featured = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'gemstones'
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['is_available', 'is_featured'], name='gemstones_avail_feat_idx'),
        ]

    def __str__(self):
        return self.name
