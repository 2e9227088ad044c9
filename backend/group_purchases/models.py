from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Sum


class GroupPurchase(models.Model):
    """Pooled order that unlocks a discounted unit price at the target quantity"""
    STATUS_CHOICES = [
        ('open', 'Open'),
        ('fulfilled', 'Fulfilled'),
        ('expired', 'Expired'),
        ('cancelled', 'Cancelled'),
    ]

    creator = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='created_group_purchases')
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default='')
    product_url = models.URLField(max_length=500, blank=True, null=True)
    image_url = models.URLField(max_length=500, blank=True, null=True)
    target_quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    current_quantity = models.PositiveIntegerField(default=0)
    unit_price = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(Decimal('0'))])
    discounted_unit_price = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(Decimal('0'))])
    deadline = models.DateTimeField()
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='open')
    vendor_name = models.CharField(max_length=255, blank=True, null=True)
    vendor_contact = models.CharField(max_length=255, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'group_purchases'
        ordering = ['deadline', 'id']

    def __str__(self):
        return self.title

    def get_progress_percent(self):
        if not self.target_quantity:
            return 0
        return min(100, round(self.current_quantity * 100 / self.target_quantity))

    def recalculate(self):
        """Sync current_quantity with participants and mark fulfilment"""
        total = self.participants.aggregate(total=Sum('quantity'))['total'] or 0
        self.current_quantity = total
        if self.status == 'open' and self.current_quantity >= self.target_quantity:
            self.status = 'fulfilled'
        self.save(update_fields=['current_quantity', 'status', 'updated_at'])


class GroupPurchaseParticipant(models.Model):
    STATUS_CHOICES = [
        ('interested', 'Interested'),
        ('committed', 'Committed'),
        ('paid', 'Paid'),
    ]

    group_purchase = models.ForeignKey(GroupPurchase, on_delete=models.CASCADE, related_name='participants')
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='group_purchase_participations')
    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='interested')
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'group_purchase_participants'
        ordering = ['joined_at', 'id']
        unique_together = ['group_purchase', 'user']

    def __str__(self):
        return f"{self.user} x{self.quantity} in {self.group_purchase}"
