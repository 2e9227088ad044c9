import django.core.validators
import django.db.models.deletion
from decimal import Decimal
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='GroupPurchase',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True, default='')),
                ('product_url', models.URLField(blank=True, max_length=500, null=True)),
                ('image_url', models.URLField(blank=True, max_length=500, null=True)),
                ('target_quantity', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ('current_quantity', models.PositiveIntegerField(default=0)),
                ('unit_price', models.DecimalField(decimal_places=2, max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('discounted_unit_price', models.DecimalField(decimal_places=2, max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('deadline', models.DateTimeField()),
                ('status', models.CharField(choices=[('open', 'Open'), ('fulfilled', 'Fulfilled'), ('expired', 'Expired'), ('cancelled', 'Cancelled')], default='open', max_length=20)),
                ('vendor_name', models.CharField(blank=True, max_length=255, null=True)),
                ('vendor_contact', models.CharField(blank=True, max_length=255, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('creator', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='created_group_purchases', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'group_purchases',
                'ordering': ['deadline', 'id'],
            },
        ),
        migrations.CreateModel(
            name='GroupPurchaseParticipant',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('quantity', models.PositiveIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1)])),
                ('status', models.CharField(choices=[('interested', 'Interested'), ('committed', 'Committed'), ('paid', 'Paid')], default='interested', max_length=20)),
                ('joined_at', models.DateTimeField(auto_now_add=True)),
                ('group_purchase', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='participants', to='group_purchases.grouppurchase')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='group_purchase_participations', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'group_purchase_participants',
                'ordering': ['joined_at', 'id'],
                'unique_together': {('group_purchase', 'user')},
            },
        ),
    ]
