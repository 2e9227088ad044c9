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
            name='Listing',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True, default='')),
                ('price', models.DecimalField(decimal_places=2, max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('listing_type', models.CharField(choices=[('finished_jewelry', 'Finished Jewelry'), ('jewelry_parts', 'Jewelry Parts'), ('chains', 'Chains'), ('equipment', 'Equipment'), ('supplies', 'Supplies'), ('other', 'Other')], default='other', max_length=30)),
                ('condition', models.CharField(blank=True, max_length=50, null=True)),
                ('image_url', models.URLField(blank=True, max_length=500, null=True)),
                ('is_closeout', models.BooleanField(default=False)),
                ('is_trade_available', models.BooleanField(default=False)),
                ('available_quantity', models.PositiveIntegerField(default=1)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='listings', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'marketplace_listings',
                'ordering': ['-created_at', '-id'],
                'indexes': [models.Index(fields=['listing_type'], name='listings_type_idx')],
            },
        ),
    ]
