"""
Management command to seed the gemstone marketplace with a supplier,
categories and a small sample catalog
"""
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from backend.core.cache_signals import suspend_cache_signals
from backend.core.cache_utils import invalidate_catalog_cache
from backend.gemstones.models import Supplier, GemstoneCategory, Gemstone

SUPPLIER = {
    'name': 'GemsBiz',
    'description': 'Premium supplier of high-quality gemstones for the jewelry industry.',
    'location': 'New York, NY',
    'website': 'https://www.gemsbiz.com',
}

CATEGORIES = [
    ('Diamonds', 'The hardest natural material and the most popular gemstone.'),
    ('Rubies', 'Red variety of corundum, known for their deep red color and durability.'),
    ('Sapphires', 'Blue variety of corundum, highly valued for their color and hardness.'),
    ('Emeralds', 'Green variety of beryl, highly prized for their rich green color.'),
    ('Pearls', 'Organic gems formed inside mollusks, known for their luster and elegance.'),
    ('Opals', 'Hydrated silica prized for its shifting play of color.'),
    ('Tanzanite', 'Blue-violet zoisite found only in northern Tanzania.'),
    ('Aquamarine', 'Sea-blue variety of beryl with excellent clarity.'),
    ('Topaz', 'Hard silicate gem found in a wide range of colors.'),
    ('Garnets', 'Group of silicate minerals, most famous in deep red.'),
]

GEMSTONES = [
    {
        'category': 'Diamonds', 'name': 'Round Brilliant Diamond',
        'description': 'Premium round brilliant cut diamond with exceptional clarity and brilliance.',
        'price': Decimal('5999.99'), 'carat_weight': Decimal('1.50'), 'color': 'D', 'clarity': 'VVS1',
        'cut': 'Excellent', 'shape': 'Round', 'origin': 'South Africa', 'certification': 'GIA',
        'inventory': 5, 'is_featured': True,
    },
    {
        'category': 'Diamonds', 'name': 'Princess Cut Diamond',
        'description': 'Elegant princess cut diamond with exceptional fire and brilliance.',
        'price': Decimal('4299.99'), 'carat_weight': Decimal('1.25'), 'color': 'E', 'clarity': 'VS1',
        'cut': 'Excellent', 'shape': 'Princess', 'origin': 'Botswana', 'certification': 'GIA',
        'inventory': 3, 'is_featured': False,
    },
    {
        'category': 'Rubies', 'name': 'Burmese Ruby',
        'description': "Exquisite Burmese ruby with a vibrant red color known as pigeon's blood.",
        'price': Decimal('8500.00'), 'carat_weight': Decimal('2.05'), 'color': 'Vivid Red', 'clarity': 'VS',
        'cut': 'Oval', 'shape': 'Oval', 'origin': 'Burma (Myanmar)', 'certification': 'GRS',
        'inventory': 2, 'is_featured': True,
    },
    {
        'category': 'Sapphires', 'name': 'Ceylon Blue Sapphire',
        'description': 'Cornflower blue sapphire from Sri Lanka with bright saturation.',
        'price': Decimal('3750.00'), 'carat_weight': Decimal('2.30'), 'color': 'Cornflower Blue', 'clarity': 'VS',
        'cut': 'Cushion', 'shape': 'Cushion', 'origin': 'Sri Lanka', 'certification': 'GRS',
        'inventory': 4, 'is_featured': True,
    },
    {
        'category': 'Emeralds', 'name': 'Colombian Emerald',
        'description': 'Rich green Colombian emerald with classic jardin inclusions.',
        'price': Decimal('6200.00'), 'carat_weight': Decimal('1.80'), 'color': 'Vivid Green', 'clarity': 'SI',
        'cut': 'Emerald', 'shape': 'Octagon', 'origin': 'Colombia', 'certification': 'AGL',
        'inventory': 2, 'is_featured': False,
    },
]


class Command(BaseCommand):
    help = "Seeds the gemstone marketplace with the GemsBiz supplier, categories and sample gemstones"

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Delete all existing gemstones, categories and suppliers first',
        )

    def handle(self, *args, **options):
        with suspend_cache_signals(), transaction.atomic():
            if options['clear']:
                deleted, _ = Gemstone.objects.all().delete()
                GemstoneCategory.objects.all().delete()
                Supplier.objects.all().delete()
                self.stdout.write(self.style.WARNING(f'Cleared catalog ({deleted} gemstones)'))

            supplier, created = Supplier.objects.get_or_create(
                name=SUPPLIER['name'],
                defaults={key: value for key, value in SUPPLIER.items() if key != 'name'},
            )
            if created:
                self.stdout.write(self.style.SUCCESS(f'✓ Created supplier: {supplier.name}'))

            categories = {}
            created_categories = 0
            for name, description in CATEGORIES:
                category, created = GemstoneCategory.objects.get_or_create(
                    name=name, defaults={'description': description}
                )
                categories[name] = category
                if created:
                    created_categories += 1

            created_gemstones = 0
            for data in GEMSTONES:
                data = dict(data)
                category = categories[data.pop('category')]
                _, created = Gemstone.objects.get_or_create(
                    name=data.pop('name'),
                    supplier=supplier,
                    category=category,
                    defaults=data,
                )
                if created:
                    created_gemstones += 1

        invalidate_catalog_cache()

        self.stdout.write(self.style.SUCCESS(
            f'\nSummary: {created_categories} categories created, {created_gemstones} gemstones created'
        ))
