from __future__ import annotations

from decimal import Decimal

from django.core.management.base import BaseCommand
from django.utils import timezone

from modules.products.models import Product

CATALOG = [
    ("Bohemian Style Rug", "Hand-woven rug for living rooms and bedrooms.",
     "149.99", 30, "Home Decor", "HomeStyle", "rug.jpg", True),
    ("Velvet Throw Pillow", "Soft velvet pillow for sofas and beds.",
     "29.99", 150, "Textiles", "ComfyHome", "pillow.jpg", True),
    ("Waterproof Pet Mat", "Easy-to-clean waterproof mat for pets.",
     "39.99", 80, "Pet Supplies", "PetCare", "petmat.jpg", True),
    ("Modern 3-Seater Sofa", "Three-seater sofa on a solid wooden frame.",
     "799.99", 15, "Furniture", "UrbanLiving", "sofa.jpg", True),
    ("Rustic Wooden Bench", "Reclaimed wood bench for entryways or gardens.",
     "129.99", 25, "Furniture", "HomeStyle", "bench.jpg", True),
    ("Wicker Supla Placemat Set", "Set of six woven wicker placemats.",
     "49.99", 120, "Kitchen & Dining", "DecorArt", "supla.jpg", True),
    ("Abstract Metal Wall Decor", "Metal wall piece with an abstract design.",
     "89.99", 40, "Home Decor", "DecorArt", "walldecor.jpg", True),
    ("Non-Slip Step Rug", "Absorbent bath rug with a non-slip backing.",
     "24.99", 90, "Bath", "ComfyHome", "steprug.jpg", True),
    ("Luxury Cotton Towel Set", "Cotton bath, hand and face towel set.",
     "59.99", 110, "Bath", "ComfyHome", "towel.jpg", True),
    ("Classic Christmas Stocking", "Knitted stocking for the holidays.",
     "19.99", 200, "Seasonal Decor", "HolidayJoy", "stocking.jpg", False),
]


class Command(BaseCommand):
    help = "Seed the product catalog with development data."

    def handle(self, *args, **options):
        self.stdout.write("Seeding development data...")
        created = self._seed_products()
        self.stdout.write(
            self.style.SUCCESS(
                f"Seed completed: products={created}, total={Product.objects.count()}"
            )
        )

    def _seed_products(self) -> int:
        self.stdout.write("Creating products...")
        created = 0
        for name, description, price, stock, category, brand, image, active in CATALOG:
            _, was_created = Product.objects.get_or_create(
                name=name,
                defaults={
                    "description": description,
                    "price": Decimal(price),
                    "stock_quantity": stock,
                    "category": category,
                    "brand": brand,
                    "image_url": f"https://example.com/images/{image}",
                    "is_active": active,
                    "created_at": timezone.now(),
                },
            )
            created += int(was_created)
        self.stdout.write(self.style.SUCCESS("Creating products... Done!"))
        return created
