from decimal import Decimal

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("name", models.CharField(max_length=200)),
                (
                    "description",
                    models.CharField(blank=True, max_length=1000, null=True),
                ),
                (
                    "price",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=18,
                        validators=[
                            django.core.validators.MinValueValidator(Decimal("0.01"))
                        ],
                    ),
                ),
                ("stock_quantity", models.PositiveIntegerField(default=0)),
                (
                    "category",
                    models.CharField(blank=True, max_length=100, null=True),
                ),
                ("brand", models.CharField(blank=True, max_length=50, null=True)),
                (
                    "image_url",
                    models.URLField(blank=True, max_length=500, null=True),
                ),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField()),
                (
                    "updated_at",
                    models.DateTimeField(blank=True, default=None, null=True),
                ),
            ],
            options={
                "db_table": "products",
                "ordering": ["name", "id"],
                "indexes": [
                    models.Index(fields=["name"], name="products_name_idx"),
                    models.Index(fields=["category"], name="products_category_idx"),
                    models.Index(fields=["brand"], name="products_brand_idx"),
                    models.Index(fields=["is_active"], name="products_is_active_idx"),
                    models.Index(
                        fields=["created_at"], name="products_created_at_idx"
                    ),
                    models.Index(
                        fields=["category", "is_active"],
                        name="products_category_active_idx",
                    ),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(price__gt=0),
                        name="products_price_positive",
                    ),
                ],
            },
        ),
    ]
