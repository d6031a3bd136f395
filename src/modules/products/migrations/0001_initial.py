import uuid6
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
                    models.UUIDField(
                        default=uuid6.uuid7,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "store_key",
                    models.CharField(
                        choices=[
                            ("nl", "Netherlands"),
                            ("de", "Germany"),
                            ("uk", "United Kingdom"),
                            ("fr", "France"),
                            ("dk", "Denmark"),
                        ],
                        max_length=2,
                    ),
                ),
                (
                    "external_id",
                    models.CharField(blank=True, max_length=64, null=True, unique=True),
                ),
                ("handle", models.CharField(blank=True, default="", max_length=255)),
                ("title", models.CharField(max_length=255)),
                ("status", models.CharField(blank=True, default="", max_length=32)),
                (
                    "product_type",
                    models.CharField(blank=True, default="", max_length=255),
                ),
                ("vendor", models.CharField(blank=True, default="", max_length=255)),
                ("tags", models.JSONField(blank=True, default=list)),
                ("images", models.JSONField(blank=True, default=list)),
                ("variants", models.JSONField(blank=True, default=list)),
                ("options", models.JSONField(blank=True, default=list)),
                ("raw", models.JSONField(blank=True, default=dict)),
            ],
            options={
                "db_table": "products",
                "ordering": ["-updated_at", "-id"],
                "indexes": [
                    models.Index(fields=["store_key"], name="products_store_idx"),
                    models.Index(fields=["handle"], name="products_handle_idx"),
                ],
            },
        ),
    ]
