import django.core.validators
import django.db.models.deletion
import uuid6
from django.db import migrations, models

STATION_STATUS = [("Pending", "Pending"), ("Complete", "Complete")]


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Order",
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
                ("name", models.CharField(max_length=64)),
                ("email", models.EmailField(blank=True, default="", max_length=254)),
                ("note", models.TextField(blank=True, default="")),
                (
                    "customer_first_name",
                    models.CharField(blank=True, default="", max_length=150),
                ),
                (
                    "customer_last_name",
                    models.CharField(blank=True, default="", max_length=150),
                ),
                (
                    "financial_status",
                    models.CharField(blank=True, default="", max_length=32),
                ),
                (
                    "fulfillment_status",
                    models.CharField(blank=True, default="", max_length=32),
                ),
                ("currency", models.CharField(blank=True, default="", max_length=3)),
                (
                    "total_price",
                    models.DecimalField(
                        blank=True, decimal_places=2, max_digits=10, null=True
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("Pending", "Pending"),
                            ("In Progress", "In Progress"),
                            ("Completed", "Completed"),
                        ],
                        default="Pending",
                        max_length=20,
                    ),
                ),
                ("processed_at", models.DateTimeField(blank=True, null=True)),
                ("cancelled_at", models.DateTimeField(blank=True, null=True)),
                ("raw", models.JSONField(blank=True, default=dict)),
                (
                    "source",
                    models.CharField(
                        choices=[("shopify", "Shopify"), ("manual", "Manual")],
                        default="shopify",
                        max_length=10,
                    ),
                ),
            ],
            options={
                "db_table": "orders",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["status"], name="orders_status_idx"),
                    models.Index(fields=["store_key"], name="orders_store_idx"),
                    models.Index(fields=["-created_at"], name="orders_created_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=["store_key", "name"],
                        name="orders_unique_store_name",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="LineItem",
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
                ("external_id", models.CharField(max_length=64)),
                ("title", models.CharField(blank=True, default="", max_length=255)),
                ("sku", models.CharField(blank=True, default="", max_length=64)),
                (
                    "quantity",
                    models.PositiveIntegerField(
                        default=1,
                        validators=[django.core.validators.MinValueValidator(1)],
                    ),
                ),
                ("position", models.PositiveIntegerField(default=0)),
                ("width", models.FloatField(default=0.0)),
                ("height", models.FloatField(default=0.0)),
                ("profile_color", models.CharField(default="-", max_length=64)),
                ("orientation", models.CharField(blank=True, default="", max_length=64)),
                (
                    "installation_type",
                    models.CharField(blank=True, default="", max_length=64),
                ),
                (
                    "threshold_type",
                    models.CharField(blank=True, default="", max_length=64),
                ),
                ("mesh_type", models.CharField(blank=True, default="", max_length=64)),
                ("curtain_type", models.CharField(blank=True, default="", max_length=64)),
                ("fabric_color", models.CharField(blank=True, default="", max_length=64)),
                ("closure_type", models.CharField(blank=True, default="", max_length=64)),
                (
                    "mounting_type",
                    models.CharField(blank=True, default="", max_length=64),
                ),
                (
                    "frame_cutting_status",
                    models.CharField(
                        choices=STATION_STATUS, default="Pending", max_length=20
                    ),
                ),
                (
                    "mesh_cutting_status",
                    models.CharField(
                        choices=STATION_STATUS, default="Pending", max_length=20
                    ),
                ),
                (
                    "quality_status",
                    models.CharField(
                        choices=[
                            ("Pending", "Pending"),
                            ("Ready to Package", "Ready to Package"),
                            ("Packed", "Packed"),
                        ],
                        default="Pending",
                        max_length=20,
                    ),
                ),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="line_items",
                        to="orders.order",
                    ),
                ),
            ],
            options={
                "db_table": "order_line_items",
                "ordering": ["position", "created_at"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("order", "external_id"),
                        name="line_items_unique_external_id",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Box",
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
                ("length", models.FloatField()),
                ("width", models.FloatField()),
                ("height", models.FloatField()),
                ("weight", models.FloatField()),
                ("item_ids", models.JSONField(blank=True, default=list)),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="boxes",
                        to="orders.order",
                    ),
                ),
            ],
            options={
                "db_table": "order_boxes",
                "ordering": ["created_at"],
            },
        ),
    ]
