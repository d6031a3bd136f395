"""Product DRF serializers for API output.

Input is validated by the Pydantic DTOs in ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    """Read serializer for the Product resource; ``raw`` is left out."""

    class Meta:
        model = Product
        fields = [
            "id",
            "store_key",
            "external_id",
            "handle",
            "title",
            "status",
            "product_type",
            "vendor",
            "tags",
            "images",
            "variants",
            "options",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
