"""Order DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views).
Business logic lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.constants import (
    MAX_DIMENSION_CM,
    MIN_DIMENSION_CM,
    CuttingStatus,
    OrderStatus,
    QualityStatus,
)
from modules.orders.models import Box, LineItem, Order

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class LineItemInputSerializer(serializers.Serializer):
    """Validates one screen in a manual order."""

    external_id = serializers.CharField(required=False, allow_blank=False, max_length=64)
    title = serializers.CharField(required=False, default="", allow_blank=True)
    sku = serializers.CharField(required=False, default="", allow_blank=True)
    quantity = serializers.IntegerField(required=False, default=1, min_value=1)
    width = serializers.FloatField(min_value=MIN_DIMENSION_CM, max_value=MAX_DIMENSION_CM)
    height = serializers.FloatField(min_value=MIN_DIMENSION_CM, max_value=MAX_DIMENSION_CM)
    profile_color = serializers.CharField(required=False, default="-")
    orientation = serializers.CharField(required=False, default="", allow_blank=True)
    installation_type = serializers.CharField(required=False, default="", allow_blank=True)
    threshold_type = serializers.CharField(required=False, default="", allow_blank=True)
    mesh_type = serializers.CharField(required=False, default="", allow_blank=True)
    curtain_type = serializers.CharField(required=False, default="", allow_blank=True)
    fabric_color = serializers.CharField(required=False, default="", allow_blank=True)
    closure_type = serializers.CharField(required=False, default="", allow_blank=True)
    mounting_type = serializers.CharField(required=False, default="", allow_blank=True)


class CreateOrderSerializer(serializers.Serializer):
    store_key = serializers.CharField()
    name = serializers.CharField(required=False, max_length=64)
    email = serializers.EmailField(required=False, default="", allow_blank=True)
    customer_first_name = serializers.CharField(required=False, default="", allow_blank=True)
    customer_last_name = serializers.CharField(required=False, default="", allow_blank=True)
    note = serializers.CharField(required=False, default="", allow_blank=True)
    items = LineItemInputSerializer(many=True, allow_empty=False)


class UpdateOrderSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=OrderStatus.choices, required=False)
    note = serializers.CharField(required=False, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True)
    customer_first_name = serializers.CharField(required=False, allow_blank=True)
    customer_last_name = serializers.CharField(required=False, allow_blank=True)


class ItemStatusChangeSerializer(serializers.Serializer):
    """Partial station-status update.

    A ``role`` key in the body is ignored; the caller's own role is used.
    """

    frame_cutting_status = serializers.ChoiceField(
        choices=CuttingStatus.choices, required=False
    )
    mesh_cutting_status = serializers.ChoiceField(
        choices=CuttingStatus.choices, required=False
    )
    quality_status = serializers.ChoiceField(
        choices=QualityStatus.choices, required=False
    )

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("At least one status field is required.")
        return attrs


class BoxInputSerializer(serializers.Serializer):
    length = serializers.FloatField()
    width = serializers.FloatField()
    height = serializers.FloatField()
    weight = serializers.FloatField()
    item_ids = serializers.ListField(
        child=serializers.CharField(), required=False, default=list
    )

    def validate(self, attrs):
        for name in ("length", "width", "height", "weight"):
            value = attrs.get(name)
            if value is not None and value <= 0:
                raise serializers.ValidationError({name: "Must be greater than zero."})
        return attrs


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class LineItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = LineItem
        fields = [
            "id",
            "external_id",
            "title",
            "sku",
            "quantity",
            "position",
            "width",
            "height",
            "profile_color",
            "orientation",
            "installation_type",
            "threshold_type",
            "mesh_type",
            "curtain_type",
            "fabric_color",
            "closure_type",
            "mounting_type",
            "frame_cutting_status",
            "mesh_cutting_status",
            "quality_status",
        ]
        read_only_fields = fields


class BoxSerializer(serializers.ModelSerializer):
    class Meta:
        model = Box
        fields = ["id", "length", "width", "height", "weight", "item_ids", "created_at"]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Read serializer for orders with nested items and boxes."""

    line_items = LineItemSerializer(many=True, read_only=True)
    boxes = BoxSerializer(many=True, read_only=True)
    customer_name = serializers.CharField(read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "external_id",
            "name",
            "store_key",
            "source",
            "status",
            "email",
            "customer_name",
            "customer_first_name",
            "customer_last_name",
            "note",
            "financial_status",
            "fulfillment_status",
            "currency",
            "total_price",
            "processed_at",
            "cancelled_at",
            "created_at",
            "updated_at",
            "line_items",
            "boxes",
        ]
        read_only_fields = fields


class OrderListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for the order list (no nested relations)."""

    customer_name = serializers.CharField(read_only=True)
    item_count = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            "id",
            "name",
            "store_key",
            "status",
            "customer_name",
            "item_count",
            "processed_at",
            "created_at",
        ]
        read_only_fields = fields

    def get_item_count(self, obj: Order) -> int:
        return len(obj.line_items.all())
