"""Order domain constants.

Status vocabularies for the order and for each production station, the
regional storefronts orders come from, and the limits manual entry applies.
"""

from django.db import models


class OrderStatus(models.TextChoices):
    PENDING = "Pending", "Pending"
    IN_PROGRESS = "In Progress", "In Progress"
    COMPLETED = "Completed", "Completed"


class CuttingStatus(models.TextChoices):
    """Frame-cutting and mesh-cutting station status."""

    PENDING = "Pending", "Pending"
    COMPLETE = "Complete", "Complete"


class QualityStatus(models.TextChoices):
    PENDING = "Pending", "Pending"
    READY_TO_PACKAGE = "Ready to Package", "Ready to Package"
    PACKED = "Packed", "Packed"


class StoreKey(models.TextChoices):
    NL = "nl", "Netherlands"
    DE = "de", "Germany"
    UK = "uk", "United Kingdom"
    FR = "fr", "France"
    DK = "dk", "Denmark"


class OrderSource(models.TextChoices):
    SHOPIFY = "shopify", "Shopify"
    MANUAL = "manual", "Manual"


STATUS_FIELDS = ("frame_cutting_status", "mesh_cutting_status", "quality_status")

MIN_DIMENSION_CM = 10
MAX_DIMENSION_CM = 500

ORDER_NUMBER_MAX_RETRIES = 5
