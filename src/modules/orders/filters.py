import django_filters
from django.db.models.functions import Coalesce

from modules.orders.dtos import normalize_store_key
from modules.orders.models import Order


class OrderFilter(django_filters.FilterSet):
    """Order list filters.

    ``start_date`` / ``end_date`` match the storefront order date
    (``processed_at``), falling back to the ingest time for orders
    without one.
    """

    status = django_filters.CharFilter(field_name="status", lookup_expr="iexact")
    store = django_filters.CharFilter(method="filter_store")
    source = django_filters.CharFilter(field_name="source", lookup_expr="iexact")
    start_date = django_filters.DateFilter(method="filter_start_date")
    end_date = django_filters.DateFilter(method="filter_end_date")

    class Meta:
        model = Order
        fields = ["status", "store", "source", "start_date", "end_date"]

    def filter_store(self, queryset, name, value):
        return queryset.filter(store_key=normalize_store_key(value))

    @staticmethod
    def _with_order_date(queryset):
        if "order_date" in queryset.query.annotations:
            return queryset
        return queryset.annotate(order_date=Coalesce("processed_at", "created_at"))

    def filter_start_date(self, queryset, name, value):
        return self._with_order_date(queryset).filter(order_date__date__gte=value)

    def filter_end_date(self, queryset, name, value):
        return self._with_order_date(queryset).filter(order_date__date__lte=value)
