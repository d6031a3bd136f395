import django_filters

from modules.orders.dtos import normalize_store_key
from modules.products.models import Product


class ProductFilter(django_filters.FilterSet):
    q = django_filters.CharFilter(field_name="title", lookup_expr="icontains")
    store = django_filters.CharFilter(method="filter_store")
    status = django_filters.CharFilter(field_name="status", lookup_expr="iexact")
    vendor = django_filters.CharFilter(field_name="vendor", lookup_expr="iexact")

    class Meta:
        model = Product
        fields = ["q", "store", "status", "vendor"]

    def filter_store(self, queryset, name, value):
        return queryset.filter(store_key=normalize_store_key(value))
