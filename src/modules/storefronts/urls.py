from django.urls import path

from modules.storefronts.views import ShopifyOrderWebhookView, StorefrontSyncView

urlpatterns = [
    path(
        "webhooks/shopify/orders/",
        ShopifyOrderWebhookView.as_view(),
        name="shopify-order-webhook",
    ),
    path("sync/", StorefrontSyncView.as_view(), name="storefront-sync"),
]
